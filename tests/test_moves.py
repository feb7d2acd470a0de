import pytest

from nimlib.core import (
    NO_SPLIT,
    AmountExceedsStackError,
    InvalidAmountError,
    InvalidSplitError,
    MoveError,
    NimRule,
    NimSplit,
    NoMatchingRuleError,
    PlaceAction,
    RuleSet,
    Split,
    SplitNotPermittedError,
    SplitRequiredError,
    TakeAction,
    TakeSize,
    ZeroAmountError,
    apply_move,
    apply_move_unchecked,
    calculate_legal_moves,
    check_move,
    take_list,
)


def test_any_take_lists_every_amount():
    rules = RuleSet([NimRule(TakeSize.any(), Split.NEVER)])

    moves = calculate_legal_moves(rules, 3)

    assert moves == [TakeAction(1), TakeAction(2), TakeAction(3)]
    assert all(move.split == NO_SPLIT for move in moves)


@pytest.mark.parametrize("height", [0, 1, 2, 3, 4, 17, 200])
def test_move_counts(height):
    any_rules = RuleSet([NimRule(TakeSize.any(), Split.NEVER)])
    simple_rules = RuleSet(take_list([1, 2, 3]))

    assert len(calculate_legal_moves(any_rules, height)) == height
    assert len(calculate_legal_moves(simple_rules, height)) == min(height, 3)


def test_exact_take_skipped_when_stack_too_low():
    rules = RuleSet([NimRule(TakeSize.exact(3))])

    assert calculate_legal_moves(rules, 2) == []
    assert calculate_legal_moves(rules, 5) == [TakeAction(3)]


def test_optional_split_lists_plain_take_then_splits():
    rules = RuleSet([NimRule(TakeSize.exact(1), Split.OPTIONAL)])

    moves = calculate_legal_moves(rules, 4)

    assert moves == [TakeAction(1, NO_SPLIT), TakeAction(1, NimSplit.of(1, 2))]


def test_optional_any_ordering():
    rules = RuleSet([NimRule(TakeSize.any(), Split.OPTIONAL)])

    moves = calculate_legal_moves(rules, 4)

    assert moves == [
        TakeAction(1),
        TakeAction(1, NimSplit.of(1, 2)),
        TakeAction(2),
        TakeAction(2, NimSplit.of(1, 1)),
        TakeAction(3),
        TakeAction(4),
    ]


def test_always_split_needs_a_splittable_remainder():
    rules = RuleSet([NimRule(TakeSize.exact(1), Split.ALWAYS)])

    assert calculate_legal_moves(rules, 2) == []
    assert calculate_legal_moves(rules, 5) == [
        TakeAction(1, NimSplit.of(1, 3)),
        TakeAction(1, NimSplit.of(2, 2)),
    ]


def test_duplicates_across_rules_are_kept():
    rules = RuleSet([NimRule(TakeSize.exact(1)), NimRule(TakeSize.any())])

    assert calculate_legal_moves(rules, 2) == [TakeAction(1), TakeAction(1), TakeAction(2)]


def test_empty_stack_has_no_moves():
    rules = RuleSet([NimRule(TakeSize.any(), Split.OPTIONAL), *take_list([1, 2])])

    assert calculate_legal_moves(rules, 0) == []


def test_place_rules_yield_no_moves():
    rules = RuleSet([NimRule(TakeSize.place())])

    assert calculate_legal_moves(rules, 5) == []
    with pytest.raises(NotImplementedError):
        check_move(rules, 5, PlaceAction(1))


def test_split_not_permitted():
    rules = RuleSet([NimRule(TakeSize.exact(2), Split.NEVER)])

    with pytest.raises(SplitNotPermittedError):
        check_move(rules, 4, TakeAction(2, NimSplit.of(1, 1)))


def test_split_required():
    rules = RuleSet([NimRule(TakeSize.exact(1), Split.ALWAYS)])

    with pytest.raises(SplitRequiredError):
        check_move(rules, 4, TakeAction(1))


def test_split_allowed_by_another_rule():
    rules = RuleSet([NimRule(TakeSize.exact(1), Split.NEVER), NimRule(TakeSize.exact(1), Split.ALWAYS)])

    check_move(rules, 4, TakeAction(1))
    check_move(rules, 4, TakeAction(1, NimSplit.of(1, 2)))


def test_zero_amount():
    rules = RuleSet([NimRule(TakeSize.any())])

    with pytest.raises(ZeroAmountError):
        check_move(rules, 4, TakeAction(0))


def test_amount_exceeds_stack():
    rules = RuleSet([NimRule(TakeSize.any())])

    with pytest.raises(AmountExceedsStackError):
        check_move(rules, 2, TakeAction(3))


def test_no_matching_rule():
    rules = RuleSet(take_list([1, 3]))

    with pytest.raises(NoMatchingRuleError):
        check_move(rules, 5, TakeAction(2))


@pytest.mark.parametrize("split", [NimSplit.of(0, 3), NimSplit.of(1, 1), NimSplit.of(2, 2), NimSplit.of(-1, 4)])
def test_invalid_split_arithmetic(split):
    rules = RuleSet([NimRule(TakeSize.exact(1), Split.OPTIONAL)])

    with pytest.raises(InvalidSplitError):
        check_move(rules, 4, TakeAction(1, split))


def test_split_halves_accepted_in_either_order():
    rules = RuleSet([NimRule(TakeSize.exact(1), Split.ALWAYS)])

    check_move(rules, 4, TakeAction(1, NimSplit.of(2, 1)))
    assert apply_move(rules, 4, TakeAction(1, NimSplit.of(2, 1))) == (2, 1)


def test_apply_move_results():
    rules = RuleSet([NimRule(TakeSize.any(), Split.OPTIONAL)])

    assert apply_move(rules, 5, TakeAction(1)) == (4,)
    assert apply_move(rules, 5, TakeAction(5)) == (0,)
    assert apply_move(rules, 5, TakeAction(2, NimSplit.of(1, 2))) == (1, 2)


def _candidate_actions(height):
    for amount in range(0, height + 2):
        yield TakeAction(amount)
        for left in range(0, height + 1):
            yield TakeAction(amount, NimSplit.of(left, height - amount - left))


@pytest.mark.parametrize(
    "rules",
    [
        RuleSet([NimRule(TakeSize.exact(2), Split.NEVER)]),
        RuleSet([NimRule(TakeSize.any(), Split.OPTIONAL)]),
        RuleSet([NimRule(TakeSize.exact(1), Split.ALWAYS), NimRule(TakeSize.exact(3), Split.NEVER)]),
    ],
)
def test_apply_move_agrees_with_check_move(rules):
    for height in range(0, 7):
        legal = calculate_legal_moves(rules, height)
        for action in _candidate_actions(height):
            try:
                check_move(rules, height, action)
            except MoveError as expected:
                with pytest.raises(type(expected)):
                    apply_move(rules, height, action)
                continue
            assert apply_move(rules, height, action) == apply_move_unchecked(height, action)
            parts = action.split.parts
            canonical = action if parts is None or parts[0] <= parts[1] else TakeAction(
                action.amount, NimSplit.of(parts[1], parts[0])
            )
            assert canonical in legal


def test_negative_height_rejected():
    rules = RuleSet([NimRule(TakeSize.any())])

    with pytest.raises(ValueError):
        calculate_legal_moves(rules, -1)


def test_invalid_take_sizes():
    with pytest.raises(ValueError):
        TakeSize.exact(0)
    with pytest.raises(ValueError):
        TakeSize.exact(1.5)
    with pytest.raises(ValueError):
        TakeSize.exact(True)


def test_fractional_height_rejected():
    rules = RuleSet([NimRule(TakeSize.any())])

    with pytest.raises(ValueError):
        calculate_legal_moves(rules, 2.7)
    with pytest.raises(ValueError):
        check_move(rules, 2.7, TakeAction(1))


@pytest.mark.parametrize("amount", [1.5, 2.0, True, "1"])
def test_non_integer_amount_rejected(amount):
    rules = RuleSet([NimRule(TakeSize.any(), Split.OPTIONAL)])

    with pytest.raises(InvalidAmountError):
        check_move(rules, 4, TakeAction(amount))
    with pytest.raises(InvalidAmountError):
        apply_move(rules, 4, TakeAction(amount))


def test_non_integer_split_parts_rejected():
    rules = RuleSet([NimRule(TakeSize.exact(1), Split.OPTIONAL)])

    with pytest.raises(InvalidSplitError):
        check_move(rules, 4, TakeAction(1, NimSplit((1.5, 1.5))))
    with pytest.raises(ValueError):
        NimSplit.of(1.5, 1.5)
