"""Tests for weighted random selection."""

from collections import Counter

import pytest
from random_picker import (
    ParseError,
    PickRequest,
    RandomItem,
    UnselectableDefinitionError,
    WeightOverflowError,
    parse_definition,
    pick,
    sample,
    select_index,
)
from random_picker.core import INT64_MAX


class TestSelectIndex:
    def test_walks_cumulative_weights(self, fixed_random):
        """Draw points map onto items by cumulative weight."""
        pool = [RandomItem("a", 1), RandomItem("b", 3), RandomItem("c", 2)]
        assert select_index(pool, fixed_random(0)) == 0
        assert select_index(pool, fixed_random(1)) == 1
        assert select_index(pool, fixed_random(3)) == 1
        assert select_index(pool, fixed_random(4)) == 2
        assert select_index(pool, fixed_random(5)) == 2

    def test_draws_below_total_weight(self, fixed_random):
        """The draw range is [0, total weight)."""
        stub = fixed_random(0)
        select_index([RandomItem("a", 2), RandomItem("b", 5)], stub)
        assert stub.calls == [7]

    def test_zero_weight_skipped(self, fixed_random):
        """A zero-weight item is stepped over even at draw point 0."""
        pool = [RandomItem("a", 0), RandomItem("b", 1)]
        assert select_index(pool, fixed_random(0)) == 1

    def test_all_zero_weight(self):
        """Zero total weight cannot be drawn from."""
        with pytest.raises(UnselectableDefinitionError):
            select_index(parse_definition("a:0;b:0"))

    def test_empty_pool(self):
        """An empty pool has zero total weight."""
        with pytest.raises(UnselectableDefinitionError):
            select_index([])

    def test_weight_overflow(self):
        """Weights adding up past the 64-bit range are refused."""
        pool = [RandomItem("a", INT64_MAX), RandomItem("b", 1)]
        with pytest.raises(WeightOverflowError):
            select_index(pool)

    def test_max_total_weight(self, rng):
        """A total of exactly the 64-bit maximum is fine."""
        pool = [RandomItem("a", INT64_MAX - 1), RandomItem("b", 1)]
        assert select_index(pool, rng) in (0, 1)


class TestSample:
    def test_zero_weight_never_selected(self, rng):
        """Items with weight 0 never come up."""
        items = parse_definition("never:0;b:1;c:5")
        values = sample(items, result_count=2000, rng=rng)
        assert "never" not in values
        assert set(values) == {"b", "c"}

    def test_weights_shape_distribution(self, rng):
        """Draw frequencies follow the weights."""
        values = sample(parse_definition("a:1;b:3"), result_count=4000, rng=rng)
        share = Counter(values)["b"] / len(values)
        assert 0.7 < share < 0.8

    def test_with_replacement_by_default(self, rng):
        """Without a cap the same item can be drawn every time."""
        assert sample(parse_definition("only"), result_count=5, rng=rng) == ["only"] * 5

    def test_cap_limits_single_item(self, rng):
        """One item capped at 2 yields only 2 of 5 requested values."""
        values = sample([RandomItem("a", 1)], result_count=5, max_repeat_count=2, rng=rng)
        assert values == ["a", "a"]

    def test_cap_one_is_without_replacement(self, rng):
        """A cap of 1 draws each entry at most once."""
        values = sample(parse_definition("a;b;c"), result_count=3, max_repeat_count=1, rng=rng)
        assert sorted(values) == ["a", "b", "c"]

    def test_cap_counts_each_item(self, rng):
        """Every item comes up exactly cap times when the pool is exhausted."""
        values = sample(parse_definition("a;b:5"), result_count=10, max_repeat_count=2, rng=rng)
        assert Counter(values) == {"a": 2, "b": 2}

    def test_cap_applies_per_literal_entry(self, rng):
        """Repeated values in the definition each get their own cap."""
        values = sample(parse_definition("x;x"), result_count=10, max_repeat_count=2, rng=rng)
        assert values == ["x"] * 4

    def test_zero_cap_means_unlimited(self, rng):
        """A cap of 0 behaves like no cap."""
        values = sample(parse_definition("a"), result_count=3, max_repeat_count=0, rng=rng)
        assert values == ["a"] * 3

    def test_zero_result_count(self, rng):
        """Asking for nothing returns nothing."""
        assert sample(parse_definition("a;b"), result_count=0, rng=rng) == []

    def test_does_not_mutate_input(self, rng):
        """The caller's item list is left alone."""
        items = parse_definition("a;b;c")
        sample(items, result_count=3, max_repeat_count=1, rng=rng)
        assert [i.value for i in items] == ["a", "b", "c"]

    def test_capped_zero_weight_remainder(self, rng):
        """Once only zero-weight entries remain, sampling fails loudly."""
        with pytest.raises(UnselectableDefinitionError):
            sample(parse_definition("a;z:0"), result_count=3, max_repeat_count=1, rng=rng)


class TestPick:
    def test_values(self, rng):
        """A valid request yields values and no error."""
        outcome = pick(PickRequest("a:1;b:1", result_count=3), rng)
        assert outcome.ok
        assert len(outcome.values) == 3
        assert not outcome.short

    def test_short_result(self, rng):
        """Running out under a cap is reported, not an error."""
        outcome = pick(PickRequest("a", result_count=5, max_repeat_count=2), rng)
        assert outcome.ok
        assert outcome.values == ["a", "a"]
        assert outcome.short

    def test_parse_error_value(self):
        """Malformed weights come back as an error value."""
        outcome = pick(PickRequest("a:x"))
        assert not outcome.ok
        assert isinstance(outcome.error, ParseError)
        assert outcome.values == []

    def test_overflow_error_value(self):
        """Overflow comes back as an error value."""
        outcome = pick(PickRequest(f"a:{INT64_MAX};b:{INT64_MAX}"))
        assert isinstance(outcome.error, WeightOverflowError)

    def test_zero_weight_error_value(self):
        """All-zero definitions come back as an error value."""
        outcome = pick(PickRequest("a:0;b:0"))
        assert isinstance(outcome.error, UnselectableDefinitionError)


class TestLargeRepeatCap:
    def test_huge_cap_small_count(self, rng):
        """A cap far beyond the result count does not expand the pool."""
        values = sample(parse_definition("a;b"), result_count=1, max_repeat_count=10**12, rng=rng)
        assert len(values) == 1
        assert values[0] in ("a", "b")

    def test_huge_cap_through_pick(self, rng):
        """pick handles a huge cap like any other."""
        outcome = pick(PickRequest("a;b", result_count=3, max_repeat_count=10**12), rng)
        assert outcome.ok
        assert len(outcome.values) == 3

    def test_odds_follow_remaining_copies(self, fixed_random):
        """Each draw uses up one copy of the drawn entry, as in a repeated pool."""
        stub = fixed_random(0, 0, 0)
        values = sample(parse_definition("a;b:2"), result_count=3, max_repeat_count=10, rng=stub)
        # a;b:2 repeated 10 times weighs 30; every drawn 'a' removes weight 1
        assert stub.calls == [30, 29, 28]
        assert values == ["a", "a", "a"]

    def test_exhausted_entry_leaves_the_pool(self, fixed_random):
        """An entry whose copies are used up is never drawn again."""
        stub = fixed_random(0, 0, 0)
        values = sample(parse_definition("a;b"), result_count=3, max_repeat_count=2, rng=stub)
        assert values[:2] == ["a", "a"]
        assert values[2] == "b"
        assert stub.calls == [4, 3, 2]

    def test_overflow_counts_copies(self):
        """The repeated pool's weight must still fit the 64-bit range."""
        with pytest.raises(WeightOverflowError):
            sample([RandomItem("a", INT64_MAX)], result_count=1, max_repeat_count=2)
