"""Tests for matchup selection."""

import random
from collections import Counter

import pytest

from rankings.core.exceptions import InsufficientCandidates
from rankings.services.matchup_service import MatchupSelector


class FixedOrderRng:
    """Stands in for the ordering generator with a fixed draw."""

    def __init__(self, value: float):
        self.value = value
        self.calls = 0

    def random(self) -> float:
        self.calls += 1
        return self.value


@pytest.mark.parametrize("candidates", [[], [1]])
def test_needs_two_candidates(candidates):
    with pytest.raises(InsufficientCandidates) as exc_info:
        MatchupSelector().select_pair(candidates)
    assert exc_info.value.message == "Not enough companies for matchup"


def test_pair_is_distinct():
    selector = MatchupSelector(draw_rng=random.Random(7), order_rng=random.Random(8))
    for _ in range(500):
        first, second = selector.select_pair([1, 2, 3])
        assert first != second


def test_two_candidates_always_returns_both():
    selector = MatchupSelector(draw_rng=random.Random(1), order_rng=random.Random(2))
    for _ in range(50):
        assert set(selector.select_pair(["a", "b"])) == {"a", "b"}


def test_unordered_pairs_are_uniform():
    """Each of the C(4,2)=6 pairs shows up about 1/6 of the time."""
    selector = MatchupSelector(draw_rng=random.Random(1234), order_rng=random.Random(4321))
    draws = 12_000
    counts = Counter(frozenset(selector.select_pair([1, 2, 3, 4])) for _ in range(draws))

    assert len(counts) == 6
    for count in counts.values():
        assert abs(count / draws - 1 / 6) < 0.02


def test_each_candidate_shown_first_about_half_the_time():
    selector = MatchupSelector(draw_rng=random.Random(99), order_rng=random.Random(100))
    draws = 10_000
    first_positions = Counter(selector.select_pair(["x", "y"])[0] for _ in range(draws))
    assert abs(first_positions["x"] / draws - 0.5) < 0.03


def test_order_uses_its_own_generator():
    """Forcing the order generator flips the pair without touching the draw."""
    keep = MatchupSelector(draw_rng=random.Random(5), order_rng=FixedOrderRng(0.9))
    swap = MatchupSelector(draw_rng=random.Random(5), order_rng=FixedOrderRng(0.1))

    kept = keep.select_pair(list(range(10)))
    swapped = swap.select_pair(list(range(10)))

    assert swapped == (kept[1], kept[0])
    assert keep.order_rng.calls == 1


async def test_select_matchup_filters_by_category(db, make_company):
    ai = [await make_company(category="ai") for _ in range(2)]
    await make_company(category="fintech")

    selector = MatchupSelector(draw_rng=random.Random(3), order_rng=random.Random(4))
    first, second = await selector.select_matchup(db, "ai")
    assert {first.id, second.id} == {c.id for c in ai}


async def test_select_matchup_with_one_company_in_category(db, make_company):
    await make_company(category="ai")
    await make_company(category="fintech")

    with pytest.raises(InsufficientCandidates):
        await MatchupSelector().select_matchup(db, "ai")
