"""Tests for the Elo rating update."""

import pytest

from rankings.services.elo import K_FACTOR, compute_update, expected_score


@pytest.mark.parametrize(
    "winner, loser, expected",
    [
        (1500, 1500, (1516, 1484, 16, -16)),
        (1600, 1400, (1607, 1392, 7, -8)),
        (1400, 1600, (1424, 1575, 24, -25)),
    ],
)
def test_exact_updates(winner, loser, expected):
    assert tuple(compute_update(winner, loser)) == expected


def test_truncates_toward_zero_for_negative_ratings():
    """A loser pushed below zero is truncated up, not floored down."""
    update = compute_update(100, 0)
    assert update.new_winner_rating == 111
    assert update.new_loser_rating == -11
    assert update.loser_delta == -11


def test_expected_scores_sum_to_one():
    for a, b in [(1500, 1500), (1800, 1200), (0, 2400)]:
        assert expected_score(a, b) + expected_score(b, a) == pytest.approx(1.0)


@pytest.mark.parametrize("winner, loser", [(1500, 1500), (2400, 100), (100, 2400), (1000, 999), (-50, 30)])
def test_delta_bounds(winner, loser):
    """Winner never loses points, loser never gains, and each moves by at most K."""
    update = compute_update(winner, loser)
    assert 0 <= update.winner_delta <= K_FACTOR
    assert -K_FACTOR <= update.loser_delta <= 0


def test_upset_moves_more_than_expected_win():
    favourite_wins = compute_update(1700, 1300)
    underdog_wins = compute_update(1300, 1700)
    assert underdog_wins.winner_delta > favourite_wins.winner_delta


def test_expected_score_falls_as_opponent_strengthens():
    scores = [expected_score(1500, 1500 + gap) for gap in range(-800, 801, 50)]
    assert all(a > b for a, b in zip(scores, scores[1:]))


@pytest.mark.parametrize("winner, loser", [(1500, 1500), (2400, 100), (100, 2400), (0, 0), (-300, 50)])
def test_deltas_match_new_ratings(winner, loser):
    update = compute_update(winner, loser)
    assert update.new_winner_rating - winner == update.winner_delta
    assert update.new_loser_rating - loser == update.loser_delta
