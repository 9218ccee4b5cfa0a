"""Elo rating update for a single head-to-head outcome."""

from typing import NamedTuple

K_FACTOR = 32.0


class EloUpdate(NamedTuple):
    """New ratings for both sides and the change each one received."""

    new_winner_rating: int
    new_loser_rating: int
    winner_delta: int
    loser_delta: int


def expected_score(rating: int, opponent_rating: int) -> float:
    """Probability that ``rating`` beats ``opponent_rating``."""
    return 1.0 / (1.0 + 10 ** ((opponent_rating - rating) / 400))


def compute_update(winner_rating: int, loser_rating: int) -> EloUpdate:
    """
    Apply one win for ``winner_rating`` over ``loser_rating``.

    New ratings are truncated toward zero, not rounded, so the two deltas
    are not always symmetric. Ratings have no floor and may go negative.
    Callers must reject a company voting against itself beforehand.
    """
    expected_winner = expected_score(winner_rating, loser_rating)
    expected_loser = 1.0 - expected_winner

    new_winner_rating = int(winner_rating + K_FACTOR * (1 - expected_winner))
    new_loser_rating = int(loser_rating + K_FACTOR * (0 - expected_loser))

    return EloUpdate(
        new_winner_rating=new_winner_rating,
        new_loser_rating=new_loser_rating,
        winner_delta=new_winner_rating - winner_rating,
        loser_delta=new_loser_rating - loser_rating,
    )
