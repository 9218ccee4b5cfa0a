"""Company rankings service: pairwise voting, Elo ratings and leaderboards."""

__version__ = "1.0.0"
