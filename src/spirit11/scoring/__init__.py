"""Stats, score and value calculations."""

from .engine import compute_score, score_player
from .stats import DerivedStats, derive_stats, overs_to_balls
from .valuation import compute_value, price_player, value_from_score

__all__ = [
    "DerivedStats",
    "compute_score",
    "compute_value",
    "derive_stats",
    "overs_to_balls",
    "price_player",
    "score_player",
    "value_from_score",
]
