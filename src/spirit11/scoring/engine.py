"""The performance score formula.

This is the only place the formula lives; valuation, the ledger and the
leaderboard all call into it.
"""

from __future__ import annotations

from spirit11.models import PlayerRecord

from .stats import DerivedStats, derive_stats


BATTING_STRIKE_RATE_DIVISOR = 5.0
BATTING_AVERAGE_WEIGHT = 0.8
BOWLING_STRIKE_RATE_NUMERATOR = 500.0
ECONOMY_NUMERATOR = 140.0


def compute_score(stats: DerivedStats) -> float:
    """Combine derived rates into a single unrounded score (never negative).

    Each term contributes only when its precondition holds; a failed
    precondition adds nothing.
    """

    score = 0.0
    if stats.batting_strike_rate > 0:
        score += stats.batting_strike_rate / BATTING_STRIKE_RATE_DIVISOR
        score += stats.batting_average * BATTING_AVERAGE_WEIGHT
    if (
        stats.wickets > 0
        and stats.bowling_strike_rate is not None
        and stats.bowling_strike_rate > 0
    ):
        score += BOWLING_STRIKE_RATE_NUMERATOR / stats.bowling_strike_rate
    if stats.economy_rate > 0:
        score += ECONOMY_NUMERATOR / stats.economy_rate
    return score


def score_player(player: PlayerRecord) -> float:
    return compute_score(derive_stats(player))
