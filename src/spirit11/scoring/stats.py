"""Rate statistics derived from a player's raw counters."""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal, ROUND_DOWN

from spirit11.models import PlayerRecord


BALLS_PER_OVER = 6


@dataclass(frozen=True)
class DerivedStats:
    batting_strike_rate: float
    batting_average: float
    balls_bowled: int
    bowling_strike_rate: float | None
    economy_rate: float
    wickets: int


def overs_to_balls(overs: float) -> int:
    """Convert cricket over notation to legal deliveries.

    The integer part counts whole overs and the first decimal digit counts
    extra balls, so ``4.3`` is 27 balls. Digits past the first are ignored.
    """

    if not math.isfinite(overs) or overs <= 0:
        return 0
    text = Decimal(str(overs))
    whole = int(text)
    extra = int(((text - whole) * 10).to_integral_value(rounding=ROUND_DOWN))
    return whole * BALLS_PER_OVER + extra


def batting_strike_rate(total_runs: int, balls_faced: int) -> float:
    if balls_faced <= 0:
        return 0.0
    return (total_runs / balls_faced) * 100


def batting_average(total_runs: int, innings_played: int) -> float:
    if innings_played <= 0:
        return 0.0
    return total_runs / innings_played


def bowling_strike_rate(balls_bowled: int, wickets: int) -> float | None:
    # No wickets means no strike rate at all, not zero.
    if wickets <= 0:
        return None
    return balls_bowled / wickets


def economy_rate(runs_conceded: int, balls_bowled: int) -> float:
    if balls_bowled <= 0:
        return 0.0
    return (runs_conceded / balls_bowled) * BALLS_PER_OVER


def derive_stats(player: PlayerRecord) -> DerivedStats:
    balls_bowled = overs_to_balls(player.overs_bowled)
    return DerivedStats(
        batting_strike_rate=batting_strike_rate(player.total_runs, player.balls_faced),
        batting_average=batting_average(player.total_runs, player.innings_played),
        balls_bowled=balls_bowled,
        bowling_strike_rate=bowling_strike_rate(balls_bowled, player.wickets),
        economy_rate=economy_rate(player.runs_conceded, balls_bowled),
        wickets=player.wickets,
    )
