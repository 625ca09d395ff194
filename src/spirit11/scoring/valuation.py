"""Map performance scores to prices."""

from __future__ import annotations

import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Mapping

from spirit11.config import LeagueRules, get_override
from spirit11.models import PlayerRecord

from .engine import score_player


logger = logging.getLogger(__name__)

_DEFAULT_RULES = LeagueRules()


def value_from_score(score: float, rules: LeagueRules | None = None) -> int:
    """Price a score: ``(9 * score + 100) * 1000`` to the nearest step.

    Non-positive scores get the floor price. Halves round away from zero.
    """

    rules = rules or _DEFAULT_RULES
    if score <= 0:
        return rules.value_floor
    raw = Decimal((9 * score + 100) * 1000)
    buckets = (raw / rules.value_step).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    return max(rules.value_floor, int(buckets) * rules.value_step)


def compute_value(
    player: PlayerRecord,
    rules: LeagueRules | None = None,
    overrides: Mapping[str, int] | None = None,
) -> int:
    rules = rules or _DEFAULT_RULES
    if rules.lock_values and player.value > 0:
        return player.value
    override = get_override(player.name, overrides)
    if override is not None:
        return override
    return value_from_score(score_player(player), rules)


def price_player(
    player: PlayerRecord,
    rules: LeagueRules | None = None,
    overrides: Mapping[str, int] | None = None,
) -> PlayerRecord:
    """Refresh the cached score and assign (or keep) the player's price."""

    points = score_player(player)
    value = compute_value(player, rules, overrides)
    if value != player.value:
        logger.debug("Priced %s at %d (score %.2f)", player.name, value, points)
    return player.model_copy(update={"points": points, "value": value})
