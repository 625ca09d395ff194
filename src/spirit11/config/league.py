"""League configuration: budget policy, roster cap and valuation steps."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass


logger = logging.getLogger(__name__)

_STARTING_BUDGET_ENV = "SPIRIT11_STARTING_BUDGET"
_ROSTER_SIZE_ENV = "SPIRIT11_ROSTER_SIZE"
_LOCK_VALUES_ENV = "SPIRIT11_LOCK_VALUES"

STARTING_BUDGET_DEFAULT = 9_000_000
ROSTER_SIZE_DEFAULT = 11


@dataclass(frozen=True)
class LeagueRules:
    starting_budget: int = STARTING_BUDGET_DEFAULT
    roster_size: int = ROSTER_SIZE_DEFAULT
    value_floor: int = 100_000
    value_step: int = 50_000
    lock_values: bool = True


def _env_int(name: str, default: int, *, min_value: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %d", name, raw, default)
        return default
    if min_value is not None:
        value = max(min_value, value)
    return value


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    text = raw.strip().lower()
    if text in {"1", "true", "t", "yes", "y", "on"}:
        return True
    if text in {"0", "false", "f", "no", "n", "off"}:
        return False
    logger.warning("Invalid bool for %s: %s; using default %s", name, raw, default)
    return default


def load_rules() -> LeagueRules:
    """Build rules from defaults, applying any environment overrides."""

    return LeagueRules(
        starting_budget=_env_int(_STARTING_BUDGET_ENV, STARTING_BUDGET_DEFAULT, min_value=0),
        roster_size=_env_int(_ROSTER_SIZE_ENV, ROSTER_SIZE_DEFAULT, min_value=1),
        lock_values=_env_bool(_LOCK_VALUES_ENV, True),
    )
