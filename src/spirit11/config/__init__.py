"""Configuration helpers for league rules and price overrides."""

from .league import LeagueRules, load_rules
from .overrides import PREDEFINED_TEAM, PREDEFINED_USERNAME, VALUE_OVERRIDES, get_override

__all__ = [
    "LeagueRules",
    "load_rules",
    "PREDEFINED_TEAM",
    "PREDEFINED_USERNAME",
    "VALUE_OVERRIDES",
    "get_override",
]
