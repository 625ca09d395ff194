"""Fixed prices for legacy players that bypass the valuation formula."""

from __future__ import annotations

from typing import Mapping


VALUE_OVERRIDES: Mapping[str, int] = {
    "Danushka Kumara": 800_000,
    "Jeewan Thirimanne": 800_000,
    "Lakshan Vandersay": 850_000,
    "Sammu Sandakan": 850_000,
    "Danushka Jayawickrama": 900_000,
    "Charith Shanaka": 800_000,
    "Pathum Dhananjaya": 750_000,
    "Minod Rathnayake": 850_000,
    "Sadeera Rajapaksa": 850_000,
    "Lakshan Gunathilaka": 800_000,
    "Suranga Bandara": 750_000,
}

# The demo account created by the seed routine owns exactly the override players.
PREDEFINED_USERNAME = "spiritx_2025"
PREDEFINED_TEAM: tuple[str, ...] = tuple(VALUE_OVERRIDES)


def get_override(name: str, overrides: Mapping[str, int] | None = None) -> int | None:
    table = VALUE_OVERRIDES if overrides is None else overrides
    return table.get(name.strip())
