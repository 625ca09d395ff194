"""Input adapters that turn raw player data into priced records."""

from .players import (
    DEFAULT_PLAYERS_MAPPING,
    ImportReport,
    PlayerRow,
    import_players_csv,
    load_player_csv,
    rows_to_records,
    seed_predefined_user,
)

__all__ = [
    "DEFAULT_PLAYERS_MAPPING",
    "ImportReport",
    "PlayerRow",
    "import_players_csv",
    "load_player_csv",
    "rows_to_records",
    "seed_predefined_user",
]
