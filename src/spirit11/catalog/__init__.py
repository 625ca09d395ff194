"""Player catalog: browsing and administrative edits."""

from .service import (
    EDITABLE_FIELDS,
    REQUIRED_FIELDS,
    create_player,
    delete_player,
    list_players,
    update_player,
)

__all__ = [
    "EDITABLE_FIELDS",
    "REQUIRED_FIELDS",
    "create_player",
    "delete_player",
    "list_players",
    "update_player",
]
