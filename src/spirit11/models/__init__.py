"""Player and user records."""

from .player import PLAYER_CATEGORIES, PlayerCategory, PlayerRecord
from .user import RosterEntry, UserRecord

__all__ = [
    "PLAYER_CATEGORIES",
    "PlayerCategory",
    "PlayerRecord",
    "RosterEntry",
    "UserRecord",
]
