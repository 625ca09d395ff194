"""Pydantic models for API I/O."""

from .players import (
    PlayerCreateRequest,
    PlayerHighlightResponse,
    PlayerListResponse,
    PlayerResponse,
    PlayerUpdateRequest,
    TournamentStatsResponse,
)
from .team import (
    LeaderboardEntryResponse,
    LeaderboardResponse,
    SeedResponse,
    TeamChangePlayer,
    TeamChangeRequest,
    TeamChangeResponse,
    TeamPlayerResponse,
    TeamResponse,
    UserCreateRequest,
    UserResponse,
)

__all__ = [
    "PlayerCreateRequest",
    "PlayerHighlightResponse",
    "PlayerListResponse",
    "PlayerResponse",
    "PlayerUpdateRequest",
    "TournamentStatsResponse",
    "LeaderboardEntryResponse",
    "LeaderboardResponse",
    "SeedResponse",
    "TeamChangePlayer",
    "TeamChangeRequest",
    "TeamChangeResponse",
    "TeamPlayerResponse",
    "TeamResponse",
    "UserCreateRequest",
    "UserResponse",
]
