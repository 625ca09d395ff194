from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field

from .players import PlayerResponse


class UserCreateRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=64)


class UserResponse(BaseModel):
    user_id: str
    username: str
    budget: int
    team_size: int


class TeamChangeRequest(BaseModel):
    player_id: str = Field(..., min_length=1)
    player_value: int | None = Field(default=None, ge=1)


class TeamPlayerResponse(PlayerResponse):
    purchase_value: int


class TeamResponse(BaseModel):
    team: List[TeamPlayerResponse]
    budget: int
    team_size: int
    team_complete: bool
    team_points: float | None


class TeamChangePlayer(BaseModel):
    id: str
    name: str | None
    value: int


class TeamChangeResponse(BaseModel):
    message: str
    team_size: int
    budget: int
    player: TeamChangePlayer


class LeaderboardEntryResponse(BaseModel):
    rank: int
    user_id: str
    username: str
    team_size: int
    points: float | None
    is_complete: bool


class LeaderboardResponse(BaseModel):
    leaderboard: List[LeaderboardEntryResponse]


class SeedResponse(BaseModel):
    message: str
    imported: int
    skipped_existing: bool
    rejected_rows: List[str] = Field(default_factory=list)
    predefined_user_id: str | None = None
