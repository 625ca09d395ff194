from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field

from spirit11.models import PlayerCategory, PlayerRecord
from spirit11.scoring import derive_stats


class PlayerCreateRequest(BaseModel):
    name: str | None = None
    university: str | None = None
    category: PlayerCategory | None = None
    total_runs: int | None = Field(default=None, ge=0)
    balls_faced: int | None = Field(default=None, ge=0)
    innings_played: int | None = Field(default=None, ge=0)
    wickets: int | None = Field(default=None, ge=0)
    overs_bowled: float | None = Field(default=None, ge=0.0)
    runs_conceded: int | None = Field(default=None, ge=0)


class PlayerUpdateRequest(PlayerCreateRequest):
    pass


class PlayerResponse(BaseModel):
    player_id: str
    name: str
    university: str
    category: str
    total_runs: int
    balls_faced: int
    innings_played: int
    wickets: int
    overs_bowled: float
    runs_conceded: int
    batting_strike_rate: float
    batting_average: float
    bowling_strike_rate: float | None
    economy_rate: float
    value: int
    is_seed: bool
    points: float | None = None

    @classmethod
    def from_record(cls, record: PlayerRecord, *, include_points: bool = False) -> "PlayerResponse":
        stats = derive_stats(record)
        return cls(
            player_id=record.player_id,
            name=record.name,
            university=record.university,
            category=record.category,
            total_runs=record.total_runs,
            balls_faced=record.balls_faced,
            innings_played=record.innings_played,
            wickets=record.wickets,
            overs_bowled=record.overs_bowled,
            runs_conceded=record.runs_conceded,
            batting_strike_rate=stats.batting_strike_rate,
            batting_average=stats.batting_average,
            bowling_strike_rate=stats.bowling_strike_rate,
            economy_rate=stats.economy_rate,
            value=record.value,
            is_seed=record.is_seed,
            points=record.points if include_points else None,
        )


class PlayerListResponse(BaseModel):
    players: List[PlayerResponse]


class PlayerHighlightResponse(BaseModel):
    player_id: str
    name: str
    university: str
    total: int


class TournamentStatsResponse(BaseModel):
    total_players: int
    total_runs: int
    total_wickets: int
    highest_run_scorer: PlayerHighlightResponse | None
    highest_wicket_taker: PlayerHighlightResponse | None
    average_batting_strike_rate: float
    average_batting_average: float
    category_counts: dict[str, int]
    university_counts: dict[str, int]
