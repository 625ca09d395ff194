"""Canonical player model shared across scoring, ledger and API layers."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


PlayerCategory = Literal["Batsman", "Bowler", "All-Rounder"]

PLAYER_CATEGORIES: tuple[str, ...] = ("Batsman", "Bowler", "All-Rounder")


class PlayerRecord(BaseModel):
    """Raw cricket counters plus the cached score and locked price."""

    player_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    university: str
    category: PlayerCategory
    total_runs: int = Field(default=0, ge=0)
    balls_faced: int = Field(default=0, ge=0)
    innings_played: int = Field(default=0, ge=0)
    wickets: int = Field(default=0, ge=0)
    overs_bowled: float = Field(default=0.0, ge=0.0)
    runs_conceded: int = Field(default=0, ge=0)
    points: float = Field(default=0.0, ge=0.0)
    value: int = Field(default=0, ge=0)
    is_seed: bool = False

    model_config = ConfigDict(frozen=True)
