"""User and roster models."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class RosterEntry(BaseModel):
    """A roster slot; ``value`` is the price paid when the player was added."""

    player_id: str = Field(..., min_length=1)
    value: int = Field(..., ge=0)

    model_config = ConfigDict(frozen=True)


class UserRecord(BaseModel):
    user_id: str = Field(..., min_length=1)
    username: str = Field(..., min_length=1)
    budget: int = Field(..., ge=0)
    team: List[RosterEntry] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @property
    def team_size(self) -> int:
        return len(self.team)

    @property
    def player_ids(self) -> list[str]:
        return [entry.player_id for entry in self.team]

    def entry_for(self, player_id: str) -> RosterEntry | None:
        for entry in self.team:
            if entry.player_id == player_id:
                return entry
        return None

    def committed_value(self) -> int:
        return sum(entry.value for entry in self.team)
