"""Aggregate figures across every player in the tournament."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from statistics import fmean
from typing import Sequence

from spirit11.models import PLAYER_CATEGORIES, PlayerRecord
from spirit11.scoring import derive_stats


@dataclass(frozen=True)
class PlayerHighlight:
    player_id: str
    name: str
    university: str
    total: int


@dataclass(frozen=True)
class TournamentSummary:
    total_players: int
    total_runs: int
    total_wickets: int
    highest_run_scorer: PlayerHighlight | None
    highest_wicket_taker: PlayerHighlight | None
    average_batting_strike_rate: float
    average_batting_average: float
    category_counts: dict[str, int] = field(default_factory=dict)
    university_counts: dict[str, int] = field(default_factory=dict)


def _leader(players: Sequence[PlayerRecord], attr: str) -> PlayerHighlight | None:
    if not players:
        return None
    # First player wins ties, matching list order.
    best = players[0]
    for player in players[1:]:
        if getattr(player, attr) > getattr(best, attr):
            best = player
    return PlayerHighlight(
        player_id=best.player_id,
        name=best.name,
        university=best.university,
        total=int(getattr(best, attr)),
    )


def tournament_summary(players: Sequence[PlayerRecord]) -> TournamentSummary:
    players = list(players)
    stats = [derive_stats(player) for player in players]
    category_counts = {category: 0 for category in PLAYER_CATEGORIES}
    category_counts.update(Counter(player.category for player in players))
    return TournamentSummary(
        total_players=len(players),
        total_runs=sum(player.total_runs for player in players),
        total_wickets=sum(player.wickets for player in players),
        highest_run_scorer=_leader(players, "total_runs"),
        highest_wicket_taker=_leader(players, "wickets"),
        average_batting_strike_rate=fmean(s.batting_strike_rate for s in stats) if stats else 0.0,
        average_batting_average=fmean(s.batting_average for s in stats) if stats else 0.0,
        category_counts=category_counts,
        university_counts=dict(Counter(player.university for player in players)),
    )
