"""Rank users by the summed scores of complete rosters."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, Mapping, Sequence

from spirit11.config import LeagueRules
from spirit11.models import PlayerRecord, UserRecord
from spirit11.scoring import score_player


logger = logging.getLogger(__name__)

PlayerLookup = Callable[[str], PlayerRecord | None]


@dataclass(frozen=True)
class LeaderboardEntry:
    rank: int
    user_id: str
    username: str
    team_size: int
    points: float | None

    @property
    def is_complete(self) -> bool:
        return self.points is not None


def _as_lookup(players: Mapping[str, PlayerRecord] | PlayerLookup) -> PlayerLookup:
    if callable(players):
        return players
    return players.get


def team_points(
    user: UserRecord,
    players: Mapping[str, PlayerRecord] | PlayerLookup,
    rules: LeagueRules | None = None,
) -> float | None:
    """Sum of current member scores, or ``None`` unless the roster is full."""

    rules = rules or LeagueRules()
    if user.team_size != rules.roster_size:
        return None
    lookup = _as_lookup(players)
    total = 0.0
    for entry in user.team:
        player = lookup(entry.player_id)
        if player is None:
            logger.warning("User %s has unknown player %s on roster", user.user_id, entry.player_id)
            continue
        total += score_player(player)
    return total


class Leaderboard:
    """Restartable ranking; every iteration re-reads users and rescores."""

    def __init__(
        self,
        users: Callable[[], Iterable[UserRecord]] | Sequence[UserRecord],
        players: Mapping[str, PlayerRecord] | PlayerLookup,
        rules: LeagueRules | None = None,
    ):
        self._users = users
        self._players = players
        self._rules = rules or LeagueRules()

    def __iter__(self) -> Iterator[LeaderboardEntry]:
        users = self._users() if callable(self._users) else self._users
        scored = [(user, team_points(user, self._players, self._rules)) for user in users]
        complete = sorted(
            ((user, points) for user, points in scored if points is not None),
            key=lambda item: (-item[1], item[0].user_id),
        )
        incomplete = sorted(
            ((user, points) for user, points in scored if points is None),
            key=lambda item: item[0].user_id,
        )
        for rank, (user, points) in enumerate(complete + incomplete, start=1):
            yield LeaderboardEntry(
                rank=rank,
                user_id=user.user_id,
                username=user.username,
                team_size=user.team_size,
                points=points,
            )


def rank_users(
    users: Callable[[], Iterable[UserRecord]] | Sequence[UserRecord],
    players: Mapping[str, PlayerRecord] | PlayerLookup,
    rules: LeagueRules | None = None,
) -> Leaderboard:
    return Leaderboard(users, players, rules)
