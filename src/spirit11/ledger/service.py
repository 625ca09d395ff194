"""Budget-constrained roster mutations."""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Mapping

from spirit11.config import LeagueRules
from spirit11.errors import (
    DuplicatePlayer,
    InsufficientBudget,
    InvalidInput,
    PlayerNotFound,
    PlayerNotInRoster,
    RosterFull,
    UserNotFound,
)
from spirit11.models import PlayerRecord, RosterEntry, UserRecord
from spirit11.notify import Notifier
from spirit11.persistence import PlayerStore, UserStore
from spirit11.scoring import compute_value


logger = logging.getLogger(__name__)

TEAM_UPDATE_EVENT = "team-update"


@dataclass(frozen=True)
class LedgerResult:
    user: UserRecord
    player_id: str
    player_name: str | None
    value: int

    @property
    def team_size(self) -> int:
        return self.user.team_size

    @property
    def budget(self) -> int:
        return self.user.budget

    def to_payload(self) -> dict:
        return {
            "team_size": self.team_size,
            "budget": self.budget,
            "player": {
                "id": self.player_id,
                "name": self.player_name,
                "value": self.value,
            },
        }


class _UserLocks:
    """One lock per user id, dropped once no thread holds or waits on it."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, threading.Lock] = {}
        self._users: dict[str, int] = {}

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)

    @contextmanager
    def hold(self, user_id: str) -> Iterator[None]:
        with self._guard:
            lock = self._locks.get(user_id)
            if lock is None:
                lock = self._locks[user_id] = threading.Lock()
            self._users[user_id] = self._users.get(user_id, 0) + 1
        try:
            with lock:
                yield
        finally:
            with self._guard:
                remaining = self._users[user_id] - 1
                if remaining:
                    self._users[user_id] = remaining
                else:
                    del self._users[user_id]
                    del self._locks[user_id]


class TeamLedger:
    """Applies add/remove transitions to a user's roster and budget.

    Every transition runs under the user's lock: the user record is read,
    all preconditions are checked, and only then is the new record written.
    A failed precondition raises before anything is saved.
    """

    def __init__(
        self,
        players: PlayerStore,
        users: UserStore,
        rules: LeagueRules | None = None,
        *,
        notifier: Notifier | None = None,
        overrides: Mapping[str, int] | None = None,
    ):
        self.players = players
        self.users = users
        self.rules = rules or LeagueRules()
        self.notifier = notifier
        self.overrides = overrides
        self._locks = _UserLocks()

    def quote(self, player: PlayerRecord) -> int:
        return compute_value(player, self.rules, self.overrides)

    def add_player(self, user_id: str, player_id: str, value: int | None = None) -> LedgerResult:
        if value is not None and value <= 0:
            raise InvalidInput("Player value must be positive")
        with self._locks.hold(user_id):
            user = self._load_user(user_id)
            if user.team_size >= self.rules.roster_size:
                raise RosterFull(self.rules.roster_size)
            if user.entry_for(player_id) is not None:
                raise DuplicatePlayer()
            player = self.players.get_player(player_id)
            if player is None:
                raise PlayerNotFound()
            price = self.quote(player)
            if value is not None and value != price:
                raise InvalidInput(f"Player value {value} does not match current value {price}")
            if price > user.budget:
                raise InsufficientBudget(user.budget, price)

            updated = user.model_copy(
                update={
                    "team": [*user.team, RosterEntry(player_id=player_id, value=price)],
                    "budget": user.budget - price,
                }
            )
            self.users.save_user(updated)

        logger.info("User %s added %s for %d (budget %d)", user_id, player.name, price, updated.budget)
        result = LedgerResult(user=updated, player_id=player_id, player_name=player.name, value=price)
        self._notify(result)
        return result

    def remove_player(self, user_id: str, player_id: str) -> LedgerResult:
        with self._locks.hold(user_id):
            user = self._load_user(user_id)
            entry = user.entry_for(player_id)
            if entry is None:
                raise PlayerNotInRoster()
            updated = user.model_copy(
                update={
                    "team": [item for item in user.team if item.player_id != player_id],
                    "budget": user.budget + entry.value,
                }
            )
            self.users.save_user(updated)

        player = self.players.get_player(player_id)
        player_name = player.name if player is not None else None
        logger.info("User %s removed %s, refunded %d (budget %d)", user_id, player_id, entry.value, updated.budget)
        result = LedgerResult(user=updated, player_id=player_id, player_name=player_name, value=entry.value)
        self._notify(result)
        return result

    def _load_user(self, user_id: str) -> UserRecord:
        user = self.users.get_user(user_id)
        if user is None:
            raise UserNotFound()
        return user

    def _notify(self, result: LedgerResult) -> None:
        if self.notifier is None:
            return
        try:
            self.notifier.notify_user(result.user.user_id, TEAM_UPDATE_EVENT, result.to_payload())
        except Exception:
            logger.exception("Failed to publish %s for user %s", TEAM_UPDATE_EVENT, result.user.user_id)
