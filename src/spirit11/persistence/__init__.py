"""Persistence layer for players and users."""

from __future__ import annotations

import json
import os
import sqlite3
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, List, Optional, Protocol
from uuid import uuid4

from spirit11.errors import UsernameTaken
from spirit11.models import PlayerRecord, RosterEntry, UserRecord


_DB_PATH_ENV = "SPIRIT11_DB_PATH"
_DEFAULT_DB_PATH = Path(__file__).resolve().parent.parent / "spirit11.sqlite"

_PLAYER_COLUMNS = (
    "id",
    "name",
    "university",
    "category",
    "total_runs",
    "balls_faced",
    "innings_played",
    "wickets",
    "overs_bowled",
    "runs_conceded",
    "points",
    "value",
    "is_seed",
)


class PlayerStore(Protocol):
    def get_player(self, player_id: str) -> Optional[PlayerRecord]: ...

    def list_players(
        self,
        *,
        category: str | None = None,
        search: str | None = None,
    ) -> List[PlayerRecord]: ...


class UserStore(Protocol):
    def get_user(self, user_id: str) -> Optional[UserRecord]: ...

    def save_user(self, user: UserRecord) -> UserRecord: ...


def new_id() -> str:
    return uuid4().hex


class LeagueStore:
    """SQLite-backed store for players and user rosters."""

    def __init__(self, db_path: Path | str | None = None):
        # An explicit path wins over the environment, which wins over the default.
        if db_path is None:
            db_path = os.getenv(_DB_PATH_ENV) or _DEFAULT_DB_PATH
        self._use_uri = False
        if isinstance(db_path, str) and db_path.startswith("file:"):
            self.db_path = db_path
            self._use_uri = True
        else:
            self.db_path = Path(db_path)
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        if isinstance(self.db_path, Path):
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            try:
                conn = sqlite3.connect(self.db_path)
            except sqlite3.OperationalError:
                fallback_dir = Path(tempfile.gettempdir()) / "spirit11-runtime"
                fallback_dir.mkdir(parents=True, exist_ok=True)
                fallback = fallback_dir / "spirit11.sqlite"
                conn = sqlite3.connect(fallback)
                self.db_path = fallback
                self._create_schema(conn)
        else:
            conn = sqlite3.connect(self.db_path, uri=self._use_uri)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        with self._connect() as conn:
            self._create_schema(conn)

    def _create_schema(self, conn: sqlite3.Connection) -> None:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS players (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL,
                university TEXT NOT NULL,
                category TEXT NOT NULL,
                total_runs INTEGER NOT NULL DEFAULT 0,
                balls_faced INTEGER NOT NULL DEFAULT 0,
                innings_played INTEGER NOT NULL DEFAULT 0,
                wickets INTEGER NOT NULL DEFAULT 0,
                overs_bowled REAL NOT NULL DEFAULT 0,
                runs_conceded INTEGER NOT NULL DEFAULT 0,
                points REAL NOT NULL DEFAULT 0,
                value INTEGER NOT NULL DEFAULT 0,
                is_seed INTEGER NOT NULL DEFAULT 0,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
            """
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS users (
                id TEXT PRIMARY KEY,
                username TEXT NOT NULL UNIQUE,
                budget INTEGER NOT NULL,
                team_json TEXT NOT NULL,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
            """
        )
        conn.commit()

    # Players

    def get_player(self, player_id: str) -> Optional[PlayerRecord]:
        if not player_id:
            return None
        with self._connect() as conn:
            row = conn.execute("SELECT * FROM players WHERE id = ?", (player_id,)).fetchone()
            if row is None:
                return None
            return self._row_to_player(row)

    def list_players(
        self,
        *,
        category: str | None = None,
        search: str | None = None,
    ) -> List[PlayerRecord]:
        query = "SELECT * FROM players"
        conditions: list[str] = []
        params: list[str] = []
        if category:
            conditions.append("category = ?")
            params.append(category)
        if search:
            conditions.append("instr(lower(name), lower(?)) > 0")
            params.append(search)
        if conditions:
            query += " WHERE " + " AND ".join(conditions)
        query += " ORDER BY name, id"
        with self._connect() as conn:
            rows = conn.execute(query, tuple(params)).fetchall()
        return [self._row_to_player(row) for row in rows]

    def count_players(self) -> int:
        with self._connect() as conn:
            row = conn.execute("SELECT COUNT(*) AS total FROM players").fetchone()
        return int(row["total"])

    def insert_players(self, records: Iterable[PlayerRecord]) -> int:
        now = datetime.now(timezone.utc).isoformat()
        payload = [self._player_params(record) + (now, now) for record in records]
        placeholders = ", ".join("?" for _ in range(len(_PLAYER_COLUMNS) + 2))
        with self._connect() as conn:
            conn.executemany(
                f"INSERT INTO players ({', '.join(_PLAYER_COLUMNS)}, created_at, updated_at) "
                f"VALUES ({placeholders})",
                payload,
            )
            conn.commit()
        return len(payload)

    def insert_player(self, record: PlayerRecord) -> PlayerRecord:
        self.insert_players([record])
        stored = self.get_player(record.player_id)
        if stored is None:  # pragma: no cover
            raise KeyError(f"Player {record.player_id} not found after insert")
        return stored

    def update_player(self, record: PlayerRecord) -> PlayerRecord:
        now = datetime.now(timezone.utc).isoformat()
        assignments = ", ".join(f"{column} = ?" for column in _PLAYER_COLUMNS[1:])
        params = self._player_params(record)
        with self._connect() as conn:
            cursor = conn.execute(
                f"UPDATE players SET {assignments}, updated_at = ? WHERE id = ?",
                params[1:] + (now, record.player_id),
            )
            conn.commit()
        if cursor.rowcount == 0:
            raise KeyError(f"Player {record.player_id} not found")
        updated = self.get_player(record.player_id)
        if updated is None:  # pragma: no cover
            raise KeyError(f"Player {record.player_id} not found after update")
        return updated

    def delete_player(self, player_id: str) -> bool:
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM players WHERE id = ?", (player_id,))
            conn.commit()
        return cursor.rowcount > 0

    # Users

    def create_user(self, username: str, *, budget: int, user_id: str | None = None) -> UserRecord:
        user_id = user_id or new_id()
        now = datetime.now(timezone.utc).isoformat()
        try:
            with self._connect() as conn:
                conn.execute(
                    """
                    INSERT INTO users (id, username, budget, team_json, created_at, updated_at)
                    VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    (user_id, username, budget, "[]", now, now),
                )
                conn.commit()
        except sqlite3.IntegrityError as exc:
            raise UsernameTaken(f"Username {username!r} is already taken") from exc
        user = self.get_user(user_id)
        if user is None:  # pragma: no cover
            raise KeyError(f"User {user_id} not found after insert")
        return user

    def get_user(self, user_id: str) -> Optional[UserRecord]:
        if not user_id:
            return None
        with self._connect() as conn:
            row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
            if row is None:
                return None
            return self._row_to_user(row)

    def get_user_by_username(self, username: str) -> Optional[UserRecord]:
        with self._connect() as conn:
            row = conn.execute("SELECT * FROM users WHERE username = ?", (username,)).fetchone()
            if row is None:
                return None
            return self._row_to_user(row)

    def list_users(self) -> List[UserRecord]:
        with self._connect() as conn:
            rows = conn.execute("SELECT * FROM users ORDER BY datetime(created_at), id").fetchall()
        return [self._row_to_user(row) for row in rows]

    def save_user(self, user: UserRecord) -> UserRecord:
        now = datetime.now(timezone.utc).isoformat()
        team_json = json.dumps([entry.model_dump() for entry in user.team])
        with self._connect() as conn:
            cursor = conn.execute(
                "UPDATE users SET username = ?, budget = ?, team_json = ?, updated_at = ? WHERE id = ?",
                (user.username, user.budget, team_json, now, user.user_id),
            )
            conn.commit()
        if cursor.rowcount == 0:
            raise KeyError(f"User {user.user_id} not found")
        return user

    @staticmethod
    def _player_params(record: PlayerRecord) -> tuple:
        return (
            record.player_id,
            record.name,
            record.university,
            record.category,
            record.total_runs,
            record.balls_faced,
            record.innings_played,
            record.wickets,
            record.overs_bowled,
            record.runs_conceded,
            record.points,
            record.value,
            int(record.is_seed),
        )

    def _row_to_player(self, row: sqlite3.Row) -> PlayerRecord:
        return PlayerRecord(
            player_id=row["id"],
            name=row["name"],
            university=row["university"],
            category=row["category"],
            total_runs=row["total_runs"],
            balls_faced=row["balls_faced"],
            innings_played=row["innings_played"],
            wickets=row["wickets"],
            overs_bowled=row["overs_bowled"],
            runs_conceded=row["runs_conceded"],
            points=row["points"],
            value=row["value"],
            is_seed=bool(row["is_seed"]),
        )

    def _row_to_user(self, row: sqlite3.Row) -> UserRecord:
        team = [RosterEntry.model_validate(entry) for entry in json.loads(row["team_json"])]
        return UserRecord(
            user_id=row["id"],
            username=row["username"],
            budget=row["budget"],
            team=team,
        )
