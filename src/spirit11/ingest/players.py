"""Load the seed player CSV and emit priced player records."""

from __future__ import annotations

import csv
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Mapping, Optional, Sequence

from pydantic import BaseModel

from spirit11.config import LeagueRules
from spirit11.errors import Spirit11Error
from spirit11.ledger import TeamLedger
from spirit11.models import PLAYER_CATEGORIES, PlayerRecord, UserRecord
from spirit11.persistence import LeagueStore, new_id
from spirit11.scoring import price_player


logger = logging.getLogger(__name__)

DEFAULT_PLAYERS_MAPPING = {
    "name": "Name",
    "university": "University",
    "category": "Category",
    "total_runs": "Total Runs",
    "balls_faced": "Balls Faced",
    "innings_played": "Innings Played",
    "wickets": "Wickets",
    "overs_bowled": "Overs Bowled",
    "runs_conceded": "Runs Conceded",
}

_CATEGORY_ALIASES = {
    "batsman": "Batsman",
    "batter": "Batsman",
    "bowler": "Bowler",
    "all-rounder": "All-Rounder",
    "all rounder": "All-Rounder",
    "allrounder": "All-Rounder",
}


class PlayerRow(BaseModel):
    raw_name: str
    raw_university: str
    raw_category: str
    raw_total_runs: str = "0"
    raw_balls_faced: str = "0"
    raw_innings_played: str = "0"
    raw_wickets: str = "0"
    raw_overs_bowled: str = "0"
    raw_runs_conceded: str = "0"

    @classmethod
    def from_mapping(cls, row: Mapping[str, str], mapping: Mapping[str, str]) -> "PlayerRow":
        def extract(key: str, *, default: str = "") -> str:
            column = mapping.get(key, DEFAULT_PLAYERS_MAPPING[key])
            value = row.get(column)
            return value.strip() if value is not None else default

        return cls(
            raw_name=extract("name"),
            raw_university=extract("university"),
            raw_category=extract("category"),
            raw_total_runs=extract("total_runs", default="0"),
            raw_balls_faced=extract("balls_faced", default="0"),
            raw_innings_played=extract("innings_played", default="0"),
            raw_wickets=extract("wickets", default="0"),
            raw_overs_bowled=extract("overs_bowled", default="0"),
            raw_runs_conceded=extract("runs_conceded", default="0"),
        )


@dataclass
class ImportReport:
    total_rows: int
    imported: int
    skipped_existing: bool
    rejected_rows: List[str]


def load_player_csv(path: Path, *, mapping: Mapping[str, str] | None = None) -> List[PlayerRow]:
    mapping = mapping or DEFAULT_PLAYERS_MAPPING
    with path.open(newline="", encoding="utf-8-sig") as f:
        reader = csv.DictReader(f)
        rows = [
            PlayerRow.from_mapping(row, mapping)
            for row in reader
            if any((value or "").strip() for value in row.values())
        ]
    return rows


def _parse_count(raw: str, *, field: str) -> int:
    text = raw.replace(",", "").strip()
    if not text:
        return 0
    if not re.fullmatch(r"\d+", text):
        raise ValueError(f"{field} '{raw}' is not a whole number")
    return int(text)


def _parse_overs(raw: str) -> float:
    text = raw.strip()
    if not text:
        return 0.0
    try:
        value = float(text)
    except ValueError:
        raise ValueError(f"overs '{raw}' is not numeric") from None
    if value < 0:
        raise ValueError(f"overs '{raw}' is negative")
    return value


def _parse_category(raw: str) -> str:
    category = _CATEGORY_ALIASES.get(raw.strip().lower())
    if category is None or category not in PLAYER_CATEGORIES:
        raise ValueError(f"category '{raw}' is not one of {', '.join(PLAYER_CATEGORIES)}")
    return category


def rows_to_records(
    rows: Iterable[PlayerRow],
    *,
    rules: LeagueRules | None = None,
    is_seed: bool = True,
) -> tuple[List[PlayerRecord], List[str]]:
    """Convert rows into priced records; returns (records, rejected row descriptions)."""

    records: List[PlayerRecord] = []
    rejected: List[str] = []
    for index, row in enumerate(rows, start=1):
        if not row.raw_name:
            rejected.append(f"row {index}: missing name")
            continue
        try:
            record = PlayerRecord(
                player_id=new_id(),
                name=row.raw_name,
                university=row.raw_university,
                category=_parse_category(row.raw_category),
                total_runs=_parse_count(row.raw_total_runs, field="total runs"),
                balls_faced=_parse_count(row.raw_balls_faced, field="balls faced"),
                innings_played=_parse_count(row.raw_innings_played, field="innings played"),
                wickets=_parse_count(row.raw_wickets, field="wickets"),
                overs_bowled=_parse_overs(row.raw_overs_bowled),
                runs_conceded=_parse_count(row.raw_runs_conceded, field="runs conceded"),
                is_seed=is_seed,
            )
        except ValueError as exc:
            logger.warning("Skipping player row %d (%s): %s", index, row.raw_name, exc)
            rejected.append(f"row {index} ({row.raw_name}): {exc}")
            continue
        records.append(price_player(record, rules))
    return records, rejected


def import_players_csv(
    store: LeagueStore,
    path: Path,
    *,
    rules: LeagueRules | None = None,
    mapping: Mapping[str, str] | None = None,
) -> ImportReport:
    """Import the seed dataset once; a non-empty store is left untouched."""

    if store.count_players() > 0:
        logger.info("Players already imported, skipping %s", path)
        return ImportReport(total_rows=0, imported=0, skipped_existing=True, rejected_rows=[])

    rows = load_player_csv(path, mapping=mapping)
    records, rejected = rows_to_records(rows, rules=rules)
    imported = store.insert_players(records)
    logger.info("Imported %d players from %s (%d rejected)", imported, path, len(rejected))
    return ImportReport(
        total_rows=len(rows),
        imported=imported,
        skipped_existing=False,
        rejected_rows=rejected,
    )


def seed_predefined_user(
    store: LeagueStore,
    ledger: TeamLedger,
    username: str,
    player_names: Sequence[str],
) -> Optional[UserRecord]:
    """Create a demo user owning ``player_names``, bought through the ledger.

    Returns ``None`` when the user already exists or a player is missing.
    """

    if store.get_user_by_username(username) is not None:
        logger.info("Predefined user %s already exists, skipping", username)
        return None

    by_name = {player.name: player for player in store.list_players()}
    missing = [name for name in player_names if name not in by_name]
    if missing:
        logger.error("Could not find players for predefined team: %s", ", ".join(missing))
        return None

    user = store.create_user(username, budget=ledger.rules.starting_budget)
    for name in player_names:
        try:
            ledger.add_player(user.user_id, by_name[name].player_id)
        except Spirit11Error as exc:
            logger.error("Could not add %s to predefined team: %s", name, exc.message)
    return store.get_user(user.user_id)
