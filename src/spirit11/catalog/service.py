"""Create, edit and delete players, keeping derived fields in sync."""

from __future__ import annotations

import logging
from typing import Any, List, Mapping

from pydantic import ValidationError

from spirit11.config import LeagueRules
from spirit11.errors import InvalidInput, PlayerNotFound, SeedRecordLocked
from spirit11.models import PLAYER_CATEGORIES, PlayerRecord
from spirit11.persistence import LeagueStore, new_id
from spirit11.scoring import price_player


logger = logging.getLogger(__name__)

REQUIRED_FIELDS: tuple[str, ...] = (
    "name",
    "university",
    "category",
    "total_runs",
    "balls_faced",
    "innings_played",
)

EDITABLE_FIELDS: tuple[str, ...] = REQUIRED_FIELDS + (
    "wickets",
    "overs_bowled",
    "runs_conceded",
)


def _is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _build_record(data: Mapping[str, Any]) -> PlayerRecord:
    try:
        return PlayerRecord.model_validate(data)
    except ValidationError as exc:
        first = exc.errors()[0]
        location = ".".join(str(part) for part in first.get("loc", ()))
        raise InvalidInput(f"Invalid value for {location}: {first.get('msg')}") from exc


def list_players(
    store: LeagueStore,
    *,
    category: str | None = None,
    search: str | None = None,
) -> List[PlayerRecord]:
    """Players sorted by name; unknown categories are ignored."""

    if category not in PLAYER_CATEGORIES:
        category = None
    search = search.strip() if search else None
    return store.list_players(category=category, search=search or None)


def create_player(
    store: LeagueStore,
    data: Mapping[str, Any],
    rules: LeagueRules | None = None,
    *,
    is_seed: bool = False,
) -> PlayerRecord:
    for field_name in REQUIRED_FIELDS:
        if _is_missing(data.get(field_name)):
            raise InvalidInput(f"Missing required field: {field_name}")
    payload = {key: data[key] for key in EDITABLE_FIELDS if not _is_missing(data.get(key))}
    payload["player_id"] = new_id()
    payload["is_seed"] = is_seed
    record = price_player(_build_record(payload), rules)
    stored = store.insert_player(record)
    logger.info("Created player %s (%s) valued at %d", stored.name, stored.player_id, stored.value)
    return stored


def update_player(
    store: LeagueStore,
    player_id: str,
    changes: Mapping[str, Any],
    rules: LeagueRules | None = None,
) -> PlayerRecord:
    """Apply raw-stat edits; the cached score is refreshed, a locked price is kept."""

    existing = store.get_player(player_id)
    if existing is None:
        raise PlayerNotFound()
    if existing.is_seed:
        raise SeedRecordLocked()
    payload = existing.model_dump()
    payload.update({key: changes[key] for key in EDITABLE_FIELDS if key in changes and not _is_missing(changes[key])})
    record = price_player(_build_record(payload), rules)
    updated = store.update_player(record)
    logger.info("Updated player %s (%s)", updated.name, player_id)
    return updated


def delete_player(store: LeagueStore, player_id: str) -> PlayerRecord:
    existing = store.get_player(player_id)
    if existing is None:
        raise PlayerNotFound()
    if existing.is_seed:
        raise SeedRecordLocked()
    store.delete_player(player_id)
    logger.info("Deleted player %s (%s)", existing.name, player_id)
    return existing
