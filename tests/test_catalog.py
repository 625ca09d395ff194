from pathlib import Path

import pytest

from spirit11.catalog import create_player, delete_player, list_players, update_player
from spirit11.errors import InvalidInput, PlayerNotFound, SeedRecordLocked
from spirit11.persistence import LeagueStore


@pytest.fixture()
def store(tmp_path: Path) -> LeagueStore:
    return LeagueStore(tmp_path / "catalog.sqlite")


def _payload(**kwargs) -> dict:
    data = {
        "name": "Kasun Silva",
        "university": "University of Ruhuna",
        "category": "Batsman",
        "total_runs": 500,
        "balls_faced": 400,
        "innings_played": 10,
    }
    data.update(kwargs)
    return data


def test_create_player_prices_and_scores(store: LeagueStore):
    player = create_player(store, _payload())

    assert player.value == 700_000
    assert player.points == pytest.approx(65.0)
    assert player.is_seed is False
    assert store.get_player(player.player_id) == player


def test_create_player_accepts_zero_counters(store: LeagueStore):
    player = create_player(store, _payload(total_runs=0, balls_faced=0, innings_played=0))

    assert player.value == 100_000


@pytest.mark.parametrize("missing", ["name", "university", "category", "total_runs", "balls_faced", "innings_played"])
def test_create_player_requires_fields(store: LeagueStore, missing: str):
    payload = _payload()
    payload.pop(missing)

    with pytest.raises(InvalidInput) as excinfo:
        create_player(store, payload)
    assert excinfo.value.message == f"Missing required field: {missing}"


def test_create_player_rejects_bad_values(store: LeagueStore):
    with pytest.raises(InvalidInput):
        create_player(store, _payload(category="Wicketkeeper"))


def test_update_refreshes_points_but_keeps_locked_value(store: LeagueStore):
    player = create_player(store, _payload())

    updated = update_player(store, player.player_id, {"total_runs": 800, "wickets": 3, "overs_bowled": 6})

    assert updated.total_runs == 800
    assert updated.wickets == 3
    assert updated.points > player.points
    assert updated.value == 700_000


def test_seed_records_cannot_be_edited_or_deleted(store: LeagueStore):
    seed = create_player(store, _payload(), is_seed=True)

    with pytest.raises(SeedRecordLocked):
        update_player(store, seed.player_id, {"total_runs": 1})
    with pytest.raises(SeedRecordLocked):
        delete_player(store, seed.player_id)
    assert store.get_player(seed.player_id) == seed


def test_delete_player(store: LeagueStore):
    player = create_player(store, _payload())

    deleted = delete_player(store, player.player_id)

    assert deleted.player_id == player.player_id
    assert store.get_player(player.player_id) is None
    with pytest.raises(PlayerNotFound):
        delete_player(store, player.player_id)
    with pytest.raises(PlayerNotFound):
        update_player(store, player.player_id, {"total_runs": 1})


def test_list_players_filters_and_ignores_unknown_category(store: LeagueStore):
    create_player(store, _payload(name="Bowler Bandara", category="Bowler"))
    create_player(store, _payload(name="Ashen Perera"))

    assert [p.name for p in list_players(store)] == ["Ashen Perera", "Bowler Bandara"]
    assert [p.name for p in list_players(store, category="Bowler")] == ["Bowler Bandara"]
    assert len(list_players(store, category="Keeper")) == 2
    assert [p.name for p in list_players(store, search="  perera ")] == ["Ashen Perera"]
