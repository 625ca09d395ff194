from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

from spirit11.api import create_app
from spirit11.config import LeagueRules, PREDEFINED_USERNAME
from spirit11.persistence import LeagueStore

from .test_ingest_players import seed_csv_text


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
async def client(tmp_path: Path):
    seed_path = tmp_path / "seed.csv"
    seed_path.write_text(seed_csv_text(), encoding="utf-8")
    app = create_app(LeagueStore(tmp_path / "api.sqlite"), LeagueRules(), seed_csv=seed_path)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        async_client.app = app
        yield async_client


def _player_payload(**kwargs) -> dict:
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


async def _create_player(client: AsyncClient, **kwargs) -> dict:
    resp = await client.post("/admin/players", json=_player_payload(**kwargs))
    assert resp.status_code == 201, resp.text
    return resp.json()


async def _create_user(client: AsyncClient, username: str = "alice") -> dict:
    resp = await client.post("/users", json={"username": username})
    assert resp.status_code == 201, resp.text
    return resp.json()


@pytest.mark.anyio
async def test_health(client: AsyncClient):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


@pytest.mark.anyio
async def test_admin_create_and_public_listing_hides_points(client: AsyncClient):
    created = await _create_player(client)
    assert created["value"] == 700_000
    assert created["points"] == pytest.approx(65.0)
    assert created["batting_strike_rate"] == pytest.approx(125.0)
    assert created["bowling_strike_rate"] is None

    public = (await client.get("/players")).json()["players"]
    assert public[0]["points"] is None
    assert public[0]["value"] == 700_000

    admin = (await client.get("/admin/players", params={"search": "kasun"})).json()["players"]
    assert admin[0]["points"] == pytest.approx(65.0)


@pytest.mark.anyio
async def test_admin_create_requires_fields(client: AsyncClient):
    payload = _player_payload()
    payload.pop("innings_played")

    resp = await client.post("/admin/players", json=payload)

    assert resp.status_code == 400
    assert resp.json()["detail"] == {
        "code": "invalid_input",
        "message": "Missing required field: innings_played",
    }


@pytest.mark.anyio
async def test_admin_update_and_delete(client: AsyncClient):
    created = await _create_player(client)

    resp = await client.put(f"/admin/players/{created['player_id']}", json={"total_runs": 900})
    assert resp.status_code == 200
    assert resp.json()["total_runs"] == 900
    assert resp.json()["value"] == 700_000

    resp = await client.delete(f"/admin/players/{created['player_id']}")
    assert resp.status_code == 200
    resp = await client.get(f"/players/{created['player_id']}")
    assert resp.status_code == 404


@pytest.mark.anyio
async def test_team_add_remove_flow(client: AsyncClient):
    player = await _create_player(client)
    user = await _create_user(client)
    assert user["budget"] == 9_000_000

    resp = await client.post(f"/users/{user['user_id']}/team/add", json={"player_id": player["player_id"]})
    assert resp.status_code == 200
    body = resp.json()
    assert body["budget"] == 8_300_000
    assert body["team_size"] == 1
    assert body["player"] == {"id": player["player_id"], "name": "Kasun Silva", "value": 700_000}

    resp = await client.post(f"/users/{user['user_id']}/team/add", json={"player_id": player["player_id"]})
    assert resp.status_code == 400
    assert resp.json()["detail"]["code"] == "duplicate_player"

    team = (await client.get(f"/users/{user['user_id']}/team")).json()
    assert team["team_size"] == 1
    assert team["team_complete"] is False
    assert team["team_points"] is None
    assert team["team"][0]["purchase_value"] == 700_000

    resp = await client.post(f"/users/{user['user_id']}/team/remove", json={"player_id": player["player_id"]})
    assert resp.status_code == 200
    assert resp.json()["budget"] == 9_000_000

    resp = await client.post(f"/users/{user['user_id']}/team/remove", json={"player_id": player["player_id"]})
    assert resp.status_code == 400
    assert resp.json()["detail"]["code"] == "player_not_in_roster"


@pytest.mark.anyio
async def test_team_errors_are_distinct(client: AsyncClient):
    user = await _create_user(client)

    resp = await client.post(f"/users/{user['user_id']}/team/add", json={"player_id": "ghost"})
    assert resp.status_code == 404
    assert resp.json()["detail"]["code"] == "player_not_found"

    resp = await client.post("/users/nobody/team/add", json={"player_id": "ghost"})
    assert resp.status_code == 404
    assert resp.json()["detail"]["code"] == "user_not_found"

    resp = await client.post("/users", json={"username": "alice"})
    assert resp.status_code == 409


@pytest.mark.anyio
async def test_seed_leaderboard_and_stats(client: AsyncClient):
    resp = await client.post("/seed")
    assert resp.status_code == 200
    seeded = resp.json()
    assert seeded["imported"] == 13
    assert seeded["predefined_user_id"]

    partial = await _create_user(client, "bob")
    players = (await client.get("/players", params={"category": "Batsman"})).json()["players"]
    await client.post(f"/users/{partial['user_id']}/team/add", json={"player_id": players[0]["player_id"]})

    board = (await client.get("/leaderboard")).json()["leaderboard"]
    assert [entry["username"] for entry in board] == [PREDEFINED_USERNAME, "bob"]
    assert board[0]["is_complete"] is True
    assert board[0]["points"] > 0
    assert board[1]["points"] is None

    team = (await client.get(f"/users/{seeded['predefined_user_id']}/team")).json()
    assert team["budget"] == 0
    assert team["team_points"] == pytest.approx(board[0]["points"])

    stats = (await client.get("/admin/stats")).json()
    assert stats["total_players"] == 13
    assert stats["category_counts"] == {"Batsman": 1, "Bowler": 1, "All-Rounder": 11}
    assert stats["highest_run_scorer"]["name"] == "Kasun Silva"
    assert stats["highest_wicket_taker"]["name"] == "Ravindu Fernando"

    seed_player = players[0]
    resp = await client.delete(f"/admin/players/{seed_player['player_id']}")
    assert resp.status_code == 403
    assert resp.json()["detail"]["code"] == "seed_record_locked"


@pytest.mark.anyio
async def test_team_add_with_quoted_value(client: AsyncClient):
    player = await _create_player(client)
    user = await _create_user(client)
    url = f"/users/{user['user_id']}/team/add"

    resp = await client.post(url, json={"player_id": player["player_id"], "player_value": 1})
    assert resp.status_code == 400
    assert resp.json()["detail"]["code"] == "invalid_input"
    assert (await client.get(f"/users/{user['user_id']}")).json()["budget"] == 9_000_000

    resp = await client.post(url, json={"player_id": player["player_id"], "player_value": 700_000})
    assert resp.status_code == 200
    assert resp.json()["budget"] == 8_300_000
