"""REST API for the spirit11 fantasy league."""

from __future__ import annotations

import logging
import os
from dataclasses import asdict
from pathlib import Path

from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import StreamingResponse

from spirit11.analytics import tournament_summary
from spirit11.api.schemas import (
    LeaderboardEntryResponse,
    LeaderboardResponse,
    PlayerCreateRequest,
    PlayerListResponse,
    PlayerResponse,
    PlayerUpdateRequest,
    SeedResponse,
    TeamChangePlayer,
    TeamChangeRequest,
    TeamChangeResponse,
    TeamPlayerResponse,
    TeamResponse,
    TournamentStatsResponse,
    UserCreateRequest,
    UserResponse,
)
from spirit11.catalog import create_player, delete_player, list_players, update_player
from spirit11.config import PREDEFINED_TEAM, PREDEFINED_USERNAME, LeagueRules, load_rules
from spirit11.errors import (
    InvalidInput,
    NotFoundError,
    PreconditionViolated,
    SeedRecordLocked,
    Spirit11Error,
    UsernameTaken,
)
from spirit11.ingest import import_players_csv, seed_predefined_user
from spirit11.ledger import LedgerResult, TeamLedger
from spirit11.leaderboard import rank_users, team_points
from spirit11.models import PlayerRecord, UserRecord
from spirit11.notify import UpdateRegistry
from spirit11.persistence import LeagueStore


logger = logging.getLogger(__name__)

_SEED_CSV_ENV = "SPIRIT11_SEED_CSV"


def _error_status(exc: Spirit11Error) -> int:
    if isinstance(exc, NotFoundError):
        return 404
    if isinstance(exc, SeedRecordLocked):
        return 403
    if isinstance(exc, UsernameTaken):
        return 409
    if isinstance(exc, (PreconditionViolated, InvalidInput)):
        return 400
    return 500


def _to_http(exc: Spirit11Error) -> HTTPException:
    return HTTPException(
        status_code=_error_status(exc),
        detail={"code": exc.code, "message": exc.message},
    )


def _user_response(user: UserRecord) -> UserResponse:
    return UserResponse(
        user_id=user.user_id,
        username=user.username,
        budget=user.budget,
        team_size=user.team_size,
    )


def _change_response(message: str, result: LedgerResult) -> TeamChangeResponse:
    return TeamChangeResponse(
        message=message,
        team_size=result.team_size,
        budget=result.budget,
        player=TeamChangePlayer(id=result.player_id, name=result.player_name, value=result.value),
    )


def create_app(
    store: LeagueStore | None = None,
    rules: LeagueRules | None = None,
    *,
    registry: UpdateRegistry | None = None,
    seed_csv: Path | None = None,
) -> FastAPI:
    app = FastAPI(title="spirit11 fantasy league")
    store = store or LeagueStore()
    rules = rules or load_rules()
    registry = registry or UpdateRegistry()
    ledger = TeamLedger(store, store, rules, notifier=registry)
    if seed_csv is None and os.getenv(_SEED_CSV_ENV):
        seed_csv = Path(os.environ[_SEED_CSV_ENV])

    app.state.store = store
    app.state.rules = rules
    app.state.registry = registry
    app.state.ledger = ledger

    def _fetch_player_or_404(player_id: str) -> PlayerRecord:
        player = store.get_player(player_id)
        if player is None:
            raise HTTPException(status_code=404, detail={"code": "player_not_found", "message": "Player not found"})
        return player

    def _fetch_user_or_404(user_id: str) -> UserRecord:
        user = store.get_user(user_id)
        if user is None:
            raise HTTPException(status_code=404, detail={"code": "user_not_found", "message": "User not found"})
        return user

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/players", response_model=PlayerListResponse)
    async def get_players(
        category: str | None = Query(None),
        search: str | None = Query(None),
    ) -> PlayerListResponse:
        players = list_players(store, category=category, search=search)
        return PlayerListResponse(players=[PlayerResponse.from_record(player) for player in players])

    @app.get("/players/{player_id}", response_model=PlayerResponse)
    async def get_player(player_id: str) -> PlayerResponse:
        return PlayerResponse.from_record(_fetch_player_or_404(player_id))

    @app.get("/admin/players", response_model=PlayerListResponse)
    async def admin_list_players(
        category: str | None = Query(None),
        search: str | None = Query(None),
    ) -> PlayerListResponse:
        players = list_players(store, category=category, search=search)
        return PlayerListResponse(
            players=[PlayerResponse.from_record(player, include_points=True) for player in players]
        )

    @app.post("/admin/players", response_model=PlayerResponse, status_code=201)
    async def admin_create_player(payload: PlayerCreateRequest) -> PlayerResponse:
        try:
            player = create_player(store, payload.model_dump(exclude_none=True), rules)
        except Spirit11Error as exc:
            raise _to_http(exc) from exc
        return PlayerResponse.from_record(player, include_points=True)

    @app.get("/admin/players/{player_id}", response_model=PlayerResponse)
    async def admin_get_player(player_id: str) -> PlayerResponse:
        return PlayerResponse.from_record(_fetch_player_or_404(player_id), include_points=True)

    @app.put("/admin/players/{player_id}", response_model=PlayerResponse)
    async def admin_update_player(player_id: str, payload: PlayerUpdateRequest) -> PlayerResponse:
        try:
            player = update_player(store, player_id, payload.model_dump(exclude_none=True), rules)
        except Spirit11Error as exc:
            raise _to_http(exc) from exc
        return PlayerResponse.from_record(player, include_points=True)

    @app.delete("/admin/players/{player_id}")
    async def admin_delete_player(player_id: str) -> dict[str, str]:
        try:
            delete_player(store, player_id)
        except Spirit11Error as exc:
            raise _to_http(exc) from exc
        return {"message": "Player deleted successfully"}

    @app.get("/admin/stats", response_model=TournamentStatsResponse)
    async def admin_stats() -> TournamentStatsResponse:
        summary = tournament_summary(store.list_players())
        return TournamentStatsResponse.model_validate(asdict(summary))

    @app.post("/users", response_model=UserResponse, status_code=201)
    async def create_user(payload: UserCreateRequest) -> UserResponse:
        try:
            user = store.create_user(payload.username.strip(), budget=rules.starting_budget)
        except Spirit11Error as exc:
            raise _to_http(exc) from exc
        return _user_response(user)

    @app.get("/users/{user_id}", response_model=UserResponse)
    async def get_user(user_id: str) -> UserResponse:
        return _user_response(_fetch_user_or_404(user_id))

    @app.get("/users/{user_id}/team", response_model=TeamResponse)
    async def get_team(user_id: str) -> TeamResponse:
        user = _fetch_user_or_404(user_id)
        members: list[TeamPlayerResponse] = []
        lookup: dict[str, PlayerRecord] = {}
        for entry in user.team:
            player = store.get_player(entry.player_id)
            if player is None:
                logger.warning("Roster of %s references missing player %s", user_id, entry.player_id)
                continue
            lookup[player.player_id] = player
            base = PlayerResponse.from_record(player)
            members.append(TeamPlayerResponse(**base.model_dump(), purchase_value=entry.value))
        points = team_points(user, lookup, rules)
        return TeamResponse(
            team=members,
            budget=user.budget,
            team_size=user.team_size,
            team_complete=points is not None,
            team_points=points,
        )

    @app.post("/users/{user_id}/team/add", response_model=TeamChangeResponse)
    async def add_to_team(user_id: str, payload: TeamChangeRequest) -> TeamChangeResponse:
        try:
            result = ledger.add_player(user_id, payload.player_id, payload.player_value)
        except Spirit11Error as exc:
            raise _to_http(exc) from exc
        return _change_response("Player added to team successfully", result)

    @app.post("/users/{user_id}/team/remove", response_model=TeamChangeResponse)
    async def remove_from_team(user_id: str, payload: TeamChangeRequest) -> TeamChangeResponse:
        try:
            result = ledger.remove_player(user_id, payload.player_id)
        except Spirit11Error as exc:
            raise _to_http(exc) from exc
        return _change_response("Player removed from team successfully", result)

    @app.get("/leaderboard", response_model=LeaderboardResponse)
    async def leaderboard() -> LeaderboardResponse:
        ranking = rank_users(store.list_users, store.get_player, rules)
        return LeaderboardResponse(
            leaderboard=[
                LeaderboardEntryResponse(
                    rank=entry.rank,
                    user_id=entry.user_id,
                    username=entry.username,
                    team_size=entry.team_size,
                    points=entry.points,
                    is_complete=entry.is_complete,
                )
                for entry in ranking
            ]
        )

    @app.get("/updates/{user_id}")
    async def updates(user_id: str) -> StreamingResponse:
        _fetch_user_or_404(user_id)
        subscription = registry.register(user_id)
        return StreamingResponse(
            registry.stream(subscription),
            media_type="text/event-stream",
            headers={"Cache-Control": "no-cache", "Connection": "keep-alive"},
        )

    @app.post("/seed", response_model=SeedResponse)
    async def seed() -> SeedResponse:
        if seed_csv is None:
            raise HTTPException(status_code=400, detail={"code": "seed_not_configured", "message": "No seed CSV configured"})
        if not seed_csv.exists():
            raise HTTPException(status_code=400, detail={"code": "seed_not_found", "message": f"Seed CSV {seed_csv} not found"})
        report = import_players_csv(store, seed_csv, rules=rules)
        user = seed_predefined_user(store, ledger, PREDEFINED_USERNAME, PREDEFINED_TEAM)
        return SeedResponse(
            message="Database seeded successfully",
            imported=report.imported,
            skipped_existing=report.skipped_existing,
            rejected_rows=report.rejected_rows,
            predefined_user_id=user.user_id if user else None,
        )

    return app
