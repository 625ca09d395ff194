import pytest

from spirit11.config import LeagueRules
from spirit11.leaderboard import rank_users, team_points
from spirit11.models import PlayerRecord, RosterEntry, UserRecord
from spirit11.scoring import score_player


def _players(count: int = 12) -> dict[str, PlayerRecord]:
    players = {}
    for index in range(count):
        player = PlayerRecord(
            player_id=f"p{index}",
            name=f"Player {index}",
            university="University of Peradeniya",
            category="Batsman",
            total_runs=100 + 25 * index,
            balls_faced=100,
            innings_played=5,
        )
        players[player.player_id] = player
    return players


def _user(user_id: str, player_ids: list[str]) -> UserRecord:
    return UserRecord(
        user_id=user_id,
        username=f"user-{user_id}",
        budget=0,
        team=[RosterEntry(player_id=player_id, value=100_000) for player_id in player_ids],
    )


def test_complete_team_scores_exact_sum_and_partial_team_has_no_score():
    players = _players()
    full = _user("u1", [f"p{index}" for index in range(11)])
    partial = _user("u2", [f"p{index}" for index in range(10)])

    entries = list(rank_users([partial, full], players))

    expected = sum(score_player(players[f"p{index}"]) for index in range(11))
    assert [entry.user_id for entry in entries] == ["u1", "u2"]
    assert entries[0].points == pytest.approx(expected)
    assert entries[0].is_complete
    assert entries[1].points is None
    assert not entries[1].is_complete
    assert entries[1].team_size == 10
    assert [entry.rank for entry in entries] == [1, 2]


def test_ranking_orders_by_points_then_user_id():
    players = _players()
    low = _user("a", [f"p{index}" for index in range(11)])
    high = _user("z", [f"p{index}" for index in range(1, 12)])
    tie = _user("m", [f"p{index}" for index in range(1, 12)])
    empty = _user("b", [])

    entries = list(rank_users([low, high, empty, tie], players))

    assert [entry.user_id for entry in entries] == ["m", "z", "a", "b"]
    assert entries[0].points == entries[1].points


def test_leaderboard_is_restartable_and_recomputed():
    players = _players()
    users = [_user("u1", [f"p{index}" for index in range(11)])]
    board = rank_users(lambda: list(users), players.get)

    first = list(board)
    users.append(_user("u0", [f"p{index}" for index in range(1, 12)]))
    players["p0"] = players["p0"].model_copy(update={"total_runs": 10_000})
    second = list(board)

    assert len(first) == 1
    assert len(second) == 2
    assert second[0].user_id == "u1"
    assert second[0].points > first[0].points


def test_team_points_uses_current_stats_not_cached_points():
    players = _players()
    stale = {pid: player.model_copy(update={"points": 999.0}) for pid, player in players.items()}
    user = _user("u1", [f"p{index}" for index in range(11)])

    assert team_points(user, stale) == pytest.approx(
        sum(score_player(players[f"p{index}"]) for index in range(11))
    )


def test_team_points_respects_configured_roster_size():
    players = _players()
    user = _user("u1", ["p0", "p1", "p2"])

    assert team_points(user, players) is None
    assert team_points(user, players, LeagueRules(roster_size=3)) == pytest.approx(
        sum(score_player(players[pid]) for pid in ("p0", "p1", "p2"))
    )
