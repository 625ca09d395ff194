"""Command-line interface for seeding and inspecting a league database."""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import asdict
from pathlib import Path

from spirit11.analytics import tournament_summary
from spirit11.config import PREDEFINED_TEAM, PREDEFINED_USERNAME, load_rules
from spirit11.ingest import import_players_csv, seed_predefined_user
from spirit11.ledger import TeamLedger
from spirit11.leaderboard import rank_users
from spirit11.persistence import LeagueStore
from spirit11.scoring import compute_score, compute_value, derive_stats


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Manage a spirit11 fantasy league")
    parser.add_argument("--db", type=Path, default=None, help="SQLite database path (default: $SPIRIT11_DB_PATH)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    import_parser = sub.add_parser("import", help="Import the seed players CSV")
    import_parser.add_argument("csv", type=Path, help="Path to players CSV")
    import_parser.add_argument(
        "--with-user",
        action="store_true",
        help=f"Also create the predefined {PREDEFINED_USERNAME!r} user and team",
    )

    sub.add_parser("leaderboard", help="Print the current leaderboard")
    sub.add_parser("stats", help="Print tournament statistics as JSON")

    value_parser = sub.add_parser("value", help="Show derived stats, score and value for players")
    value_parser.add_argument("names", nargs="*", help="Player names (all players when omitted)")
    return parser.parse_args()


def _cmd_import(store: LeagueStore, args: argparse.Namespace) -> None:
    rules = load_rules()
    report = import_players_csv(store, args.csv, rules=rules)
    if report.skipped_existing:
        print("Players already imported, skipping")
    else:
        print(f"Imported {report.imported}/{report.total_rows} players")
    if report.rejected_rows:
        preview = ", ".join(report.rejected_rows[:5])
        more = len(report.rejected_rows) - 5
        suffix = f", +{more} more" if more > 0 else ""
        print(f"Rejected rows: {preview}{suffix}")
    if args.with_user:
        ledger = TeamLedger(store, store, rules)
        user = seed_predefined_user(store, ledger, PREDEFINED_USERNAME, PREDEFINED_TEAM)
        if user is not None:
            print(f"Created {user.username} with {user.team_size} players, budget {user.budget:,}")


def _cmd_leaderboard(store: LeagueStore) -> None:
    for entry in rank_users(store.list_users, store.get_player, load_rules()):
        points = f"{entry.points:.2f}" if entry.points is not None else "incomplete"
        print(f"{entry.rank:>3}. {entry.username:<24} {entry.team_size:>2} players  {points}")


def _cmd_stats(store: LeagueStore) -> None:
    summary = tournament_summary(store.list_players())
    print(json.dumps(asdict(summary), indent=2))


def _cmd_value(store: LeagueStore, names: list[str]) -> None:
    rules = load_rules()
    players = store.list_players()
    if names:
        wanted = set(names)
        players = [player for player in players if player.name in wanted]
        missing = wanted - {player.name for player in players}
        for name in sorted(missing):
            print(f"{name}: not found")
    for player in players:
        stats = derive_stats(player)
        bowling_sr = f"{stats.bowling_strike_rate:.2f}" if stats.bowling_strike_rate is not None else "N/A"
        print(
            f"{player.name} ({player.category}, {player.university}): "
            f"SR {stats.batting_strike_rate:.2f}, avg {stats.batting_average:.2f}, "
            f"bowl SR {bowling_sr}, econ {stats.economy_rate:.2f}, "
            f"score {compute_score(stats):.2f}, value {compute_value(player, rules):,}"
        )


def main() -> None:
    args = _parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)
    store = LeagueStore(args.db)

    if args.command == "import":
        _cmd_import(store, args)
    elif args.command == "leaderboard":
        _cmd_leaderboard(store)
    elif args.command == "stats":
        _cmd_stats(store)
    elif args.command == "value":
        _cmd_value(store, args.names)


if __name__ == "__main__":
    main()
