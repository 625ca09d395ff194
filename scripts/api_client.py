"""Lightweight REST client for the spirit11 API."""

from __future__ import annotations

import argparse
import json

import httpx


def _print_or_exit(resp: httpx.Response, *, what: str) -> None:
    if resp.status_code >= 400:
        try:
            detail = resp.json().get("detail")
        except ValueError:
            detail = resp.text
        if isinstance(detail, dict):
            detail = detail.get("message", detail)
        raise SystemExit(f"{what} failed ({resp.status_code}): {detail}")
    print(json.dumps(resp.json(), indent=2))


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the spirit11 REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("--players", action="store_true", help="List players")
    parser.add_argument("--category", help="Category filter for --players")
    parser.add_argument("--leaderboard", action="store_true", help="Show the leaderboard")
    parser.add_argument("--user", metavar="USER_ID", help="User to act on")
    parser.add_argument("--team", action="store_true", help="Show the user's team")
    parser.add_argument("--add", metavar="PLAYER_ID", help="Add a player to the user's team")
    parser.add_argument("--remove", metavar="PLAYER_ID", help="Remove a player from the user's team")
    parser.add_argument("--seed", action="store_true", help="Seed the database from the configured CSV")
    args = parser.parse_args()

    with httpx.Client(base_url=args.base_url) as client:
        if args.seed:
            _print_or_exit(client.post("/seed"), what="seed")
        if args.players:
            params = {"category": args.category} if args.category else None
            _print_or_exit(client.get("/players", params=params), what="list players")
        if args.leaderboard:
            _print_or_exit(client.get("/leaderboard"), what="leaderboard")

        if args.add or args.remove or args.team:
            if not args.user:
                raise SystemExit("--user is required for --team/--add/--remove")
            if args.add:
                resp = client.post(f"/users/{args.user}/team/add", json={"player_id": args.add})
                _print_or_exit(resp, what="add player")
            if args.remove:
                resp = client.post(f"/users/{args.user}/team/remove", json={"player_id": args.remove})
                _print_or_exit(resp, what="remove player")
            if args.team:
                _print_or_exit(client.get(f"/users/{args.user}/team"), what="fetch team")


if __name__ == "__main__":
    main()
