"""User rankings."""

from .ranking import Leaderboard, LeaderboardEntry, rank_users, team_points

__all__ = ["Leaderboard", "LeaderboardEntry", "rank_users", "team_points"]
