"""Tournament-wide statistics for administrators."""

from .summary import PlayerHighlight, TournamentSummary, tournament_summary

__all__ = ["PlayerHighlight", "TournamentSummary", "tournament_summary"]
