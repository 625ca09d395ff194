"""Roster and budget bookkeeping."""

from .service import TEAM_UPDATE_EVENT, LedgerResult, TeamLedger

__all__ = ["TEAM_UPDATE_EVENT", "LedgerResult", "TeamLedger"]
