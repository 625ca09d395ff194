"""Fantasy cricket league: player valuation, team budgets and rankings."""

__version__ = "0.1.0"
