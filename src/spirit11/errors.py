"""Exception taxonomy for catalog and ledger operations.

Every failure carries a stable ``code`` and a message suitable for showing to
the user as-is. Callers can branch on the base class (``NotFoundError``,
``PreconditionViolated``, ``InvalidInput``) or on the concrete type.
"""

from __future__ import annotations


class Spirit11Error(Exception):
    code = "error"
    default_message = "Operation failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(Spirit11Error):
    code = "not_found"
    default_message = "Not found"


class PreconditionViolated(Spirit11Error):
    code = "precondition_violated"
    default_message = "Operation not allowed"


class InvalidInput(Spirit11Error):
    code = "invalid_input"
    default_message = "Invalid input"


class PlayerNotFound(NotFoundError):
    code = "player_not_found"
    default_message = "Player not found"


class UserNotFound(NotFoundError):
    code = "user_not_found"
    default_message = "User not found"


class RosterFull(PreconditionViolated):
    code = "roster_full"

    def __init__(self, roster_size: int):
        self.roster_size = roster_size
        super().__init__(f"Team is already full ({roster_size} players maximum)")


class DuplicatePlayer(PreconditionViolated):
    code = "duplicate_player"
    default_message = "Player is already in your team"


class InsufficientBudget(PreconditionViolated):
    code = "insufficient_budget"

    def __init__(self, budget: int, value: int):
        self.budget = budget
        self.value = value
        super().__init__(
            f"Insufficient budget to add this player (needs {value:,}, {budget:,} remaining)"
        )


class PlayerNotInRoster(PreconditionViolated):
    code = "player_not_in_roster"
    default_message = "Player is not in your team"


class SeedRecordLocked(PreconditionViolated):
    code = "seed_record_locked"
    default_message = "Players from the seed dataset cannot be modified"


class UsernameTaken(PreconditionViolated):
    code = "username_taken"
    default_message = "Username is already taken"
