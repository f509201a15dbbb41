"""Error kinds raised by game operations.

Every operation checks all of its preconditions before touching the account,
so raising one of these leaves the account exactly as it was.
"""


class GameError(Exception):
    """Base class for rejected game operations."""

    code = "game_error"

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.__class__.__doc__
        super().__init__(self.detail)


class Unauthorized(GameError):
    """Caller is not in the admin set."""

    code = "unauthorized"


class AccountNotFound(GameError):
    """Account does not exist."""

    code = "account_not_found"


class AccountAlreadyExists(GameError):
    """Account is already registered."""

    code = "account_already_exists"


class RoundAlreadyPlayed(GameError):
    """Round has already been played."""

    # Declared for completeness; play_round allows replays.
    code = "round_already_played"


class PreviousRoundNotCertified(GameError):
    """Prerequisite round has not been certified."""

    code = "previous_round_not_certified"


class RoundNotPlayed(GameError):
    """Round has not been played."""

    code = "round_not_played"


class InsufficientCredits(GameError):
    """Not enough credits to play."""

    code = "insufficient_credits"


class TreasureAlreadyOpened(GameError):
    """Treasure for this round has already been opened."""

    code = "treasure_already_opened"


class TooEarlyToClaim(GameError):
    """Periodic credit cooldown has not elapsed."""

    code = "too_early_to_claim"


class InvalidRound(GameError):
    """Round number is out of range."""

    code = "invalid_round"
