from typing import Optional


class WagerValidationError(Exception):
    """Base class for bets rejected before any randomness is drawn."""

    code = "invalid_request"

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field

    def to_dict(self) -> dict:
        return {"error": self.code, "field": self.field, "detail": self.message}


class MissingField(WagerValidationError):
    code = "missing_field"


class InvalidEnum(WagerValidationError):
    code = "invalid_enum"


class OutOfRange(WagerValidationError):
    code = "out_of_range"


class InvalidBet(WagerValidationError):
    code = "invalid_bet"


class GameDisabled(WagerValidationError):
    code = "game_disabled"
