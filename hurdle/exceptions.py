"""
Hurdle Exceptions

Errors raised for programmer and integrity failures. Player mistakes are
never raised; they come back as a GuessResult instead.
"""


class HurdleError(Exception):
    """Base class for all engine errors."""

    pass


class LengthMismatchError(HurdleError, ValueError):
    """Raised when a guess and a target word differ in length."""

    pass


class InvalidGuessCountError(HurdleError, ValueError):
    """Raised when a guess count has no scoring multiplier."""

    pass


class InvalidHurdleNumberError(HurdleError, ValueError):
    """Raised when a hurdle number is not a positive integer."""

    pass


class GameOverError(HurdleError):
    """Raised when a guess is added to a round that already finished."""

    pass


class ChainSequenceError(HurdleError):
    """Raised when a completed hurdle arrives out of sequence."""

    pass


class ChainStateCorruptionError(HurdleError):
    """Raised when chain state cannot be brought back to a consistent shape."""

    pass


class SessionClosedError(HurdleError):
    """Raised when a closed session is modified."""

    pass


class WordProviderError(HurdleError):
    """Raised by word providers when a lookup fails."""

    pass


class WordSelectionError(HurdleError):
    """Raised when no selection strategy produced a playable word."""

    pass
