"""Custom exceptions for the sorelgame package.

Every error raised by the engine signals either a logic defect (an invariant
violation) or a breach of the driver contract by the caller. None of them are
retryable, so nothing inside the package catches them.
"""
from __future__ import annotations


class SorelGameError(Exception):
    """Base exception for all game-related errors."""
    pass


class InvariantViolation(SorelGameError):
    """Raised when the board or a card reaches a state the rules forbid."""
    pass


class EncodingError(InvariantViolation):
    """Raised when a move or an action id falls outside every move category."""
    pass


class InvalidActionError(SorelGameError):
    """Raised when an action is invalid for the current game state."""
    pass


class PreconditionError(InvalidActionError):
    """Raised when the caller requests an operation the current state cannot perform."""
    pass


class InvalidPlayerError(SorelGameError):
    """Raised when a player id other than the single seat is supplied."""
    pass


class ConfigurationError(SorelGameError):
    """Raised when game parameters are missing, unknown or out of range."""
    pass


__all__ = [
    "SorelGameError",
    "InvariantViolation",
    "EncodingError",
    "InvalidActionError",
    "PreconditionError",
    "InvalidPlayerError",
    "ConfigurationError",
]
