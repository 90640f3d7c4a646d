class SessionError(Exception):
    """Base class for game session errors."""


class InvalidMoveError(SessionError):
    """A move payload could not be understood as a move at all."""


class InvalidPositionError(SessionError):
    """A serialized position could not be loaded."""
