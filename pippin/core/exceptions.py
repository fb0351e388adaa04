"""
core/exceptions.py
------------------
Error kinds raised by the board engine.

Every runtime error is recoverable per request: the route layer turns it
into a structured JSON failure via the handler registered in main.py.
ConfigError is the exception: it is only raised while loading settings and
stops the process from starting.
"""

from typing import Any, Dict


class BoardError(Exception):
    """Base class for core-level rejections."""

    code = "BOARD_ERROR"
    status_code = 400

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.code, "detail": self.message}


class NotFound(BoardError):
    code = "NOT_FOUND"
    status_code = 404


class LimitExceeded(BoardError):
    code = "LIMIT_EXCEEDED"
    status_code = 400


class InvalidMove(BoardError):
    code = "INVALID_MOVE"
    status_code = 400


class PersistenceError(BoardError):
    """Constraint violation or storage failure; the driver message is kept."""

    code = "PERSISTENCE_ERROR"
    status_code = 500


class ConfigError(Exception):
    """Invalid sprint epoch/length or other startup configuration."""
