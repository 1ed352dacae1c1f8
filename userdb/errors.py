from __future__ import annotations

# userdb/errors.py


class UserDbError(Exception):
    """Base error. `diagnostic` holds the engine's own message text, if any."""

    def __init__(self, message: str, diagnostic: str | None = None):
        super().__init__(message)
        self.message = message
        self.diagnostic = diagnostic


class OpenFailed(UserDbError):
    pass


class SchemaFailed(UserDbError):
    pass


class InvalidArgument(UserDbError, ValueError):
    pass


class PrepareFailed(UserDbError):
    pass


class ExecFailed(UserDbError):
    pass


class QueryFailed(UserDbError):
    pass
