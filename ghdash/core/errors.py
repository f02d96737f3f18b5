# ghdash/core/errors.py
"""Error kinds surfaced to callers of the session and pull-request services."""


class GHDashError(Exception):
    """Base class for recoverable ghdash failures."""


class TokenNotFoundError(GHDashError):
    def __init__(self, message: str = "No access token stored"):
        super().__init__(message)


class UserNotSetError(GHDashError):
    def __init__(self, message: str = "No user linked to the active token"):
        super().__init__(message)


class RemoteError(GHDashError):
    """A GitHub API call failed. `status_code` is None for transport failures."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class BadCredentialError(RemoteError):
    pass


class UnknownError(RemoteError):
    pass


class StorageError(GHDashError):
    """Local database failure. The original SQLAlchemy error is chained."""


class StoreStateError(RuntimeError):
    """Store used out of lifecycle order (double connect, use before connect)."""
