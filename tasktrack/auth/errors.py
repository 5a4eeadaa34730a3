"""Error taxonomy for authentication, authorization and persistence.

Every error carries an HTTP status code, a machine-readable code and a
generic message that is safe to return to clients. Internal detail goes in
the exception text and is only ever logged.

Usage:
    from tasktrack.auth.errors import NotFoundOrForbidden

    raise NotFoundOrForbidden(f"Task {task_id} not visible to {user_id}")
"""

from typing import Any, Dict


class TaskTrackError(Exception):
    """Base exception with status code and client-safe message."""

    status_code: int = 500
    code: str = "INTERNAL_ERROR"
    public_message: str = "Internal server error"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to API-friendly dictionary (never includes internal detail)."""
        return {"detail": self.public_message}


class IdentityInvalid(TaskTrackError):
    """Google ID token failed verification (signature, audience, expiry, payload)."""

    status_code = 500
    code = "IDENTITY_INVALID"
    public_message = "Login failed"


class ProfileFetchFailed(TaskTrackError):
    """The user record could not be built on first login (avatar fetch or insert race)."""

    status_code = 500
    code = "PROFILE_FETCH_FAILED"
    public_message = "Login failed"


class Unauthenticated(TaskTrackError):
    """No bearer credential on a protected request."""

    status_code = 401
    code = "UNAUTHENTICATED"
    public_message = "Missing token"


class TokenInvalid(TaskTrackError):
    """Session token is malformed or its signature does not verify."""

    status_code = 401
    code = "TOKEN_INVALID"
    public_message = "Invalid token"


class TokenExpired(TaskTrackError):
    """Session token is correctly signed but past its expiry."""

    status_code = 401
    code = "TOKEN_EXPIRED"
    public_message = "Invalid token"


class NotFoundOrForbidden(TaskTrackError):
    """Resource does not exist or is owned by another user (deliberately indistinguishable)."""

    status_code = 404
    code = "NOT_FOUND"
    public_message = "Not found"


class PersistenceFailure(TaskTrackError):
    """Database operation failed."""

    status_code = 500
    code = "PERSISTENCE_FAILURE"
    public_message = "Internal server error"
