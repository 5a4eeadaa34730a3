"""FastAPI dependencies for authentication."""

import logging
from typing import Optional

from fastapi import Depends, Header

from tasktrack.auth.errors import TokenExpired, TokenInvalid, Unauthenticated
from tasktrack.auth.jwt import SessionTokenService, get_session_tokens

logger = logging.getLogger(__name__)


def authenticate(authorization: Optional[str], tokens: SessionTokenService) -> str:
    """Resolve the user ID carried by a raw Authorization header.

    Args:
        authorization: Raw header value, expected as "Bearer <token>"
        tokens: Session token service used for verification

    Returns:
        User ID the session token was issued to

    Raises:
        Unauthenticated: header missing or not a bearer credential
        TokenInvalid: token malformed or signature mismatch
        TokenExpired: token correctly signed but expired
    """
    if not authorization:
        logger.info("Rejected request: no Authorization header")
        raise Unauthenticated("Missing Authorization header")

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        logger.info("Rejected request: Authorization header is not a bearer credential")
        raise Unauthenticated("Authorization header is not a bearer credential")

    try:
        return tokens.verify(parts[1])
    except TokenExpired as e:
        logger.info(f"Rejected request: {e}")
        raise
    except TokenInvalid as e:
        logger.warning(f"Rejected request: {e}")
        raise


def get_current_user_id(
    authorization: Optional[str] = Header(default=None),
    tokens: SessionTokenService = Depends(get_session_tokens),
) -> str:
    """Get the authenticated user ID for the current request.

    Performs no database access; the ID is only valid for this request.
    """
    return authenticate(authorization, tokens)
