"""Session token issuing and verification for tasktrack.

Session tokens are stateless HS256 JWTs: nothing is stored server-side, so the
only way a token stops working is its expiry.
"""

import logging
import os
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Optional

import jwt
from dotenv import load_dotenv

from tasktrack.auth.errors import TokenExpired, TokenInvalid

load_dotenv()

logger = logging.getLogger(__name__)

DEV_SECRET_KEY = "change-me-in-production"

# JWT configuration
JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", DEV_SECRET_KEY)
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXPIRATION_HOURS = int(os.getenv("JWT_EXPIRATION_HOURS", "24"))

MIN_EXPIRATION = timedelta(days=1)
MAX_EXPIRATION = timedelta(days=31)


class SessionTokenService:
    """Mints and verifies session tokens bound to a user id.

    The signing key and validity window are fixed at construction and never
    change for the lifetime of the instance.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expires_in: timedelta = timedelta(hours=24),
    ):
        if not secret_key:
            raise ValueError("A JWT signing secret is required")
        if not (MIN_EXPIRATION <= expires_in <= MAX_EXPIRATION):
            raise ValueError(
                f"Token lifetime must be between {MIN_EXPIRATION} and {MAX_EXPIRATION}, got {expires_in}"
            )
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expires_in = expires_in

    def issue(self, user_id: str, now: Optional[datetime] = None) -> str:
        """Create a signed session token for a user.
        
        Args:
            user_id: User ID to encode in token
            now: Issue time (defaults to the current UTC time)
            
        Returns:
            Encoded JWT token string
        """
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            "sub": user_id,
            "iat": issued_at,
            "exp": issued_at + self.expires_in,
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> str:
        """Verify a session token and return the user ID it was issued to.
        
        Raises:
            TokenExpired: signature is valid but the token is past its expiry
            TokenInvalid: anything else (bad signature, malformed, missing claims)
        """
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"require": ["sub", "exp"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpired(f"Session token expired: {e}") from e
        except jwt.InvalidTokenError as e:
            raise TokenInvalid(f"Session token rejected: {type(e).__name__}: {e}") from e

        user_id = payload.get("sub")
        if not isinstance(user_id, str) or not user_id:
            raise TokenInvalid("Session token has no usable subject")
        return user_id


@lru_cache(maxsize=1)
def get_session_tokens() -> SessionTokenService:
    """Process-wide session token service (dependency for FastAPI)."""
    if JWT_SECRET_KEY == DEV_SECRET_KEY:
        logger.warning("JWT_SECRET_KEY is not set; using the development default secret")
    return SessionTokenService(
        secret_key=JWT_SECRET_KEY,
        algorithm=JWT_ALGORITHM,
        expires_in=timedelta(hours=JWT_EXPIRATION_HOURS),
    )
