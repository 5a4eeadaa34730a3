"""Google ID token verification for user login."""

import logging
import os
from functools import lru_cache
from typing import Optional

from google.oauth2 import id_token
from google.auth import exceptions as google_auth_exceptions
from google.auth.transport import requests
from dotenv import load_dotenv
from pydantic import BaseModel

from tasktrack.auth.errors import IdentityInvalid

load_dotenv()

logger = logging.getLogger(__name__)

# Google OAuth configuration
GOOGLE_OAUTH_CLIENT_ID = os.getenv("GOOGLE_OAUTH_CLIENT_ID")

GOOGLE_ISSUERS = ("accounts.google.com", "https://accounts.google.com")


class IdentityClaim(BaseModel):
    """Verified identity attributes taken from a Google ID token."""

    email: str
    name: Optional[str] = None
    picture: Optional[str] = None


class GoogleIdentityVerifier:
    """Verifies Google Sign-In ID tokens against a fixed audience."""

    def __init__(self, client_id: Optional[str]):
        self.client_id = client_id
        # Reused across calls; google-auth fetches Google's public certs through it.
        self._transport = requests.Request()

    def verify(self, credential: str) -> IdentityClaim:
        """Verify a Google ID token and extract user information.
        
        Args:
            credential: Google ID token string posted by the web client
            
        Returns:
            IdentityClaim with email, name and picture URL
            
        Raises:
            IdentityInvalid: if the token cannot be trusted
        """
        if not self.client_id:
            raise IdentityInvalid("GOOGLE_OAUTH_CLIENT_ID is not configured")
        if not credential:
            raise IdentityInvalid("Empty Google credential")

        try:
            idinfo = id_token.verify_oauth2_token(credential, self._transport, self.client_id)
        except (ValueError, google_auth_exceptions.GoogleAuthError) as e:
            raise IdentityInvalid(f"Google ID token rejected: {e}") from e

        if idinfo.get("iss") not in GOOGLE_ISSUERS:
            raise IdentityInvalid(f"Unexpected token issuer: {idinfo.get('iss')}")

        email = idinfo.get("email")
        if not email:
            raise IdentityInvalid("Google ID token carries no email")

        return IdentityClaim(
            email=email,
            name=idinfo.get("name"),
            picture=idinfo.get("picture"),
        )


@lru_cache(maxsize=1)
def get_identity_verifier() -> GoogleIdentityVerifier:
    """Process-wide identity verifier (dependency for FastAPI)."""
    if not GOOGLE_OAUTH_CLIENT_ID:
        logger.warning("GOOGLE_OAUTH_CLIENT_ID is not set; every login will be rejected")
    return GoogleIdentityVerifier(GOOGLE_OAUTH_CLIENT_ID)
