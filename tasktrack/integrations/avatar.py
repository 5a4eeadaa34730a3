"""Avatar image fetching for new user profiles."""

import base64
import logging
import os
from typing import Optional

import requests
from dotenv import load_dotenv

from tasktrack.auth.errors import ProfileFetchFailed

load_dotenv()

logger = logging.getLogger(__name__)

AVATAR_FETCH_TIMEOUT_SEC = float(os.getenv("AVATAR_FETCH_TIMEOUT_SEC", "10"))


def fetch_image_as_base64(url: str, timeout: Optional[float] = None) -> str:
    """Download an image and return its bytes as base64 text.

    Args:
        url: Image URL (e.g. the `picture` claim of a Google ID token)
        timeout: Request timeout in seconds (defaults to AVATAR_FETCH_TIMEOUT_SEC)

    Raises:
        ProfileFetchFailed: on any network error or non-2xx response
    """
    try:
        response = requests.get(url, timeout=timeout or AVATAR_FETCH_TIMEOUT_SEC)
        response.raise_for_status()
    except requests.RequestException as e:
        raise ProfileFetchFailed(f"Failed to fetch avatar image: {type(e).__name__}: {e}") from e

    logger.debug(f"Fetched avatar image ({len(response.content)} bytes)")
    return base64.b64encode(response.content).decode("ascii")
