"""Tests for avatar image fetching."""

import pytest
import requests
from unittest.mock import MagicMock, patch

from tasktrack.auth.errors import ProfileFetchFailed
from tasktrack.integrations.avatar import fetch_image_as_base64


def test_image_bytes_are_base64_encoded():
    response = MagicMock()
    response.content = b"\x89PNG\r\n"
    with patch("tasktrack.integrations.avatar.requests.get", return_value=response) as mock_get:
        encoded = fetch_image_as_base64("https://example.com/a.png", timeout=3)

    assert encoded == "iVBORw0K"
    mock_get.assert_called_once_with("https://example.com/a.png", timeout=3)


def test_network_error_raises_profile_fetch_failed():
    with patch(
        "tasktrack.integrations.avatar.requests.get",
        side_effect=requests.ConnectionError("unreachable"),
    ):
        with pytest.raises(ProfileFetchFailed):
            fetch_image_as_base64("https://example.com/a.png")


def test_http_error_raises_profile_fetch_failed():
    response = MagicMock()
    response.raise_for_status.side_effect = requests.HTTPError("404 Client Error")
    with patch("tasktrack.integrations.avatar.requests.get", return_value=response):
        with pytest.raises(ProfileFetchFailed):
            fetch_image_as_base64("https://example.com/missing.png")
