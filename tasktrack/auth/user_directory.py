"""Lookup-or-create of users by verified email."""

import logging
import uuid
from datetime import datetime
from typing import Callable, Optional

from sqlalchemy.exc import IntegrityError

from tasktrack.auth.errors import ProfileFetchFailed
from tasktrack.database.user_repository import UserRepository
from tasktrack.integrations.avatar import fetch_image_as_base64
from tasktrack.models.user import User

logger = logging.getLogger(__name__)


class UserDirectory:
    """Maps verified email addresses to durable user records."""

    def __init__(
        self,
        users: UserRepository,
        avatar_fetcher: Optional[Callable[[str], str]] = None,
    ):
        self.users = users
        self.avatar_fetcher = avatar_fetcher or fetch_image_as_base64

    def resolve_or_create(self, email: str, name: Optional[str], picture_url: Optional[str]) -> User:
        """Return the user for `email`, creating it on first sight.

        Existing users are returned unchanged (no profile sync). For a new user
        the avatar is fetched first, so a failed fetch leaves nothing behind.

        Raises:
            ProfileFetchFailed: avatar fetch failed, or the user vanished after
                losing a concurrent insert
        """
        existing = self.users.get_by_email(email)
        if existing:
            return existing

        picture = self.avatar_fetcher(picture_url) if picture_url else None

        now = datetime.utcnow()
        user = User(
            id=str(uuid.uuid4()),
            email=email,
            name=name,
            picture=picture,
            created_at=now,
            updated_at=now,
        )
        try:
            created = self.users.create(user)
        except IntegrityError as e:
            # Another request created this email first; use its record.
            winner = self.users.get_by_email(email)
            if winner is None:
                raise ProfileFetchFailed(f"User insert for {email} conflicted but no user was found") from e
            return winner

        logger.info(f"New user saved: {created.id}")
        return created
