"""Owner-scoped repositories for tasks and qtasks.

Every query is filtered on the owning user ID. A record that exists but
belongs to someone else is reported exactly like a missing one.
"""

import logging
from typing import Any, Dict, List
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from tasktrack.auth.errors import NotFoundOrForbidden, PersistenceFailure
from tasktrack.database.models import TaskDB, QTaskDB

logger = logging.getLogger(__name__)

# Never taken from request fields.
PROTECTED_FIELDS = ("id", "user_id")


class OwnedRepository:
    """Create/list/get for one kind of owner-scoped record.

    Subclasses set `model` (SQLAlchemy model with `from_fields` and
    `to_pydantic`) and `kind` (name used in logs).
    """

    model = None
    kind = "record"

    def __init__(self, db: Session):
        self.db = db

    def _query_owned(self, user_id: str):
        return self.db.query(self.model).filter(self.model.user_id == user_id)

    def _find_owned(self, user_id: str, resource_id: str):
        row = self._query_owned(user_id).filter(self.model.id == resource_id).first()
        if row is None:
            raise NotFoundOrForbidden(f"{self.kind} {resource_id} not found for user {user_id}")
        return row

    def create(self, user_id: str, fields: Dict[str, Any]):
        """Persist a new record owned by `user_id`."""
        row = self.model.from_fields(user_id, fields)
        try:
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
            logger.debug(f"Created {self.kind} {row.id} for user {user_id}")
            return row.to_pydantic()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to create {self.kind} for user {user_id}: {type(e).__name__}: {str(e)}")
            raise PersistenceFailure(f"Failed to create {self.kind}") from e

    def list_owned(self, user_id: str) -> List:
        """Get all records owned by a user (order unspecified)."""
        try:
            rows = self._query_owned(user_id).all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to list {self.kind}s for user {user_id}: {type(e).__name__}: {str(e)}")
            raise PersistenceFailure(f"Failed to list {self.kind}s") from e
        return [row.to_pydantic() for row in rows]

    def get_owned(self, user_id: str, resource_id: str):
        """Get one record by ID, only if owned by `user_id`."""
        try:
            row = self._find_owned(user_id, resource_id)
        except SQLAlchemyError as e:
            logger.error(f"Failed to get {self.kind} {resource_id}: {type(e).__name__}: {str(e)}")
            raise PersistenceFailure(f"Failed to get {self.kind}") from e
        return row.to_pydantic()


class UpdatableOwnedRepository(OwnedRepository):
    """Adds in-place update to an owner-scoped repository."""

    def update_owned(self, user_id: str, resource_id: str, fields: Dict[str, Any]):
        """Update the given fields of a record owned by `user_id`.

        Ownership is confirmed by the `(id, user_id)` lookup before any field
        is written.
        """
        try:
            row = self._find_owned(user_id, resource_id)
            for name, value in fields.items():
                if name in PROTECTED_FIELDS:
                    continue
                setattr(row, name, value)
            self.db.commit()
            self.db.refresh(row)
            logger.debug(f"Updated {self.kind} {resource_id} for user {user_id}")
            return row.to_pydantic()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to update {self.kind} {resource_id}: {type(e).__name__}: {str(e)}")
            raise PersistenceFailure(f"Failed to update {self.kind}") from e


class TaskRepository(UpdatableOwnedRepository):
    """Repository for Task database operations."""

    model = TaskDB
    kind = "task"


class QTaskRepository(OwnedRepository):
    """Repository for QTask database operations (create and read only)."""

    model = QTaskDB
    kind = "qtask"
