"""SQLAlchemy database models for tasktrack."""

from datetime import datetime
import uuid
from sqlalchemy import Column, String, Float, DateTime, JSON, ForeignKey, Text

from tasktrack.database.database import Base


def new_id() -> str:
    return str(uuid.uuid4())


class UserDB(Base):
    """Database model for User."""
    
    __tablename__ = "users"
    
    # Primary key
    id = Column(String, primary_key=True, default=new_id)
    
    # User profile. The unique email constraint arbitrates concurrent first logins.
    email = Column(String, nullable=False, unique=True)
    name = Column(String, nullable=True)
    picture = Column(Text, nullable=True)
    
    # Timestamps
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from tasktrack.models.user import User
        return User(
            id=self.id,
            email=self.email,
            name=self.name,
            picture=self.picture,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )
    
    @classmethod
    def from_pydantic(cls, user):
        """Create database model from Pydantic model."""
        return cls(
            id=user.id,
            email=user.email,
            name=user.name,
            picture=user.picture,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class TaskDB(Base):
    """Database model for Task."""
    
    __tablename__ = "tasks"
    
    id = Column(String, primary_key=True, default=new_id)
    
    # Owner
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    
    title = Column(String, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    due_date = Column(DateTime, nullable=True)
    priority = Column(String, nullable=True)
    note = Column(Text, nullable=True)
    reason = Column(Text, nullable=True)
    status = Column(String, nullable=True)
    assigned_to = Column(String, nullable=True)
    
    # Stored as JSON array
    priority_tags = Column(JSON, nullable=True)
    
    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from tasktrack.models.task import Task
        return Task(
            id=self.id,
            user_id=self.user_id,
            title=self.title,
            created_at=self.created_at,
            due_date=self.due_date,
            priority=self.priority,
            note=self.note,
            reason=self.reason,
            status=self.status,
            assigned_to=self.assigned_to,
            priority_tags=self.priority_tags,
        )
    
    @classmethod
    def from_fields(cls, user_id: str, fields: dict):
        """Create database model for a new task owned by `user_id`."""
        values = {k: v for k, v in fields.items() if k not in ("id", "user_id")}
        if values.get("created_at") is None:
            values["created_at"] = datetime.utcnow()
        return cls(id=new_id(), user_id=user_id, **values)


class QTaskDB(Base):
    """Database model for QTask."""

    __tablename__ = "qtasks"

    id = Column(String, primary_key=True, default=new_id)

    # Owner
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    date = Column(DateTime, nullable=True)
    # Ordered lists flattened to ", "-joined text
    work_tasks = Column(Text, nullable=False, default="")
    personal_tasks = Column(Text, nullable=False, default="")
    assigned_by = Column(String, nullable=True)
    notes = Column(Text, nullable=True)
    time_spent = Column(Float, nullable=True)

    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from tasktrack.models.qtask import QTask
        return QTask(
            id=self.id,
            user_id=self.user_id,
            date=self.date,
            work_tasks=self.work_tasks or "",
            personal_tasks=self.personal_tasks or "",
            assigned_by=self.assigned_by,
            notes=self.notes,
            time_spent=self.time_spent,
        )

    @classmethod
    def from_fields(cls, user_id: str, fields: dict):
        """Create database model for a new qtask owned by `user_id`."""
        values = {k: v for k, v in fields.items() if k not in ("id", "user_id")}
        return cls(id=new_id(), user_id=user_id, **values)
