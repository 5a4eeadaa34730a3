"""QTask ("quick task" daily log entry) data model for tasktrack."""

import datetime as dt
from typing import Optional
from pydantic import BaseModel, Field

# Separator used to flatten ordered task lists into one text column.
TASK_LIST_SEPARATOR = ", "


def join_task_list(items) -> str:
    """Flatten an ordered list of task descriptions into a single text field."""
    return TASK_LIST_SEPARATOR.join(items or [])


class QTask(BaseModel):
    """Canonical QTask model.

    `work_tasks` and `personal_tasks` hold the flattened text, not lists.
    Wire names follow the web client (camelCase).
    """
    
    id: str = Field(..., description="Unique qtask identifier (UUID v4)")
    user_id: str = Field(..., description="User ID who owns this qtask")
    date: Optional[dt.datetime] = Field(None, description="Day the log entry is for")
    work_tasks: str = Field("", alias="workTasks", description="Work tasks, comma separated")
    personal_tasks: str = Field("", alias="personalTasks", description="Personal tasks, comma separated")
    assigned_by: Optional[str] = Field(None, description="Who assigned the work")
    notes: Optional[str] = Field(None, description="Free-text notes")
    time_spent: Optional[float] = Field(None, alias="timeSpent", description="Time spent (hours)")

    class Config:
        """Pydantic configuration."""
        populate_by_name = True
