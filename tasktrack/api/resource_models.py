"""Request models for task and qtask endpoints.

Field-level validation is left to pydantic; ownership is never taken from
the request body.
"""

import datetime as dt
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

from tasktrack.models.qtask import join_task_list


class TaskFieldsRequest(BaseModel):
    """Request body for creating or updating a task."""
    title: Optional[str] = None
    created_at: Optional[dt.datetime] = None
    due_date: Optional[dt.datetime] = None
    priority: Optional[str] = None
    note: Optional[str] = None
    reason: Optional[str] = None
    status: Optional[str] = None
    assigned_to: Optional[str] = None
    priority_tags: Optional[List[str]] = None

    def to_fields(self) -> Dict[str, Any]:
        """Only the fields the client actually sent.

        A null `created_at` is dropped: the column is required, so the
        stored (or server-assigned) creation time stays in place.
        """
        fields = self.model_dump(exclude_unset=True)
        if fields.get("created_at", ...) is None:
            del fields["created_at"]
        return fields


class QTaskCreateRequest(BaseModel):
    """Request body for creating a qtask."""
    date: Optional[dt.datetime] = None
    work_tasks: List[str] = Field(default_factory=list, alias="workTasks")
    personal_tasks: List[str] = Field(default_factory=list, alias="personalTasks")
    assigned_by: Optional[str] = None
    notes: Optional[str] = None
    time_spent: Optional[float] = Field(None, alias="timeSpent")

    class Config:
        """Pydantic configuration."""
        populate_by_name = True

    def to_fields(self) -> Dict[str, Any]:
        """Column values, with task lists flattened to text."""
        return {
            "date": self.date,
            "work_tasks": join_task_list(self.work_tasks),
            "personal_tasks": join_task_list(self.personal_tasks),
            "assigned_by": self.assigned_by,
            "notes": self.notes,
            "time_spent": self.time_spent,
        }
