"""Task data model for tasktrack."""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field


class Task(BaseModel):
    """Canonical Task model."""
    
    id: str = Field(..., description="Unique task identifier (UUID v4)")
    user_id: str = Field(..., description="User ID who owns this task")
    title: Optional[str] = Field(None, description="Task title")
    created_at: Optional[datetime] = Field(None, description="Task creation timestamp")
    due_date: Optional[datetime] = Field(None, description="Task due date")
    priority: Optional[str] = Field(None, description="Task priority")
    note: Optional[str] = Field(None, description="Free-text note")
    reason: Optional[str] = Field(None, description="Free-text reason")
    status: Optional[str] = Field(None, description="Task status (e.g. 'open')")
    assigned_to: Optional[str] = Field(None, description="Who the task is assigned to")
    priority_tags: Optional[List[str]] = Field(None, description="Optional priority tags")
