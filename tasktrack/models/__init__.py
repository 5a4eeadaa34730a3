"""Data models for tasktrack."""

from tasktrack.models.user import User, UserProfile
from tasktrack.models.task import Task
from tasktrack.models.qtask import QTask

__all__ = [
    "User",
    "UserProfile",
    "Task",
    "QTask",
]
