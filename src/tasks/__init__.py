"""Window container tree and task model.

This module provides the in-memory hierarchy the running task ranker walks:
a root container holding displays, displays holding tasks, and tasks holding
activity records. Tasks carry the ownership, visibility and recency fields
the ranker filters and orders on.
"""

from src.tasks.containers import (
    ActivityRecord,
    DisplayContent,
    RootWindowContainer,
    Task,
    WindowContainer,
)
from src.tasks.info import fill_task_info
from src.tasks.models import ActivityType, Intent, RunningTaskInfo
from src.tasks.users import PER_USER_RANGE, user_id_for_uid


__all__ = [
    "PER_USER_RANGE",
    "ActivityRecord",
    "ActivityType",
    "DisplayContent",
    "Intent",
    "RootWindowContainer",
    "RunningTaskInfo",
    "Task",
    "WindowContainer",
    "fill_task_info",
    "user_id_for_uid",
]
