"""Data models for tasks and running task records."""

from enum import Enum
from typing import Annotated, Any

from pydantic import Field, model_validator

from src.data_model import StrictBaseModel


INVALID_DISPLAY = -1


class ActivityType(str, Enum):
    """Activity type of a task.

    - UNDEFINED: Not yet resolved
    - STANDARD: Regular application task
    - HOME: Launcher task
    - RECENTS: Recents/overview task
    - ASSISTANT: Voice assistant task
    - DREAM: Screensaver task
    """

    UNDEFINED = "undefined"
    STANDARD = "standard"
    HOME = "home"
    RECENTS = "recents"
    ASSISTANT = "assistant"
    DREAM = "dream"


class Intent(StrictBaseModel):
    """Intent that launched an activity.

    Attributes:
        action: Intent action string.
        component: Fully qualified component name.
        extras: Extra payload attached to the intent.
    """

    action: str | None = None
    component: str | None = None
    extras: dict[str, Any] = Field(default_factory=dict)

    def without_extras(self) -> "Intent":
        """Return a copy of this intent with the extras payload removed."""
        if not self.extras:
            return self
        return self.model_copy(update={"extras": {}})


class RunningTaskInfo(StrictBaseModel):
    """Snapshot of a running task handed back to callers.

    Attributes:
        task_id: Identifier of the task.
        id: Deprecated alias of ``task_id``.
        user_id: User that owns the task.
        display_id: Display hosting the task, or ``INVALID_DISPLAY``.
        activity_type: Activity type of the task.
        base_intent: Intent of the root activity.
        base_activity: Component of the root activity.
        top_activity: Component of the top non-finishing activity.
        num_activities: Number of activities in the task.
        is_visible: Whether the task was visible when captured.
        last_active_time: Last active time used for ordering.
    """

    task_id: int
    id: int
    user_id: Annotated[int, Field(ge=0)]
    display_id: int = INVALID_DISPLAY
    activity_type: ActivityType = ActivityType.UNDEFINED
    base_intent: Intent | None = None
    base_activity: str | None = None
    top_activity: str | None = None
    num_activities: Annotated[int, Field(ge=0)] = 0
    is_visible: bool = False
    last_active_time: int = 0

    @model_validator(mode="after")
    def validate_id_alias(self) -> "RunningTaskInfo":
        """Ensure the deprecated ``id`` mirrors ``task_id``."""
        if self.id != self.task_id:
            msg = f"id ({self.id}) must equal task_id ({self.task_id})"
            raise ValueError(msg)
        return self
