"""Snapshot schemas for a window container tree."""

from collections.abc import Iterator
from typing import Annotated, Any

from pydantic import Field, model_validator

from src.data_model import StrictBaseModel
from src.tasks.models import ActivityType


class IntentSnapshot(StrictBaseModel):
    """Intent of an activity.

    Attributes:
        action: Intent action string.
        extras: Extra payload attached to the intent.
    """

    action: str | None = None
    extras: dict[str, Any] = Field(default_factory=dict)


class ActivitySnapshot(StrictBaseModel):
    """One activity record of a task.

    Attributes:
        component: Fully qualified component name.
        finishing: Whether the activity is finishing.
        visible: Whether the activity is visible.
        intent: Launch intent of the activity.
    """

    component: Annotated[str, Field(min_length=1)]
    finishing: bool = False
    visible: bool = False
    intent: IntentSnapshot | None = None


class TaskSnapshot(StrictBaseModel):
    """A task and, for root tasks, its nested tasks.

    Attributes:
        task_id: Task identifier, unique across the snapshot.
        uid: Effective uid owning the task.
        user_id: Owning user id (default: derived from ``uid``).
        activity_type: Activity type of the task.
        last_active_time: Last active time in milliseconds since boot.
        exclude_from_recents: Whether recents should hide the task.
        activities: Activities bottom to top.
        tasks: Nested tasks bottom to top.
    """

    task_id: Annotated[int, Field(ge=0)]
    uid: Annotated[int, Field(ge=0)]
    user_id: Annotated[int, Field(ge=0)] | None = None
    activity_type: ActivityType = ActivityType.STANDARD
    last_active_time: int = 0
    exclude_from_recents: bool = False
    activities: list[ActivitySnapshot] = Field(default_factory=list)
    tasks: list["TaskSnapshot"] = Field(default_factory=list)

    def iter_tasks(self) -> Iterator["TaskSnapshot"]:
        """Yield this task and every nested task."""
        yield self
        for child in self.tasks:
            yield from child.iter_tasks()


class DisplaySnapshot(StrictBaseModel):
    """A display and its tasks.

    Attributes:
        display_id: Display identifier, unique across the snapshot.
        focused_task: Task whose top activity holds focus on this display.
        tasks: Tasks bottom to top.
    """

    display_id: Annotated[int, Field(ge=0)]
    focused_task: int | None = None
    tasks: list[TaskSnapshot] = Field(default_factory=list)


class TreeSnapshot(StrictBaseModel):
    """Whole-tree snapshot.

    Attributes:
        displays: Displays bottom to top.
        recents: Recent task ids, most recent first.
    """

    displays: Annotated[list[DisplaySnapshot], Field(min_length=1)]
    recents: list[int] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_unique_ids(self) -> "TreeSnapshot":
        """Ensure display ids and task ids are unique."""
        display_ids = [d.display_id for d in self.displays]
        if len(display_ids) != len(set(display_ids)):
            msg = "Display ids must be unique"
            raise ValueError(msg)

        seen: set[int] = set()
        for display in self.displays:
            for root_task in display.tasks:
                for task in root_task.iter_tasks():
                    if task.task_id in seen:
                        msg = f"Duplicate task id: {task.task_id}"
                        raise ValueError(msg)
                    seen.add(task.task_id)
        return self
