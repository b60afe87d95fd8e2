"""Protocol interfaces for the task introspection the ranker consumes."""

from typing import Protocol, runtime_checkable

from src.tasks.models import ActivityType


@runtime_checkable
class RankableTask(Protocol):
    """Protocol for leaf tasks handed to admission, focus and ranking.

    Any object exposing these fields can be admitted, nudged and ranked,
    regardless of the container tree it came from. ``last_active_time`` is
    the only field the ranker writes, through ``touch_active_time`` or the
    focus tie-break.
    """

    task_id: int
    effective_uid: int
    user_id: int
    activity_type: ActivityType
    last_active_time: int
    exclude_from_recents: bool
    prefix_order_index: int

    @property
    def top_non_finishing_activity(self) -> object | None:
        """Get the top-most live activity, or None when the task has none."""
        ...

    @property
    def is_visible(self) -> bool:
        """Check whether the task is currently visible."""
        ...

    def touch_active_time(self) -> None:
        """Set ``last_active_time`` to the current clock reading."""
        ...
