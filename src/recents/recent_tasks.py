"""Recent task list, ordered most recent first."""

import structlog

from src.tasks.containers import Task
from src.tasks.models import ActivityType
from src.tasks.protocols import RankableTask


logger = structlog.get_logger()

# Activity types that never surface in the recents list.
_HIDDEN_ACTIVITY_TYPES: frozenset[ActivityType] = frozenset(
    {
        ActivityType.HOME,
        ActivityType.RECENTS,
        ActivityType.ASSISTANT,
        ActivityType.DREAM,
    }
)


class RecentTasks:
    """Tracks recently used tasks and decides which are visible in recents.

    A task is a visible recent task when it is in the list, its activity type
    is not one of the system types recents never shows, and it is either not
    excluded from recents or is the most recent task.
    """

    def __init__(self, tasks: list[Task] | None = None) -> None:
        """Initialize the list.

        Args:
            tasks: Initial tasks, most recent first.
        """
        self._task_ids: list[int] = []
        self._log = logger.bind(component="recents")
        for task in reversed(tasks or []):
            self.add(task)

    @property
    def task_ids(self) -> list[int]:
        """Get the recent task ids, most recent first."""
        return list(self._task_ids)

    def add(self, task: Task) -> None:
        """Move ``task`` to the front of the list, adding it if absent.

        Args:
            task: Task that just became the most recent.
        """
        if task.task_id in self._task_ids:
            self._task_ids.remove(task.task_id)
        self._task_ids.insert(0, task.task_id)
        self._log.debug("recent_task_added", task_id=task.task_id)

    def remove(self, task: Task) -> None:
        """Drop ``task`` from the list if present.

        Args:
            task: Task to forget.
        """
        if task.task_id in self._task_ids:
            self._task_ids.remove(task.task_id)
            self._log.debug("recent_task_removed", task_id=task.task_id)

    def is_visible_recent_task(self, task: RankableTask) -> bool:
        """Check whether ``task`` would be shown in the recents list.

        Args:
            task: Task to check.

        Returns:
            True if the task is a visible recent task.
        """
        if task.task_id not in self._task_ids:
            return False
        if task.activity_type in _HIDDEN_ACTIVITY_TYPES:
            return False
        if task.exclude_from_recents:
            return self._task_ids[0] == task.task_id
        return True

    def __len__(self) -> int:
        return len(self._task_ids)
