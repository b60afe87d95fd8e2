"""Strictly ordered set of admitted tasks."""

from bisect import bisect_left
from typing import Generic, TypeVar

from src.ranker.errors import RankingCollisionError
from src.ranker.models import RankKey
from src.tasks.protocols import RankableTask


TaskT = TypeVar("TaskT", bound=RankableTask)


def rank_key(task: RankableTask, focused: bool = False) -> RankKey:
    """Compute the ranking key of ``task``.

    Higher keys rank first: most recently active, then the focused task,
    then highest prefix order index (top-most in the hierarchy).

    Args:
        task: Task to key.
        focused: Whether ``task`` is the focused task of its subtree.

    Returns:
        Tuple of (last_active_time, focused, prefix_order_index).
    """
    return (task.last_active_time, int(focused), task.prefix_order_index)


class RankingSet(Generic[TaskT]):
    """Tasks kept in descending rank key order.

    Keys are read once, when a task is added. Adding a second task with
    the same key raises instead of dropping either one. A set lives for a
    single resolve call.
    """

    def __init__(self) -> None:
        # Negated keys so bisect keeps the highest rank at index 0.
        self._sort_keys: list[RankKey] = []
        self._tasks: list[TaskT] = []

    def add(self, task: TaskT, focused: bool = False) -> bool:
        """Insert ``task`` at its rank position.

        Args:
            task: Task to insert.
            focused: Whether ``task`` is the focused task of its subtree.

        Returns:
            True if inserted, False if this same task was already present.

        Raises:
            RankingCollisionError: If a different task has the same key.
        """
        key = rank_key(task, focused)
        sort_key = (-key[0], -key[1], -key[2])
        index = bisect_left(self._sort_keys, sort_key)

        if index < len(self._sort_keys) and self._sort_keys[index] == sort_key:
            existing = self._tasks[index]
            if existing is task:
                return False
            raise RankingCollisionError(
                existing_task_id=existing.task_id,
                new_task_id=task.task_id,
                key=key,
            )

        self._sort_keys.insert(index, sort_key)
        self._tasks.insert(index, task)
        return True

    def top(self, count: int) -> list[TaskT]:
        """Get the ``count`` highest ranked tasks in rank order."""
        if count <= 0:
            return []
        return self._tasks[:count]

    def __len__(self) -> int:
        return len(self._tasks)
