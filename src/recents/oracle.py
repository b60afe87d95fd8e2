"""Recents-visibility oracle contract."""

from typing import Protocol, runtime_checkable

from src.tasks.protocols import RankableTask


@runtime_checkable
class RecentsOracle(Protocol):
    """Answers whether a task would be shown in the recents list."""

    def is_visible_recent_task(self, task: RankableTask) -> bool:
        """Check whether ``task`` is currently a visible recent task."""
        ...
