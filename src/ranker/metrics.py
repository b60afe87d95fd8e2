"""Metrics collection for the running task ranker."""

from dataclasses import dataclass, field
from typing import ClassVar

from src.ranker.models import SkipReason


@dataclass
class RankerMetrics:
    """Counters for running task resolution.

    Attributes:
        calls_total: Resolve calls, including empty fast-path calls.
        tasks_visited: Leaf tasks passed to the admission step.
        tasks_admitted: Leaf tasks that passed admission.
        skipped_by_reason: Skipped leaf tasks per skip reason.
        results_emitted: Result records returned to callers.
        last_resolve_duration_ms: Duration of the most recent resolve call.
    """

    calls_total: int = 0
    tasks_visited: int = 0
    tasks_admitted: int = 0
    skipped_by_reason: dict[str, int] = field(default_factory=dict)
    results_emitted: int = 0
    last_resolve_duration_ms: float = 0.0

    _instance: ClassVar["RankerMetrics | None"] = None

    @classmethod
    def get_instance(cls) -> "RankerMetrics":
        """Get singleton metrics instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset metrics (primarily for testing)."""
        cls._instance = None

    def record_call(self) -> None:
        """Record a resolve call."""
        self.calls_total += 1

    def record_visit(self, admitted: bool) -> None:
        """Record a leaf task passing through admission.

        Args:
            admitted: Whether the task was admitted.
        """
        self.tasks_visited += 1
        if admitted:
            self.tasks_admitted += 1

    def record_skip(self, reason: SkipReason) -> None:
        """Record a skipped leaf task.

        Args:
            reason: Why the task was skipped.
        """
        self.skipped_by_reason[reason.value] = (
            self.skipped_by_reason.get(reason.value, 0) + 1
        )

    def record_results(self, count: int) -> None:
        """Record emitted result records.

        Args:
            count: Number of records returned.
        """
        self.results_emitted += count

    def record_resolve_duration(self, duration_ms: float) -> None:
        """Record resolve duration.

        Args:
            duration_ms: Duration in milliseconds.
        """
        self.last_resolve_duration_ms = duration_ms

    def to_dict(self) -> dict[str, object]:
        """Convert metrics to dictionary.

        Returns:
            Dictionary of metric name to value.
        """
        return {
            "calls_total": self.calls_total,
            "tasks_visited": self.tasks_visited,
            "tasks_admitted": self.tasks_admitted,
            "skipped_by_reason": dict(self.skipped_by_reason),
            "results_emitted": self.results_emitted,
            "last_resolve_duration_ms": self.last_resolve_duration_ms,
        }
