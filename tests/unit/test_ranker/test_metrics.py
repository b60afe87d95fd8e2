"""Unit tests for ranker metrics."""

from src.ranker.metrics import RankerMetrics
from src.ranker.models import SkipReason


class TestRankerMetrics:
    """Tests for RankerMetrics."""

    def test_singleton_and_reset(self) -> None:
        """get_instance returns one instance until reset."""
        first = RankerMetrics.get_instance()
        assert RankerMetrics.get_instance() is first

        RankerMetrics.reset()
        assert RankerMetrics.get_instance() is not first

    def test_records(self) -> None:
        """Counters accumulate."""
        metrics = RankerMetrics()
        metrics.record_call()
        metrics.record_visit(admitted=True)
        metrics.record_visit(admitted=False)
        metrics.record_skip(SkipReason.NOT_ALLOWED)
        metrics.record_skip(SkipReason.NOT_ALLOWED)
        metrics.record_results(3)
        metrics.record_resolve_duration(1.5)

        assert metrics.to_dict() == {
            "calls_total": 1,
            "tasks_visited": 2,
            "tasks_admitted": 1,
            "skipped_by_reason": {"not_allowed": 2},
            "results_emitted": 3,
            "last_resolve_duration_ms": 1.5,
        }
