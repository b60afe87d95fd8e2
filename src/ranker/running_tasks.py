"""Resolution of the ordered list of running tasks."""

import time
import uuid
from collections.abc import Callable

import structlog

from src.ranker.admission import AdmissionContext, check_admission
from src.ranker.constants import COMPONENT_RANKER
from src.ranker.focus import apply_focus_adjustment
from src.ranker.metrics import RankerMetrics
from src.ranker.models import RunningTasksQuery
from src.ranker.ranking_set import RankingSet
from src.ranker.state_machine import RankerStateMachine
from src.recents.oracle import RecentsOracle
from src.tasks.containers import RootWindowContainer, Task, WindowContainer
from src.tasks.info import fill_task_info
from src.tasks.models import RunningTaskInfo


logger = structlog.get_logger()

TaskInfoFiller = Callable[[Task, bool], RunningTaskInfo]


class _LeafTaskCollector:
    """Per-call visitor admitting leaf tasks and applying the focus nudge."""

    def __init__(
        self,
        context: AdmissionContext,
        metrics: RankerMetrics,
        log: structlog.stdlib.BoundLogger,
    ) -> None:
        self._context = context
        self._metrics = metrics
        self._log = log
        # (task, is the focused task of its subtree)
        self.admitted: list[tuple[Task, bool]] = []

    def collect(self, container: WindowContainer, focused_task: Task | None) -> None:
        """Visit every leaf task below ``container`` with its focus hint."""
        container.for_all_leaf_tasks(
            lambda task: self._process(task, focused_task),
            traverse_top_to_bottom=False,
        )

    def _process(self, task: Task, focused_task: Task | None) -> None:
        reason = check_admission(task, self._context)
        self._metrics.record_visit(admitted=reason is None)
        if reason is not None:
            self._metrics.record_skip(reason)
            self._log.debug("task_skipped", task_id=task.task_id, reason=reason.value)
            return

        apply_focus_adjustment(task, focused_task)
        self.admitted.append((task, task is focused_task))


class TaskRanker:
    """Resolves running tasks into a bounded, ranked list.

    Each call walks every leaf task below the traversal root, drops the ones
    the caller may not see, and returns the highest ranked ones first. The
    focused task always ranks ahead of tasks that were active at the same
    time or earlier.

    The ranker keeps no state between calls; the ranking set, the
    admission context and the phase state machine are created per call.
    """

    def __init__(
        self,
        metrics: RankerMetrics | None = None,
        fill_info: TaskInfoFiller = fill_task_info,
    ) -> None:
        """Initialize the ranker.

        Args:
            metrics: Optional metrics instance.
            fill_info: Builds a result record from a task; the second
                argument asks for intent extras to be stripped.
        """
        self._metrics = metrics or RankerMetrics.get_instance()
        self._fill_info = fill_info
        self._log = logger.bind(component=COMPONENT_RANKER)

    def get_tasks(
        self,
        max_num: int,
        flags: int,
        calling_uid: int,
        profile_ids: frozenset[int] | set[int],
        recents: RecentsOracle | None,
        root: WindowContainer,
    ) -> list[RunningTaskInfo]:
        """Resolve running tasks from raw caller parameters.

        Args:
            max_num: Maximum number of results.
            flags: Bitwise OR of ``RunningTasksFlag`` values.
            calling_uid: Uid of the caller.
            profile_ids: User ids of the caller's profiles.
            recents: Recents oracle for the visible-recents filter.
            root: Container to traverse.

        Returns:
            Result records in rank order, at most ``max_num`` long.
        """
        query = RunningTasksQuery.from_flags(
            max_num=max_num,
            flags=flags,
            calling_uid=calling_uid,
            profile_ids=profile_ids,
        )
        return self.resolve(query, root, recents)

    def resolve(
        self,
        query: RunningTasksQuery,
        root: WindowContainer,
        recents: RecentsOracle | None = None,
    ) -> list[RunningTaskInfo]:
        """Resolve the ranked running tasks visible to the caller.

        This is the main entry point for the ranker. The caller must keep
        the tree from changing shape for the duration of the call.

        Args:
            query: Validated query.
            root: Container to traverse. A ``RootWindowContainer`` is
                walked display by display, each with its own focused task.
            recents: Recents oracle for the visible-recents filter.

        Returns:
            Result records in rank order, at most ``query.max_num`` long.
        """
        self._metrics.record_call()
        if query.max_num <= 0:
            return []

        call_id = uuid.uuid4().hex[:12]
        log = self._log.bind(call_id=call_id, calling_uid=query.calling_uid)
        start = time.perf_counter()

        state_machine = RankerStateMachine(call_id)
        context = AdmissionContext.from_query(query, recents)
        collector = _LeafTaskCollector(context, self._metrics, log)

        if isinstance(root, RootWindowContainer):
            root.for_all_displays(
                lambda display: collector.collect(display, display.focused_task)
            )
        else:
            collector.collect(root, self._focused_task_within(root))
        state_machine.to_tasks_collected()

        # Keys are read only now, after every focus touch has happened.
        ranking: RankingSet[Task] = RankingSet()
        for task, focused in collector.admitted:
            ranking.add(task, focused)

        strip_extras = not query.keep_intent_extra
        results = [
            self._fill_info(task, strip_extras) for task in ranking.top(query.max_num)
        ]
        state_machine.to_results_drained()

        duration_ms = (time.perf_counter() - start) * 1000
        self._metrics.record_results(len(results))
        self._metrics.record_resolve_duration(duration_ms)

        log.info(
            "running_tasks_resolved",
            max_num=query.max_num,
            admitted=len(ranking),
            returned=len(results),
            duration_ms=round(duration_ms, 3),
        )
        return results

    def _focused_task_within(self, root: WindowContainer) -> Task | None:
        """Get the focused task of ``root``'s display if it lies below ``root``.

        Args:
            root: Container being traversed.

        Returns:
            The focused task, or None if absent or outside ``root``.
        """
        display = root.display_content
        if display is None:
            return None
        focused_task = display.focused_task
        if focused_task is None or not focused_task.is_descendant_of(root):
            return None
        return focused_task


def get_running_tasks(
    max_num: int,
    flags: int,
    calling_uid: int,
    profile_ids: frozenset[int] | set[int],
    recents: RecentsOracle | None,
    root: WindowContainer,
) -> list[RunningTaskInfo]:
    """Pure function API for running task resolution.

    Args:
        max_num: Maximum number of results.
        flags: Bitwise OR of ``RunningTasksFlag`` values.
        calling_uid: Uid of the caller.
        profile_ids: User ids of the caller's profiles.
        recents: Recents oracle for the visible-recents filter.
        root: Container to traverse.

    Returns:
        Result records in rank order, at most ``max_num`` long.
    """
    return TaskRanker().get_tasks(
        max_num=max_num,
        flags=flags,
        calling_uid=calling_uid,
        profile_ids=profile_ids,
        recents=recents,
        root=root,
    )
