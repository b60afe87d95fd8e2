"""Running task ranker.

This module resolves the leaf tasks of a window container tree into a
bounded list ordered by recency, keeping only tasks the caller may see and
always placing the focused task ahead of equally recent tasks.
"""

from src.ranker.constants import RunningTasksFlag
from src.ranker.errors import RankerError, RankingCollisionError
from src.ranker.models import RunningTasksQuery, SkipReason
from src.ranker.ranking_set import RankingSet, rank_key
from src.ranker.running_tasks import TaskRanker, get_running_tasks
from src.ranker.state_machine import (
    RankerState,
    RankerStateMachine,
    RankerStateTransitionError,
)


__all__ = [
    "RankerError",
    "RankerState",
    "RankerStateMachine",
    "RankerStateTransitionError",
    "RankingCollisionError",
    "RankingSet",
    "RunningTasksFlag",
    "RunningTasksQuery",
    "SkipReason",
    "TaskRanker",
    "get_running_tasks",
    "rank_key",
]
