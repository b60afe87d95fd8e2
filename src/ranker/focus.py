"""Focus adjustment of task activity times.

Runs on each admitted task before ranking. Only visible tasks are written:
their time is refreshed to now, so the one unit tie-break below never
accumulates across calls. Ties among tasks left untouched are settled by
``rank_key`` instead.
"""

from src.ranker.constants import FOCUS_TIE_BREAK_DELTA
from src.tasks.protocols import RankableTask


def apply_focus_adjustment(
    task: RankableTask, focused_task: RankableTask | None
) -> None:
    """Refresh and nudge the activity time of an admitted task.

    A visible task is touched to the current time. When a focused task
    exists and ``task`` is not it, the freshly touched ``task`` is moved one
    unit back so it sorts below the focused task, and a visible focused
    task is touched again so it stays ahead.

    Args:
        task: Task that passed admission.
        focused_task: Focused task for this subtree, if any.
    """
    if not task.is_visible:
        return
    task.touch_active_time()
    if focused_task is None or task is focused_task:
        return
    task.last_active_time -= FOCUS_TIE_BREAK_DELTA
    if focused_task.is_visible:
        focused_task.touch_active_time()
