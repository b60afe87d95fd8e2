"""Population of running task records from live tasks."""

from src.tasks.containers import Task
from src.tasks.models import INVALID_DISPLAY, RunningTaskInfo


def fill_task_info(task: Task, strip_extras: bool) -> RunningTaskInfo:
    """Build a RunningTaskInfo snapshot of ``task``.

    Args:
        task: Task to describe.
        strip_extras: Drop the extras payload from the base intent.

    Returns:
        Immutable record describing the task at this moment.
    """
    root_activity = task.root_activity
    top_activity = task.top_non_finishing_activity
    display = task.display_content

    base_intent = root_activity.intent if root_activity is not None else None
    if base_intent is not None and strip_extras:
        base_intent = base_intent.without_extras()

    return RunningTaskInfo(
        task_id=task.task_id,
        id=task.task_id,
        user_id=task.user_id,
        display_id=display.display_id if display is not None else INVALID_DISPLAY,
        activity_type=task.activity_type,
        base_intent=base_intent,
        base_activity=root_activity.component if root_activity is not None else None,
        top_activity=top_activity.component if top_activity is not None else None,
        num_activities=task.num_activities,
        is_visible=task.is_visible,
        last_active_time=task.last_active_time,
    )
