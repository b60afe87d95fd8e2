"""Constants for the running task ranker."""

from enum import IntFlag


class RunningTasksFlag(IntFlag):
    """Flag bits accepted by ``TaskRanker.get_tasks``.

    - FILTER_ONLY_VISIBLE_RECENTS: Keep only tasks recents would show
    - ALLOWED: Caller may see tasks owned by other uids
    - CROSS_USERS: Caller may see tasks of any user
    - KEEP_INTENT_EXTRA: Keep the base intent extras in results
    """

    NONE = 0
    FILTER_ONLY_VISIBLE_RECENTS = 1
    ALLOWED = 1 << 1
    CROSS_USERS = 1 << 2
    KEEP_INTENT_EXTRA = 1 << 3


# Amount subtracted from a non-focused task's last active time so it sorts
# strictly below the focused task.
FOCUS_TIE_BREAK_DELTA: int = 1

# Log component name
COMPONENT_RANKER = "ranker"
