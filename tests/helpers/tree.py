"""Builders for window container trees used across tests."""

from src.tasks.containers import (
    ActivityRecord,
    DisplayContent,
    RootWindowContainer,
    Task,
)
from src.tasks.models import ActivityType, Intent


# Uids of two apps of user 0 and one app of user 10
APP_UID = 10_123
OTHER_APP_UID = 10_456
WORK_PROFILE_UID = 1_010_123
WORK_PROFILE_USER = 10


class FakeClock:
    """Clock returning a settable value in milliseconds."""

    def __init__(self, now: int = 1_000) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now


def make_task(  # noqa: PLR0913
    task_id: int,
    uid: int = APP_UID,
    last_active_time: int = 0,
    visible: bool = False,
    finishing: bool = False,
    activity_type: ActivityType = ActivityType.STANDARD,
    activities: int = 1,
    extras: dict[str, object] | None = None,
    exclude_from_recents: bool = False,
    clock: FakeClock | None = None,
) -> Task:
    """Create a leaf task holding ``activities`` activities.

    The top activity carries ``visible``; every activity carries ``finishing``.
    """
    task = Task(
        task_id=task_id,
        effective_uid=uid,
        activity_type=activity_type,
        last_active_time=last_active_time,
        exclude_from_recents=exclude_from_recents,
        clock=clock or FakeClock(),
    )
    for index in range(activities):
        component = f"com.example.app{task_id}/.Activity{index}"
        task.add_child(
            ActivityRecord(
                component=component,
                intent=Intent(
                    action="android.intent.action.MAIN",
                    component=component,
                    extras=dict(extras or {}),
                ),
                finishing=finishing,
                visible=visible and index == activities - 1,
            )
        )
    return task


def make_tree(
    *displays: list[Task],
) -> tuple[RootWindowContainer, list[DisplayContent]]:
    """Create a root with one display per task list, tasks bottom to top."""
    root = RootWindowContainer()
    created: list[DisplayContent] = []
    for display_id, tasks in enumerate(displays):
        display = DisplayContent(display_id)
        root.add_child(display)
        for task in tasks:
            display.add_child(task)
        created.append(display)
    return root, created


def focus(display: DisplayContent, task: Task) -> None:
    """Give input focus on ``display`` to the top activity of ``task``."""
    display.focused_app = task.top_non_finishing_activity
