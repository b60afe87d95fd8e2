"""Admission filter deciding which leaf tasks a caller may see."""

from dataclasses import dataclass

from src.ranker.models import RunningTasksQuery, SkipReason
from src.recents.oracle import RecentsOracle
from src.tasks.models import ActivityType
from src.tasks.protocols import RankableTask


# Activity types that pass the visible-recents filter without asking recents.
_ALWAYS_VISIBLE_TYPES: frozenset[ActivityType] = frozenset(
    {ActivityType.HOME, ActivityType.RECENTS}
)


@dataclass(frozen=True)
class AdmissionContext:
    """Caller identity and filters captured for one resolve call.

    Attributes:
        calling_uid: Uid of the caller.
        user_id: User id derived from the calling uid.
        cross_user: Caller may see tasks of every user.
        profile_ids: User ids of the caller's profiles.
        allowed: Caller may see tasks owned by other uids.
        filter_only_visible_recents: Keep only tasks recents would show.
        recents: Oracle consulted by the visible-recents filter.
    """

    calling_uid: int
    user_id: int
    cross_user: bool
    profile_ids: frozenset[int]
    allowed: bool
    filter_only_visible_recents: bool
    recents: RecentsOracle | None = None

    @classmethod
    def from_query(
        cls, query: RunningTasksQuery, recents: RecentsOracle | None
    ) -> "AdmissionContext":
        """Capture the admission inputs of ``query``.

        Args:
            query: Validated query.
            recents: Recents oracle for the visible-recents filter.

        Returns:
            Context for the admission checks.

        Raises:
            ValueError: If visible-recents filtering is requested without
                a recents oracle.
        """
        if query.filter_only_visible_recents and recents is None:
            msg = "filter_only_visible_recents requires a recents oracle"
            raise ValueError(msg)
        return cls(
            calling_uid=query.calling_uid,
            user_id=query.user_id,
            cross_user=query.cross_user,
            profile_ids=query.profile_ids,
            allowed=query.allowed,
            filter_only_visible_recents=query.filter_only_visible_recents,
            recents=recents,
        )


def check_admission(
    task: RankableTask, context: AdmissionContext
) -> SkipReason | None:
    """Run the admission checks on a leaf task, in order.

    Args:
        task: Leaf task to check.
        context: Caller identity and filters.

    Returns:
        The first failing check, or None if the task is admitted.
    """
    if task.top_non_finishing_activity is None:
        return SkipReason.NO_CONTENT

    if task.effective_uid != context.calling_uid:
        if (
            task.user_id != context.user_id
            and not context.cross_user
            and task.user_id not in context.profile_ids
        ):
            return SkipReason.PROFILE_DENIED
        if not context.allowed:
            return SkipReason.NOT_ALLOWED

    if (
        context.filter_only_visible_recents
        and task.activity_type not in _ALWAYS_VISIBLE_TYPES
        and context.recents is not None
        and not context.recents.is_visible_recent_task(task)
    ):
        return SkipReason.NOT_VISIBLE_RECENT

    return None
