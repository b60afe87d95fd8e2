"""Data models for the running task ranker."""

from enum import Enum
from typing import Annotated

from pydantic import Field

from src.data_model import StrictBaseModel
from src.ranker.constants import RunningTasksFlag
from src.tasks.users import user_id_for_uid


RankKey = tuple[int, int, int]
"""(last_active_time, focused, prefix_order_index); larger keys rank higher."""


class SkipReason(str, Enum):
    """Why a leaf task was left out of the ranking.

    - NO_CONTENT: Task has no non-finishing activity
    - PROFILE_DENIED: Task belongs to a user the caller cannot reach
    - NOT_ALLOWED: Caller lacks the right to see other uids' tasks
    - NOT_VISIBLE_RECENT: Recents would never show the task
    """

    NO_CONTENT = "no_content"
    PROFILE_DENIED = "profile_denied"
    NOT_ALLOWED = "not_allowed"
    NOT_VISIBLE_RECENT = "not_visible_recent"


class RunningTasksQuery(StrictBaseModel):
    """Parameters of a single running task query.

    Attributes:
        max_num: Maximum number of results; zero or less returns nothing.
        calling_uid: Uid of the caller.
        cross_user: Caller may see tasks of every user.
        profile_ids: User ids of the caller's profiles it may see.
        allowed: Caller may see tasks owned by other uids.
        filter_only_visible_recents: Keep only tasks recents would show.
        keep_intent_extra: Keep base intent extras in the results.
    """

    max_num: int
    calling_uid: Annotated[int, Field(ge=0)]
    cross_user: bool = False
    profile_ids: frozenset[int] = Field(default_factory=frozenset)
    allowed: bool = False
    filter_only_visible_recents: bool = False
    keep_intent_extra: bool = False

    @property
    def user_id(self) -> int:
        """Get the user id derived from the calling uid."""
        return user_id_for_uid(self.calling_uid)

    @classmethod
    def from_flags(
        cls,
        max_num: int,
        flags: int,
        calling_uid: int,
        profile_ids: frozenset[int] | set[int],
    ) -> "RunningTasksQuery":
        """Build a query from ``RunningTasksFlag`` bits.

        Args:
            max_num: Maximum number of results.
            flags: Bitwise OR of ``RunningTasksFlag`` values.
            calling_uid: Uid of the caller.
            profile_ids: User ids of the caller's profiles.

        Returns:
            Validated query.
        """
        parsed = RunningTasksFlag(flags)
        return cls(
            max_num=max_num,
            calling_uid=calling_uid,
            cross_user=RunningTasksFlag.CROSS_USERS in parsed,
            profile_ids=profile_ids,
            allowed=RunningTasksFlag.ALLOWED in parsed,
            filter_only_visible_recents=(
                RunningTasksFlag.FILTER_ONLY_VISIBLE_RECENTS in parsed
            ),
            keep_intent_extra=RunningTasksFlag.KEEP_INTENT_EXTRA in parsed,
        )
