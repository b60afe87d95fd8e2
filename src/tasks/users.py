"""Uid to user id mapping."""

# Range of uids allocated to a single user.
PER_USER_RANGE = 100000


def user_id_for_uid(uid: int) -> int:
    """Return the user id that owns ``uid``.

    Args:
        uid: Kernel-level uid of a process or task.

    Returns:
        User id (0 for the system user).
    """
    return uid // PER_USER_RANGE
