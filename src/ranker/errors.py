"""Domain exceptions for the running task ranker.

Filtering never raises: a task the caller may not see is skipped silently.
The exceptions here signal broken invariants or misuse by the caller.
"""


class RankerError(Exception):
    """Base exception for all running task ranker errors."""


class RankingCollisionError(RankerError):
    """Raised when two distinct tasks share a ranking key.

    The ranking set is a strict total order; a collision means the
    prefix order indices of the tree are not unique.
    """

    def __init__(
        self, existing_task_id: int, new_task_id: int, key: tuple[int, int, int]
    ) -> None:
        """Initialize the collision error.

        Args:
            existing_task_id: Task already holding the key.
            new_task_id: Task that attempted to take the same key.
            key: The colliding (last_active_time, focused, prefix_order_index) key.
        """
        self.existing_task_id = existing_task_id
        self.new_task_id = new_task_id
        self.key = key
        super().__init__(
            f"Tasks {existing_task_id} and {new_task_id} collide on ranking key {key}"
        )
