"""Exceptions raised while loading tree snapshots."""


class SnapshotError(Exception):
    """Base exception for snapshot loading errors."""


class SnapshotValidationError(SnapshotError):
    """Raised when a snapshot does not match the schema."""

    def __init__(self, errors: list[dict[str, str]], file_path: str) -> None:
        """Initialize the error.

        Args:
            errors: Validation error details (location and message).
            file_path: Path of the snapshot that failed validation.
        """
        self.errors = errors
        self.file_path = file_path
        super().__init__(f"Validation failed for {file_path}: {len(errors)} errors")


class SnapshotReferenceError(SnapshotError):
    """Raised when a snapshot refers to a task that cannot be resolved."""

    def __init__(self, file_path: str, field: str, task_id: int) -> None:
        """Initialize the error.

        Args:
            file_path: Path of the snapshot.
            field: Field holding the dangling reference.
            task_id: Task id that could not be resolved.
        """
        self.file_path = file_path
        self.field = field
        self.task_id = task_id
        super().__init__(f"{file_path}: {field} refers to unknown task {task_id}")
