"""YAML snapshots of a window container tree."""

from src.snapshot.errors import (
    SnapshotError,
    SnapshotReferenceError,
    SnapshotValidationError,
)
from src.snapshot.loader import LoadedSnapshot, SnapshotLoader
from src.snapshot.schemas import (
    ActivitySnapshot,
    DisplaySnapshot,
    TaskSnapshot,
    TreeSnapshot,
)


__all__ = [
    "ActivitySnapshot",
    "DisplaySnapshot",
    "LoadedSnapshot",
    "SnapshotError",
    "SnapshotLoader",
    "SnapshotReferenceError",
    "SnapshotValidationError",
    "TaskSnapshot",
    "TreeSnapshot",
]
