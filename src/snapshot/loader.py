"""Snapshot loader building a live container tree from YAML."""

from dataclasses import dataclass
from pathlib import Path

import structlog
import yaml
from pydantic import ValidationError

from src.recents.recent_tasks import RecentTasks
from src.snapshot.errors import (
    SnapshotError,
    SnapshotReferenceError,
    SnapshotValidationError,
)
from src.snapshot.schemas import TaskSnapshot, TreeSnapshot
from src.tasks.containers import (
    ActivityRecord,
    Clock,
    DisplayContent,
    RootWindowContainer,
    Task,
    uptime_millis,
)
from src.tasks.models import Intent


logger = structlog.get_logger()


@dataclass
class LoadedSnapshot:
    """A materialized snapshot.

    Attributes:
        root: Root of the container tree.
        recents: Recent tasks list.
    """

    root: RootWindowContainer
    recents: RecentTasks


class SnapshotLoader:
    """Loads YAML snapshots into a ``RootWindowContainer``."""

    def __init__(self, clock: Clock = uptime_millis) -> None:
        """Initialize the loader.

        Args:
            clock: Clock handed to every task for activity time touches.
        """
        self._clock = clock
        self._log = logger.bind(component="snapshot")

    def load(self, path: Path) -> LoadedSnapshot:
        """Load and materialize a snapshot file.

        Args:
            path: Path to the YAML snapshot.

        Returns:
            The materialized tree and recents list.

        Raises:
            FileNotFoundError: If the file does not exist.
            SnapshotError: If the file is not valid UTF-8.
            yaml.YAMLError: If YAML parsing fails.
            SnapshotValidationError: If the snapshot does not match the schema.
            SnapshotReferenceError: If a task reference cannot be resolved.
        """
        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            self._log.warning("snapshot_decode_failed", source=str(path))
            msg = f"{path}: snapshot is not valid UTF-8 ({e.reason})"
            raise SnapshotError(msg) from e

        parsed = yaml.safe_load(text) or {}
        return self.load_dict(parsed, source=str(path))

    def load_dict(self, data: object, source: str = "<memory>") -> LoadedSnapshot:
        """Validate and materialize an already parsed snapshot.

        Args:
            data: Parsed snapshot content.
            source: Name used in error messages.

        Returns:
            The materialized tree and recents list.
        """
        try:
            snapshot = TreeSnapshot.model_validate(data)
        except ValidationError as e:
            errors = [
                {"loc": ".".join(str(part) for part in err["loc"]), "msg": err["msg"]}
                for err in e.errors()
            ]
            self._log.warning(
                "snapshot_validation_failed", source=source, error_count=len(errors)
            )
            raise SnapshotValidationError(errors, source) from e

        loaded = self.build(snapshot, source)
        self._log.info(
            "snapshot_loaded",
            source=source,
            displays=len(snapshot.displays),
            recents=len(loaded.recents),
        )
        return loaded

    def build(self, snapshot: TreeSnapshot, source: str = "<memory>") -> LoadedSnapshot:
        """Materialize a validated snapshot.

        Args:
            snapshot: Validated snapshot.
            source: Name used in error messages.

        Returns:
            The materialized tree and recents list.

        Raises:
            SnapshotReferenceError: If a task reference cannot be resolved.
        """
        root = RootWindowContainer()
        tasks_by_id: dict[int, Task] = {}

        for display_snapshot in snapshot.displays:
            display = DisplayContent(display_snapshot.display_id)
            root.add_child(display)
            display_tasks: dict[int, Task] = {}
            for task_snapshot in display_snapshot.tasks:
                display.add_child(self._build_task(task_snapshot, display_tasks))
            tasks_by_id.update(display_tasks)

            if display_snapshot.focused_task is not None:
                display.focused_app = self._focus_target(
                    display_tasks, display_snapshot.focused_task, source
                )

        recent_tasks: list[Task] = []
        for task_id in snapshot.recents:
            task = tasks_by_id.get(task_id)
            if task is None:
                raise SnapshotReferenceError(source, "recents", task_id)
            recent_tasks.append(task)

        return LoadedSnapshot(root=root, recents=RecentTasks(recent_tasks))

    def _build_task(
        self, task_snapshot: TaskSnapshot, registry: dict[int, Task]
    ) -> Task:
        task = Task(
            task_id=task_snapshot.task_id,
            effective_uid=task_snapshot.uid,
            user_id=task_snapshot.user_id,
            activity_type=task_snapshot.activity_type,
            last_active_time=task_snapshot.last_active_time,
            exclude_from_recents=task_snapshot.exclude_from_recents,
            clock=self._clock,
        )
        registry[task.task_id] = task

        for activity in task_snapshot.activities:
            intent = Intent(
                action=activity.intent.action if activity.intent else None,
                component=activity.component,
                extras=dict(activity.intent.extras) if activity.intent else {},
            )
            task.add_child(
                ActivityRecord(
                    component=activity.component,
                    intent=intent,
                    finishing=activity.finishing,
                    visible=activity.visible,
                )
            )
        for child in task_snapshot.tasks:
            task.add_child(self._build_task(child, registry))
        return task

    def _focus_target(
        self, display_tasks: dict[int, Task], task_id: int, source: str
    ) -> ActivityRecord:
        task = display_tasks.get(task_id)
        if task is None:
            raise SnapshotReferenceError(source, "focused_task", task_id)
        activity = task.top_non_finishing_activity
        if activity is None or activity.task is None:
            raise SnapshotReferenceError(source, "focused_task", task_id)
        return activity
