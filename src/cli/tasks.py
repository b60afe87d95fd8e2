"""CLI commands for resolving running tasks from tree snapshots."""

import json
import logging
import sys
from pathlib import Path

import click
import yaml

from src.observability.logging import (
    bind_caller_context,
    clear_caller_context,
    configure_logging,
)
from src.ranker import RunningTasksFlag, TaskRanker
from src.settings import get_settings
from src.snapshot import (
    LoadedSnapshot,
    SnapshotError,
    SnapshotLoader,
    SnapshotValidationError,
)
from src.tasks.containers import WindowContainer
from src.tasks.users import user_id_for_uid


# CLI flag names mapped to ranker flag bits
FLAG_CHOICES: dict[str, RunningTasksFlag] = {
    "visible-recents-only": RunningTasksFlag.FILTER_ONLY_VISIBLE_RECENTS,
    "allowed": RunningTasksFlag.ALLOWED,
    "cross-users": RunningTasksFlag.CROSS_USERS,
    "keep-intent-extra": RunningTasksFlag.KEEP_INTENT_EXTRA,
}


def _load_snapshot(snapshot_path: Path) -> LoadedSnapshot:
    """Load a snapshot, exiting with status 1 on any loading error.

    Args:
        snapshot_path: Path to the YAML snapshot.

    Returns:
        The materialized snapshot.
    """
    try:
        return SnapshotLoader().load(snapshot_path)
    except SnapshotValidationError as e:
        click.echo(f"Snapshot validation failed: {e.file_path}", err=True)
        for error in e.errors:
            click.echo(f"  - {error['loc']}: {error['msg']}", err=True)
        sys.exit(1)
    except (SnapshotError, yaml.YAMLError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


def _combine_flags(flag_names: tuple[str, ...]) -> RunningTasksFlag:
    """Combine CLI flag names into ranker flag bits."""
    flags = RunningTasksFlag.NONE
    for name in flag_names:
        flags |= FLAG_CHOICES[name]
    return flags


def _select_root(snapshot: LoadedSnapshot, display_id: int | None) -> WindowContainer:
    """Pick the whole tree or a single display as traversal root."""
    if display_id is None:
        return snapshot.root
    for display in snapshot.root.displays:
        if display.display_id == display_id:
            return display
    click.echo(f"Error: Unknown display {display_id}", err=True)
    sys.exit(1)


@click.group()
@click.version_option(version="0.1.0")
def cli() -> None:
    """Running task resolution CLI."""


@cli.command()
@click.argument(
    "snapshot_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--uid",
    "calling_uid",
    required=True,
    type=click.IntRange(min=0),
    help="Uid of the calling process.",
)
@click.option(
    "--max",
    "max_num",
    type=int,
    default=None,
    help="Maximum number of tasks to return (default: from settings).",
)
@click.option(
    "--flag",
    "flag_names",
    multiple=True,
    type=click.Choice(sorted(FLAG_CHOICES)),
    help="Query flag; may be repeated.",
)
@click.option(
    "--profile",
    "profile_ids",
    multiple=True,
    type=click.IntRange(min=0),
    help="User id of a profile the caller may see; may be repeated.",
)
@click.option(
    "--display",
    "display_id",
    type=int,
    default=None,
    help="Only traverse this display instead of the whole tree.",
)
@click.option(
    "--json-logs/--no-json-logs",
    default=None,
    help="Use JSON format for logs (default: from settings).",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose logging.",
)
def resolve(  # noqa: PLR0913
    snapshot_path: Path,
    calling_uid: int,
    max_num: int | None,
    flag_names: tuple[str, ...],
    profile_ids: tuple[int, ...],
    display_id: int | None,
    json_logs: bool | None,
    verbose: bool,
) -> None:
    """Resolve the ranked running tasks of a snapshot as JSON."""
    settings = get_settings()
    configure_logging(
        level=logging.DEBUG if verbose else settings.log_level_value(),
        json_format=settings.log_json if json_logs is None else json_logs,
    )
    bind_caller_context(calling_uid, user_id_for_uid(calling_uid))

    try:
        snapshot = _load_snapshot(snapshot_path)
        root = _select_root(snapshot, display_id)
        results = TaskRanker().get_tasks(
            max_num=settings.default_max_results if max_num is None else max_num,
            flags=_combine_flags(flag_names),
            calling_uid=calling_uid,
            profile_ids=frozenset(profile_ids),
            recents=snapshot.recents,
            root=root,
        )
    finally:
        clear_caller_context()

    click.echo(json.dumps([info.to_json_dict() for info in results], indent=2))


@cli.command()
@click.argument(
    "snapshot_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
def validate(snapshot_path: Path) -> None:
    """Validate a snapshot file without resolving tasks."""
    configure_logging(json_format=False)
    snapshot = _load_snapshot(snapshot_path)

    leaf_count = 0

    def count_leaf(_task: object) -> None:
        nonlocal leaf_count
        leaf_count += 1

    snapshot.root.for_all_leaf_tasks(count_leaf)

    click.echo("Snapshot is valid!")
    click.echo(f"  Displays: {len(snapshot.root.displays)}")
    click.echo(f"  Leaf tasks: {leaf_count}")
    click.echo(f"  Recent tasks: {len(snapshot.recents)}")


if __name__ == "__main__":
    cli()
