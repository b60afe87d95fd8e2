"""Integration tests for the running tasks CLI."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from src.cli.tasks import cli


SNAPSHOT_YAML = """
displays:
  - display_id: 0
    focused_task: 2
    tasks:
      - task_id: 1
        uid: 10123
        activity_type: home
        last_active_time: 50
        activities:
          - component: com.android.launcher/.Home
      - task_id: 2
        uid: 10456
        last_active_time: 100
        activities:
          - component: com.example.mail/.Inbox
      - task_id: 3
        uid: 10123
        last_active_time: 100
        activities:
          - component: com.example.notes/.Main
            intent:
              action: android.intent.action.MAIN
              extras:
                note: groceries
      - task_id: 4
        uid: 10123
        last_active_time: 200
        activities:
          - component: com.example.notes/.Editor
  - display_id: 1
    tasks:
      - task_id: 11
        uid: 1010123
        last_active_time: 300
        activities:
          - component: com.example.notes/.Main
recents: [3, 2]
"""


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI test runner."""
    return CliRunner()


@pytest.fixture
def snapshot_path(tmp_path: Path) -> Path:
    """Write the sample snapshot to disk."""
    path = tmp_path / "snapshot.yaml"
    path.write_text(SNAPSHOT_YAML, encoding="utf-8")
    return path


def _task_ids(output: str) -> list[int]:
    return [info["task_id"] for info in json.loads(output)]


class TestResolveCommand:
    """Tests for the resolve command."""

    def test_own_tasks_only(self, runner: CliRunner, snapshot_path: Path) -> None:
        """Without flags only the caller's own tasks come back."""
        result = runner.invoke(cli, ["resolve", str(snapshot_path), "--uid", "10123"])

        assert result.exit_code == 0, result.output
        assert _task_ids(result.stdout) == [4, 3, 1]

    def test_invisible_times_reported_unchanged(
        self, runner: CliRunner, snapshot_path: Path
    ) -> None:
        """Invisible tasks keep their stored activity times."""
        result = runner.invoke(
            cli,
            ["resolve", str(snapshot_path), "--uid", "10123", "--flag", "allowed"],
        )

        assert result.exit_code == 0, result.output
        infos = {info["task_id"]: info for info in json.loads(result.stdout)}
        assert infos[2]["last_active_time"] == 100
        assert infos[3]["last_active_time"] == 100
        assert infos[4]["last_active_time"] == 200

    def test_undecodable_snapshot(self, runner: CliRunner, tmp_path: Path) -> None:
        """A snapshot that is not UTF-8 exits with status 1."""
        path = tmp_path / "binary.yaml"
        path.write_bytes(b"displays:\n  - display_id: \xff\xfe\n")

        result = runner.invoke(cli, ["resolve", str(path), "--uid", "10123"])

        assert result.exit_code == 1
        assert "not valid UTF-8" in result.output

    def test_allowed_flag(self, runner: CliRunner, snapshot_path: Path) -> None:
        """ALLOWED admits other apps of the same user."""
        result = runner.invoke(
            cli,
            ["resolve", str(snapshot_path), "--uid", "10123", "--flag", "allowed"],
        )

        assert result.exit_code == 0, result.output
        assert _task_ids(result.stdout) == [4, 2, 3, 1]

    def test_cross_users_flag(self, runner: CliRunner, snapshot_path: Path) -> None:
        """Cross-user callers see tasks on every display."""
        result = runner.invoke(
            cli,
            [
                "resolve",
                str(snapshot_path),
                "--uid",
                "10123",
                "--flag",
                "allowed",
                "--flag",
                "cross-users",
            ],
        )

        assert result.exit_code == 0, result.output
        assert _task_ids(result.stdout) == [11, 4, 2, 3, 1]

    def test_profile_option(self, runner: CliRunner, snapshot_path: Path) -> None:
        """Profile user ids admit that profile's tasks."""
        result = runner.invoke(
            cli,
            [
                "resolve",
                str(snapshot_path),
                "--uid",
                "10123",
                "--flag",
                "allowed",
                "--profile",
                "10",
            ],
        )

        assert result.exit_code == 0, result.output
        assert _task_ids(result.stdout) == [11, 4, 2, 3, 1]

    def test_visible_recents_only(
        self, runner: CliRunner, snapshot_path: Path
    ) -> None:
        """The recents filter keeps listed tasks and the home task."""
        result = runner.invoke(
            cli,
            [
                "resolve",
                str(snapshot_path),
                "--uid",
                "10123",
                "--flag",
                "visible-recents-only",
            ],
        )

        assert result.exit_code == 0, result.output
        assert _task_ids(result.stdout) == [3, 1]

    def test_max_option(self, runner: CliRunner, snapshot_path: Path) -> None:
        """--max bounds the result list."""
        result = runner.invoke(
            cli,
            [
                "resolve",
                str(snapshot_path),
                "--uid",
                "10123",
                "--flag",
                "allowed",
                "--max",
                "2",
            ],
        )

        assert result.exit_code == 0, result.output
        assert _task_ids(result.stdout) == [4, 2]

    def test_zero_max_returns_empty_list(
        self, runner: CliRunner, snapshot_path: Path
    ) -> None:
        """A non-positive --max yields an empty list."""
        result = runner.invoke(
            cli, ["resolve", str(snapshot_path), "--uid", "10123", "--max", "0"]
        )

        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout) == []

    def test_default_max_from_settings(
        self,
        runner: CliRunner,
        snapshot_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Without --max the configured default applies."""
        monkeypatch.setenv("RUNNING_TASKS_DEFAULT_MAX_RESULTS", "1")

        result = runner.invoke(cli, ["resolve", str(snapshot_path), "--uid", "10123"])

        assert result.exit_code == 0, result.output
        assert _task_ids(result.stdout) == [4]

    def test_intent_extras(self, runner: CliRunner, snapshot_path: Path) -> None:
        """Extras are stripped unless keep-intent-extra is given."""
        stripped = runner.invoke(
            cli, ["resolve", str(snapshot_path), "--uid", "10123"]
        )
        kept = runner.invoke(
            cli,
            [
                "resolve",
                str(snapshot_path),
                "--uid",
                "10123",
                "--flag",
                "keep-intent-extra",
            ],
        )

        assert stripped.exit_code == 0, stripped.output
        assert kept.exit_code == 0, kept.output
        stripped_info = json.loads(stripped.stdout)[1]
        kept_info = json.loads(kept.stdout)[1]
        assert stripped_info["task_id"] == 3
        assert stripped_info["base_intent"]["extras"] == {}
        assert kept_info["base_intent"]["extras"] == {"note": "groceries"}
        assert kept_info["base_intent"]["action"] == "android.intent.action.MAIN"

    def test_display_option(self, runner: CliRunner, snapshot_path: Path) -> None:
        """--display walks a single display."""
        result = runner.invoke(
            cli,
            [
                "resolve",
                str(snapshot_path),
                "--uid",
                "10123",
                "--flag",
                "cross-users",
                "--flag",
                "allowed",
                "--display",
                "1",
            ],
        )

        assert result.exit_code == 0, result.output
        infos = json.loads(result.stdout)
        assert [info["task_id"] for info in infos] == [11]
        assert infos[0]["display_id"] == 1
        assert infos[0]["user_id"] == 10

    def test_unknown_display(self, runner: CliRunner, snapshot_path: Path) -> None:
        """An unknown display exits with an error."""
        result = runner.invoke(
            cli,
            ["resolve", str(snapshot_path), "--uid", "10123", "--display", "7"],
        )

        assert result.exit_code == 1
        assert "Unknown display 7" in result.output

    def test_uid_required(self, runner: CliRunner, snapshot_path: Path) -> None:
        """The caller uid is mandatory."""
        result = runner.invoke(cli, ["resolve", str(snapshot_path)])

        assert result.exit_code != 0
        assert "--uid" in result.output

    def test_invalid_snapshot(self, runner: CliRunner, tmp_path: Path) -> None:
        """Schema errors are listed and exit with status 1."""
        path = tmp_path / "bad.yaml"
        path.write_text("displays:\n  - display_id: 0\n    tasks:\n      - task_id: 1\n")

        result = runner.invoke(cli, ["resolve", str(path), "--uid", "10123"])

        assert result.exit_code == 1
        assert "Snapshot validation failed" in result.output
        assert "uid" in result.output


class TestValidateCommand:
    """Tests for the validate command."""

    def test_valid_snapshot(self, runner: CliRunner, snapshot_path: Path) -> None:
        """A valid snapshot prints a summary."""
        result = runner.invoke(cli, ["validate", str(snapshot_path)])

        assert result.exit_code == 0, result.output
        assert "Snapshot is valid!" in result.output
        assert "Displays: 2" in result.output
        assert "Leaf tasks: 5" in result.output
        assert "Recent tasks: 2" in result.output

    def test_dangling_reference(self, runner: CliRunner, tmp_path: Path) -> None:
        """A recents entry naming no task fails validation."""
        path = tmp_path / "dangling.yaml"
        path.write_text(
            "displays:\n"
            "  - display_id: 0\n"
            "    tasks:\n"
            "      - task_id: 1\n"
            "        uid: 10123\n"
            "recents: [9]\n"
        )

        result = runner.invoke(cli, ["validate", str(path)])

        assert result.exit_code == 1
        assert "recents refers to unknown task 9" in result.output

    def test_malformed_yaml(self, runner: CliRunner, tmp_path: Path) -> None:
        """Unparseable YAML exits with status 1."""
        path = tmp_path / "broken.yaml"
        path.write_text("displays: [\n")

        result = runner.invoke(cli, ["validate", str(path)])

        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_missing_file(self, runner: CliRunner, tmp_path: Path) -> None:
        """A missing snapshot file is rejected by argument parsing."""
        result = runner.invoke(cli, ["validate", str(tmp_path / "absent.yaml")])

        assert result.exit_code == 2
