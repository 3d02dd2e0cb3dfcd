"""CLI command tests using Click CliRunner.

Strategy: patch get_components at each command module's import point so the
commands run against a real tracker backed by a temp state file.
"""

import importlib
import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from cli.config_models import CosmosConfig
from cli.main import cli
from habits.backup import encrypt_state


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def components(tracker, storage, tmp_path):
    config = CosmosConfig.from_dict(
        {"paths": {"state_file": str(storage.path), "backup_dir": str(tmp_path / "backups")}}
    )
    return {"config": config, "storage": storage, "tracker": tracker}


@pytest.fixture
def patch_components(components):
    """Patch get_components everywhere it's imported."""
    # cli.commands re-exports the click groups under the module names,
    # so look the modules up directly
    names = ["habit", "stats", "challenges", "badges", "export", "reminders"]
    modules = [importlib.import_module(f"cli.commands.{n}") for n in names]
    patches = [patch.object(m, "get_components", return_value=components) for m in modules]
    for p in patches:
        p.start()
    yield components
    for p in patches:
        p.stop()


class TestHabitCommands:
    def test_add(self, runner, patch_components):
        result = runner.invoke(cli, ["habit", "add", "Stretch", "-e", "🧘", "-p", "5"])
        assert result.exit_code == 0
        assert "Added" in result.output
        assert patch_components["tracker"].find_habit("Stretch").priority == 5

    def test_add_rejects_priority(self, runner, patch_components):
        result = runner.invoke(cli, ["habit", "add", "Stretch", "-p", "9"])
        assert result.exit_code != 0

    def test_list(self, runner, patch_components):
        result = runner.invoke(cli, ["habit", "list"])
        assert result.exit_code == 0
        assert "Habit b" in result.output

    def test_list_focus(self, runner, patch_components):
        patch_components["tracker"].add_habit("Fourth", priority=1)
        result = runner.invoke(cli, ["habit", "list", "--focus"])
        assert result.exit_code == 0
        assert "Fourth" not in result.output

    def test_toggle_by_name(self, runner, patch_components):
        result = runner.invoke(cli, ["habit", "toggle", "Habit a", "--day", "2024-03-13"])
        assert result.exit_code == 0
        assert "Done" in result.output
        assert patch_components["tracker"].store.has_completion("a", "2024-03-13")

    def test_toggle_unknown(self, runner, patch_components):
        result = runner.invoke(cli, ["habit", "toggle", "ghost"])
        assert result.exit_code == 1
        assert "Not found" in result.output

    def test_toggle_bad_day(self, runner, patch_components):
        result = runner.invoke(cli, ["habit", "toggle", "a", "--day", "13/03/2024"])
        assert result.exit_code == 1
        assert "Invalid day" in result.output

    def test_undo(self, runner, patch_components):
        runner.invoke(cli, ["habit", "toggle", "a"])
        result = runner.invoke(cli, ["habit", "undo"])
        assert result.exit_code == 0
        assert "Undone" in result.output
        assert patch_components["tracker"].state.logs == []

    def test_undo_nothing(self, runner, patch_components):
        result = runner.invoke(cli, ["habit", "undo"])
        assert result.exit_code == 0
        assert "No action to undo" in result.output


class TestStatsCommand:
    def test_stats(self, runner, patch_components):
        runner.invoke(cli, ["habit", "toggle", "a"])
        result = runner.invoke(cli, ["stats"])
        assert result.exit_code == 0
        assert "Current streak:" in result.output
        assert "Consistency:" in result.output
        assert "100%" in result.output


class TestChallengeCommands:
    def test_show_generates(self, runner, patch_components):
        result = runner.invoke(cli, ["challenges", "show"])
        assert result.exit_code == 0
        assert len(patch_components["tracker"].state.challenges.items) == 4

    def test_regen(self, runner, patch_components):
        result = runner.invoke(cli, ["challenges", "regen"])
        assert result.exit_code == 0
        assert "Generated 4 challenges" in result.output

    def test_complete_and_badges(self, runner, patch_components):
        week = patch_components["tracker"].generate_challenges()
        cid = week.items[-1].id

        result = runner.invoke(cli, ["challenges", "complete", cid])
        assert result.exit_code == 0
        assert "Badge earned" in result.output

        again = runner.invoke(cli, ["challenges", "complete", cid])
        assert "Already completed" in again.output

        listing = runner.invoke(cli, ["badges"])
        assert listing.exit_code == 0
        assert "No badges yet" not in listing.output
        assert len(patch_components["tracker"].state.badges) == 1

    def test_complete_unknown(self, runner, patch_components):
        result = runner.invoke(cli, ["challenges", "complete", "nope"])
        assert result.exit_code == 1

    def test_no_badges(self, runner, patch_components):
        result = runner.invoke(cli, ["badges"])
        assert "No badges yet" in result.output


class TestExportCommands:
    def test_export_json_file(self, runner, patch_components, tmp_path):
        out = tmp_path / "out" / "export.json"
        result = runner.invoke(cli, ["export", "json", "-o", str(out)])
        assert result.exit_code == 0
        assert len(json.loads(out.read_text())["habits"]) == 3

    def test_import_replaces_state(self, runner, patch_components, tmp_path):
        src = tmp_path / "in.json"
        src.write_text(json.dumps({"habits": [{"id": "z", "name": "Only"}]}))
        result = runner.invoke(cli, ["export", "import", str(src), "-y"])
        assert result.exit_code == 0
        assert [h.id for h in patch_components["tracker"].state.habits] == ["z"]
        assert patch_components["storage"].load().habits[0].name == "Only"

    def test_import_invalid_keeps_state(self, runner, patch_components, tmp_path):
        src = tmp_path / "bad.json"
        src.write_text("{oops")
        before = patch_components["storage"].path.read_text()
        result = runner.invoke(cli, ["export", "import", str(src), "-y"])
        assert result.exit_code == 1
        assert "Invalid JSON" in result.output
        assert patch_components["storage"].path.read_text() == before

    def test_import_binary_file(self, runner, patch_components, tmp_path):
        src = tmp_path / "backup.bin"
        src.write_bytes(b"COSMOS1\xff\xfe\x00\x81binary")
        before = patch_components["storage"].path.read_text()
        result = runner.invoke(cli, ["export", "import", str(src), "-y"])
        assert result.exit_code == 1
        assert "Invalid JSON" in result.output
        assert patch_components["storage"].path.read_text() == before

    def test_backup_and_restore(self, runner, patch_components, tmp_path):
        out = tmp_path / "backup.bin"
        result = runner.invoke(
            cli, ["export", "backup", "-o", str(out)], input="s3cret\ns3cret\n"
        )
        assert result.exit_code == 0
        assert out.exists()

        patch_components["tracker"].add_habit("After backup")
        result = runner.invoke(cli, ["export", "restore", str(out), "-y"], input="s3cret\n")
        assert result.exit_code == 0
        assert patch_components["tracker"].find_habit("After backup") is None

    def test_restore_wrong_passphrase(self, runner, patch_components, tmp_path):
        out = tmp_path / "backup.bin"
        out.write_bytes(encrypt_state(patch_components["tracker"].state, "right"))
        before = patch_components["storage"].path.read_text()
        result = runner.invoke(
            cli, ["export", "restore", str(out), "-y", "--passphrase", "wrong"]
        )
        assert result.exit_code == 1
        assert "Restore failed" in result.output
        assert patch_components["storage"].path.read_text() == before


class TestReminderCommands:
    def test_fire(self, runner, patch_components):
        result = runner.invoke(cli, ["reminders", "fire"])
        assert result.exit_code == 0
        assert "Quick reminder: Habit b" in result.output

    def test_start_requires_enable(self, runner, patch_components):
        result = runner.invoke(cli, ["reminders", "start"])
        assert result.exit_code == 1
        assert "disabled" in result.output

    def test_enable_disable(self, runner, patch_components):
        runner.invoke(cli, ["reminders", "enable"])
        assert patch_components["storage"].load().settings.reminders is True
        runner.invoke(cli, ["reminders", "disable"])
        assert patch_components["storage"].load().settings.reminders is False


class TestReminderStateReader:
    def test_reads_latest_saved_state(self, patch_components):
        from cli.commands.reminders import _state_reader

        storage = patch_components["storage"]
        tracker = patch_components["tracker"]
        read = _state_reader(storage, tracker.state)
        tracker.add_habit("Saved later")
        assert any(h.name == "Saved later" for h in read().habits)

    def test_corrupt_file_keeps_last_state_and_is_not_rewritten(self, patch_components):
        from cli.commands.reminders import _state_reader

        storage = patch_components["storage"]
        read = _state_reader(storage, patch_components["tracker"].state)
        assert [h.id for h in read().habits] == ["a", "b", "c"]

        storage.path.write_text("{corrupt")
        assert [h.id for h in read().habits] == ["a", "b", "c"]
        assert storage.path.read_text() == "{corrupt"
