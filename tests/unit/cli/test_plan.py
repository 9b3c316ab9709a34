"""Unit tests for the plan command."""

import json
from pathlib import Path

from dirkeeper.cli.main import app
from typer.testing import CliRunner

runner = CliRunner()


class TestPlanCommand:
    """Tests for dirkeeper plan."""

    def test_shows_dispatch_order(self, tmp_path: Path) -> None:
        """The archive of a path is listed before its purge."""
        config = tmp_path / "config.json"
        config.write_text(
            json.dumps(
                {
                    "backup_root_path": "/srv/out",
                    "directories": [
                        {"path": "/srv/data", "include_directories": True, "action": "clean"},
                        {"path": "/srv/data", "action": "backup"},
                    ],
                }
            )
        )

        result = runner.invoke(app, ["plan", "-c", str(config)])

        assert result.exit_code == 0
        assert "Run Plan" in result.stdout
        assert result.stdout.index("backup") < result.stdout.index("clean")
        assert "data_" in result.stdout

    def test_touches_nothing(self, sample_tree: Path, tmp_path: Path) -> None:
        """Planning a purge does not delete anything."""
        config = tmp_path / "config.json"
        config.write_text(
            json.dumps({"directories": [{"path": str(sample_tree), "action": "clean"}]})
        )

        result = runner.invoke(app, ["plan", "-c", str(config)])

        assert result.exit_code == 0
        assert (sample_tree / "file1.txt").exists()

    def test_duplicate_archive_names(self, tmp_path: Path) -> None:
        """Colliding archive destinations are reported before anything runs."""
        config = tmp_path / "config.json"
        config.write_text(
            json.dumps(
                {
                    "backup_root_path": "/srv/out",
                    "directories": [
                        {"path": "/srv/one/data", "action": "backup"},
                        {"path": "/srv/two/data", "action": "backup"},
                    ],
                }
            )
        )

        result = runner.invoke(app, ["plan", "-c", str(config)])

        assert result.exit_code == 1
        assert "Error" in result.output

    def test_empty_config(self, tmp_path: Path) -> None:
        """A config without directories prints a notice."""
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"directories": []}))

        result = runner.invoke(app, ["plan", "-c", str(config)])

        assert result.exit_code == 0
        assert "No directories configured" in result.stdout
