"""Unit tests for run configuration I/O operations.

Tests for loading and saving configuration files.
"""

import json
import tomllib
from pathlib import Path

import pytest
from dirkeeper.core.config import (
    ConfigNotFoundError,
    ConfigParseError,
    ConfigValidationError,
    config_exists,
    load_config,
    parse_config,
    save_config,
)
from dirkeeper.models.entry import ActionKind, DirectoryEntry, RunConfig


@pytest.fixture
def sample_config() -> RunConfig:
    """Create a sample configuration for testing."""
    return RunConfig(
        entries=[
            DirectoryEntry(path="/srv/data", action=ActionKind.ARCHIVE),
            DirectoryEntry(path="/srv/data", action=ActionKind.PURGE, include_subdirectories=True),
        ],
        archive_root="/srv/archives",
    )


class TestLoadConfig:
    """Tests for load_config function."""

    def test_load_json(self, tmp_path: Path) -> None:
        """A JSON document with the on-disk key names is accepted."""
        config_path = tmp_path / "config.json"
        config_path.write_text(
            json.dumps(
                {
                    "backup_root_path": "/srv/archives",
                    "directories": [
                        {"path": "/srv/data", "include_directories": True, "action": "clean"},
                        {"path": "/srv/data", "include_directories": False, "action": "backup"},
                    ],
                }
            )
        )

        config = load_config(config_path)

        assert config.archive_root == "/srv/archives"
        assert [e.action for e in config.entries] == [ActionKind.PURGE, ActionKind.ARCHIVE]
        assert config.entries[0].include_subdirectories is True

    def test_load_toml(self, tmp_path: Path) -> None:
        """TOML files are read with the same schema."""
        config_path = tmp_path / "config.toml"
        config_path.write_text(
            '[[directories]]\npath = "/srv/logs"\ninclude_directories = false\naction = "analyze"\n'
        )

        config = load_config(config_path)

        assert config.entries[0].action is ActionKind.MEASURE
        assert config.archive_root is None

    def test_not_found(self, tmp_path: Path) -> None:
        """A missing file raises ConfigNotFoundError."""
        with pytest.raises(ConfigNotFoundError):
            load_config(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        """Malformed JSON raises ConfigParseError."""
        config_path = tmp_path / "config.json"
        config_path.write_text("{ not json")

        with pytest.raises(ConfigParseError):
            load_config(config_path)

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """Malformed TOML raises ConfigParseError."""
        config_path = tmp_path / "config.toml"
        config_path.write_text("[[directories")

        with pytest.raises(ConfigParseError):
            load_config(config_path)

    def test_unknown_action(self, tmp_path: Path) -> None:
        """An unknown action name raises ConfigValidationError."""
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({"directories": [{"path": "/x", "action": "shred"}]}))

        with pytest.raises(ConfigValidationError):
            load_config(config_path)

    def test_missing_archive_root(self, tmp_path: Path) -> None:
        """Archive entries without backup_root_path are rejected."""
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({"directories": [{"path": "/x", "action": "backup"}]}))

        with pytest.raises(ConfigValidationError, match="backup_root_path"):
            load_config(config_path)


class TestParseConfig:
    """Tests for parse_config function."""

    def test_non_mapping_rejected(self) -> None:
        """A document that is not a table is invalid."""
        with pytest.raises(ConfigValidationError):
            parse_config(["not", "a", "mapping"])


class TestSaveConfig:
    """Tests for save_config function."""

    def test_save_creates_parent_directories(
        self, tmp_path: Path, sample_config: RunConfig
    ) -> None:
        """save_config creates parent directories if needed."""
        config_path = tmp_path / "nested" / "config.toml"

        result = save_config(sample_config, config_path)

        assert result == config_path
        assert config_path.exists()

    def test_uses_on_disk_key_names(self, tmp_path: Path, sample_config: RunConfig) -> None:
        """The written TOML uses the on-disk key names and action values."""
        config_path = tmp_path / "config.toml"
        save_config(sample_config, config_path)

        with open(config_path, "rb") as f:
            data = tomllib.load(f)

        assert data["backup_root_path"] == "/srv/archives"
        assert data["directories"][1] == {
            "path": "/srv/data",
            "include_directories": True,
            "action": "clean",
        }

    def test_round_trip(self, tmp_path: Path, sample_config: RunConfig) -> None:
        """A saved config loads back unchanged."""
        config_path = tmp_path / "config.toml"
        save_config(sample_config, config_path)

        assert load_config(config_path) == sample_config

    def test_omits_unset_archive_root(self, tmp_path: Path) -> None:
        """An unset archive root is left out of the file."""
        config_path = tmp_path / "config.toml"
        save_config(RunConfig(), config_path)

        with open(config_path, "rb") as f:
            data = tomllib.load(f)

        assert data == {"directories": []}

    def test_no_temp_files_left(self, tmp_path: Path, sample_config: RunConfig) -> None:
        """Atomic write leaves only the target file behind."""
        save_config(sample_config, tmp_path / "config.toml")

        assert [p.name for p in tmp_path.iterdir()] == ["config.toml"]


class TestConfigExists:
    """Tests for config_exists function."""

    def test_exists(self, tmp_path: Path) -> None:
        """config_exists reports an existing file."""
        config_path = tmp_path / "config.toml"
        assert not config_exists(config_path)

        config_path.write_text("directories = []\n")
        assert config_exists(config_path)
