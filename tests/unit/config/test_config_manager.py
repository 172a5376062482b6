"""Tests for ConfigManager."""

from pathlib import Path

import pytest
import yaml

from metacast.config.manager import ConfigManager
from metacast.config.schema import GlobalConfig
from metacast.utils.errors import InvalidConfigError


class TestConfigManager:
    """Tests for ConfigManager class."""

    def test_default_config_file(self, tmp_path: Path, monkeypatch) -> None:
        """Test config file defaults to metacast.yaml in the working directory."""
        monkeypatch.chdir(tmp_path)
        manager = ConfigManager()
        assert manager.config_file == tmp_path / "metacast.yaml"

    def test_load_config_defaults_if_missing(self, tmp_path: Path) -> None:
        """Test that load_config returns defaults without writing a file."""
        manager = ConfigManager(tmp_path / "metacast.yaml")
        config = manager.load_config()

        assert isinstance(config, GlobalConfig)
        assert config.ingest.collection == "general-conference"
        assert not manager.config_file.exists()

    def test_load_config_from_existing_file(self, tmp_path: Path) -> None:
        """Test loading config from existing file."""
        config_file = tmp_path / "metacast.yaml"
        with open(config_file, "w") as f:
            yaml.safe_dump(
                {"log_level": "DEBUG", "ingest": {"failed_talk_policy": "reserve"}}, f
            )

        config = ConfigManager(config_file).load_config()

        assert config.log_level == "DEBUG"
        assert config.ingest.failed_talk_policy == "reserve"

    def test_relative_dirs_resolved_against_config(self, tmp_path: Path) -> None:
        """Test data_dir/out_dir are relative to the config file's directory."""
        config_file = tmp_path / "site" / "metacast.yaml"
        config_file.parent.mkdir()
        config_file.write_text("data_dir: records\nout_dir: /srv/feeds\n")

        config = ConfigManager(config_file).load_config()

        assert config.data_dir == tmp_path / "site" / "records"
        assert config.out_dir == Path("/srv/feeds")

    def test_invalid_yaml_raises(self, tmp_path: Path) -> None:
        """Test malformed YAML raises InvalidConfigError."""
        config_file = tmp_path / "metacast.yaml"
        config_file.write_text("ingest: [unclosed\n")

        with pytest.raises(InvalidConfigError):
            ConfigManager(config_file).load_config()

    def test_invalid_values_raise(self, tmp_path: Path) -> None:
        """Test schema violations raise InvalidConfigError."""
        config_file = tmp_path / "metacast.yaml"
        config_file.write_text("ingest:\n  failed_talk_policy: shuffle\n")

        with pytest.raises(InvalidConfigError) as exc_info:
            ConfigManager(config_file).load_config()
        assert "failed_talk_policy" in str(exc_info.value)

    def test_save_config(self, tmp_path: Path) -> None:
        """Test saving configuration."""
        manager = ConfigManager(tmp_path / "metacast.yaml")
        manager.save_config(GlobalConfig(log_level="WARNING"))

        with open(manager.config_file) as f:
            data = yaml.safe_load(f)
        assert data["log_level"] == "WARNING"
        assert data["feeds"]["base_url"] == "https://joeskeen.github.io/gospel-metacasts"

    def test_create_default_config(self, tmp_path: Path) -> None:
        """Test the commented default config loads back to the defaults."""
        manager = ConfigManager(tmp_path / "metacast.yaml")

        assert manager.create_default_config() is True
        assert "# Metacast Configuration" in manager.config_file.read_text()

        config = manager.load_config()
        assert config.ingest.honorifics == GlobalConfig().ingest.honorifics
        assert config.feeds.category == "Religion & Spirituality"

    def test_create_default_config_keeps_existing(self, tmp_path: Path) -> None:
        """Test an existing config is only replaced with overwrite=True."""
        config_file = tmp_path / "metacast.yaml"
        config_file.write_text("log_level: ERROR\n")
        manager = ConfigManager(config_file)

        assert manager.create_default_config() is False
        assert config_file.read_text() == "log_level: ERROR\n"

        assert manager.create_default_config(overwrite=True) is True
        assert manager.load_config().log_level == "INFO"
