"""Unit tests for jobfolders.engine.config — FolderPlatformConfig and loading."""

import logging
import pytest
from pathlib import Path

import jobfolders.engine.config as cfg_mod
from jobfolders.engine.config import (
    FolderPlatformConfig,
    LoggingConfig,
    get_config,
    load_config,
    reset_config,
)
from jobfolders.engine.errors import JobFolderConfigError


class TestFolderPlatformConfig:
    """Test the pydantic models."""

    def test_defaults(self):
        cfg = FolderPlatformConfig()
        assert cfg.store.directory == ".jobfolders/store"
        assert cfg.store.seed_unclassified is True
        assert cfg.logging.enabled is True
        assert cfg.logging.level == "INFO"
        assert cfg.logging.directory == ".jobfolders/logs"

    def test_level_is_uppercased(self):
        cfg = LoggingConfig(level="debug")
        assert cfg.level == "DEBUG"
        assert cfg.numeric_level == logging.DEBUG

    def test_invalid_level(self):
        with pytest.raises(ValueError, match="DEBUG/INFO/WARNING/ERROR/CRITICAL"):
            LoggingConfig(level="chatty")


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_path):
        cfg = load_config(str(tmp_path / "absent.yaml"))
        assert cfg == FolderPlatformConfig()

    def test_load_from_path(self, tmp_path):
        path = tmp_path / "jobfolders.yaml"
        path.write_text(
            "store:\n"
            "  directory: /srv/folders\n"
            "  seed_unclassified: false\n"
            "logging:\n"
            "  level: warning\n",
            encoding="utf-8",
        )
        cfg = load_config(str(path))
        assert cfg.store.directory == "/srv/folders"
        assert cfg.store.seed_unclassified is False
        assert cfg.logging.level == "WARNING"
        assert get_config() is cfg

    def test_nested_under_jobfolders_key(self, tmp_path):
        path = tmp_path / "jobfolders.yaml"
        path.write_text("jobfolders:\n  store:\n    directory: nested\n", encoding="utf-8")
        assert load_config(str(path)).store.directory == "nested"

    def test_empty_file(self, tmp_path):
        path = tmp_path / "jobfolders.yaml"
        path.write_text("", encoding="utf-8")
        assert load_config(str(path)) == FolderPlatformConfig()

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "jobfolders.yaml"
        path.write_text("store: [unclosed\n", encoding="utf-8")
        with pytest.raises(JobFolderConfigError, match="Invalid YAML"):
            load_config(str(path))

    def test_top_level_not_a_mapping(self, tmp_path):
        path = tmp_path / "jobfolders.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(JobFolderConfigError, match="mapping"):
            load_config(str(path))

    def test_validation_error(self, tmp_path):
        path = tmp_path / "jobfolders.yaml"
        path.write_text("logging:\n  level: chatty\n", encoding="utf-8")
        with pytest.raises(JobFolderConfigError, match="Invalid configuration") as exc_info:
            load_config(str(path))
        assert exc_info.value.context["config_path"] == str(path)

    def test_auto_discovers_from_parent_directory(self, monkeypatch):
        root = Path.cwd()
        (root / "jobfolders.yaml").write_text("store:\n  directory: found\n", encoding="utf-8")
        nested = root / "a" / "b"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)
        assert load_config().store.directory == "found"


class TestGetConfig:
    def test_lazy_load(self):
        assert cfg_mod._config is None
        cfg = get_config()
        assert cfg is get_config()

    def test_reset(self):
        get_config()
        reset_config()
        assert cfg_mod._config is None
