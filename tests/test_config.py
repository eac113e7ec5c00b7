"""
Tests for settings, YAML preferences and logging setup.
"""

import logging
import pytest
import yaml

from worktime.infra.config import Settings
from worktime.infra.log_setup import setup_logging, LOGGER_NAME


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    # Settings also look for ./config/settings.yaml
    work = tmp_path / "cwd"
    work.mkdir()
    monkeypatch.chdir(work)


@pytest.fixture
def clean_logger():
    logger = logging.getLogger(LOGGER_NAME)
    before = list(logger.handlers)
    level = logger.level
    yield logger
    for handler in logger.handlers:
        if handler not in before:
            handler.close()
    logger.handlers = before
    logger.setLevel(level)


def test_defaults(settings, tmp_path):
    assert settings.config_dir.is_dir()
    assert settings.data_dir.is_dir()
    assert settings.state_file_path == tmp_path / "data" / "worktimetracker_state.json"
    assert settings.export_dir == tmp_path / "data" / "exports"
    assert settings.log_dir == tmp_path / "data" / "logs"
    assert settings.preferences.notification_duration_ms == 3000
    assert settings.preferences.adjust_step_minutes == 15


def test_yaml_preferences_are_loaded(tmp_path):
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    (config_dir / "settings.yaml").write_text(
        yaml.safe_dump({"language": "de", "adjust_step_minutes": 5, "export_directory": str(tmp_path / "out")}),
        encoding="utf-8",
    )
    settings = Settings(config_dir=config_dir, data_dir=tmp_path / "data")

    assert settings.preferences.language == "de"
    assert settings.preferences.adjust_step_minutes == 5
    assert settings.export_dir == tmp_path / "out"


def test_save_preferences_round_trips(settings):
    settings.preferences.clock_interval_ms = 500
    settings.save_preferences()

    reloaded = Settings(config_dir=settings.config_dir, data_dir=settings.data_dir)
    assert reloaded.preferences.clock_interval_ms == 500


def test_environment_overrides_state_file(tmp_path, monkeypatch):
    monkeypatch.setenv("WORKTIME_STATE_FILE_NAME", "other.json")
    settings = Settings(config_dir=tmp_path / "c", data_dir=tmp_path / "d")
    assert settings.state_file_path.name == "other.json"


def test_setup_logging_writes_to_rotating_file(settings, tmp_path, clean_logger):
    logger = setup_logging(settings, log_dir=tmp_path / "logs")
    logging.getLogger("worktime.services.test").info("hello log")
    for handler in logger.handlers:
        handler.flush()

    content = (tmp_path / "logs" / "worktime.log").read_text(encoding="utf-8")
    assert "hello log" in content
    assert "INFO" in content


def test_setup_logging_is_idempotent(settings, tmp_path, clean_logger):
    before = len(clean_logger.handlers)
    setup_logging(settings, log_dir=tmp_path / "logs", console=True)
    setup_logging(settings, log_dir=tmp_path / "logs", console=True)
    assert len(clean_logger.handlers) == before + 2


def test_unknown_log_level_falls_back_to_info(settings, tmp_path, clean_logger):
    settings.preferences.log_level = "chatty"
    logger = setup_logging(settings, log_dir=tmp_path / "logs")
    assert logger.level == logging.INFO
