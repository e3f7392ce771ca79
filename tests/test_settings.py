# tests/test_settings.py
from __future__ import annotations

from pathlib import Path

import pytest
import structlog
from structlog.testing import capture_logs

import typed_fetch.utils.settings as settings_mod
from typed_fetch import ConfigurationError, HttpClient, configure_logging


@pytest.fixture(autouse=True)
def _clean_settings(monkeypatch: pytest.MonkeyPatch):
    for key in ("BASE_URL", "DEFAULT_HEADERS", "TIMEOUT_SECONDS", "LOG_LEVEL", "PARAMETERS_PATH"):
        monkeypatch.delenv(f"TYPED_FETCH_{key}", raising=False)
    settings_mod.get_settings.cache_clear()
    yield
    settings_mod.get_settings.cache_clear()


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def test_missing_yaml_yields_defaults(tmp_path: Path) -> None:
    settings = settings_mod.get_settings(tmp_path / "absent.yaml")

    assert settings.base_url is None
    assert settings.default_headers == {}
    assert settings.timeout_seconds is None


def test_yaml_values_are_loaded(tmp_path: Path) -> None:
    path = _write(
        tmp_path / "client.yaml",
        "base_url: http://api.local\n"
        "default_headers:\n"
        "  X-Api-Key: from-yaml\n"
        "timeout_seconds: 12.5\n",
    )

    settings = settings_mod.get_settings(path)

    assert settings.base_url == "http://api.local"
    assert settings.default_headers == {"X-Api-Key": "from-yaml"}
    assert settings.timeout_seconds == 12.5


def test_env_overrides_yaml(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = _write(tmp_path / "client.yaml", "base_url: http://yaml.local\ntimeout_seconds: 3\n")
    monkeypatch.setenv("TYPED_FETCH_BASE_URL", "http://env.local")
    monkeypatch.setenv("TYPED_FETCH_DEFAULT_HEADERS", '{"X-Env": "1"}')

    settings = settings_mod.get_settings(path)

    assert settings.base_url == "http://env.local"
    assert settings.default_headers == {"X-Env": "1"}
    assert settings.timeout_seconds == 3


def test_parameters_path_from_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = _write(tmp_path / "other.yaml", "base_url: http://from-env-path.local\n")
    monkeypatch.setenv("TYPED_FETCH_PARAMETERS_PATH", str(path))

    settings = settings_mod.get_settings()

    assert settings.base_url == "http://from-env-path.local"


def test_non_mapping_yaml_is_ignored(tmp_path: Path) -> None:
    path = _write(tmp_path / "client.yaml", "- just\n- a list\n")

    assert settings_mod.load_yaml_parameters(path) == {}


def test_invalid_yaml_is_ignored(tmp_path: Path) -> None:
    path = _write(tmp_path / "client.yaml", "base_url: [unclosed\n")

    assert settings_mod.load_yaml_parameters(path) == {}


def test_invalid_value_raises_configuration_error(tmp_path: Path) -> None:
    path = _write(tmp_path / "client.yaml", "timeout_seconds: soon\n")

    with pytest.raises(ConfigurationError):
        settings_mod.get_settings(path)


def test_non_positive_timeout_raises_configuration_error(tmp_path: Path) -> None:
    path = _write(tmp_path / "client.yaml", "timeout_seconds: 0\n")

    with pytest.raises(ConfigurationError):
        settings_mod.get_settings(path)


def test_configure_logging_filters_below_level() -> None:
    try:
        configure_logging("warning")
        logger = structlog.get_logger("typed_fetch.test")

        with capture_logs() as captured:
            logger.info("dropped")
            logger.warning("kept")

        assert [entry["event"] for entry in captured] == ["kept"]
    finally:
        structlog.reset_defaults()


def test_yaml_log_level_is_applied_by_from_settings(tmp_path: Path) -> None:
    path = _write(tmp_path / "client.yaml", "base_url: http://api.local\nlog_level: WARNING\n")
    settings = settings_mod.get_settings(path)

    try:
        HttpClient.from_settings(settings)
        logger = structlog.get_logger("typed_fetch.test")

        with capture_logs() as captured:
            logger.debug("dropped")
            logger.info("dropped_too")
            logger.warning("kept")

        assert [entry["event"] for entry in captured] == ["kept"]
    finally:
        structlog.reset_defaults()
