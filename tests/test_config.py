from __future__ import annotations

from pathlib import Path

import pytest

from pylivetiming.config import LiveTimingConfig, default_data_directory, default_log_directory
from pylivetiming.exceptions import LiveTimingConfigError


def test_defaults() -> None:
    config = LiveTimingConfig()

    assert config.notify is True
    assert config.verbose is False
    assert config.delay_step_seconds == 5.0
    assert config.fine_delay_step_seconds == 1.0
    assert config.coarse_delay_step_seconds == 30.0


def test_xdg_directories(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data-home"))
    monkeypatch.setenv("XDG_STATE_HOME", str(tmp_path / "state-home"))

    assert default_data_directory() == tmp_path / "data-home" / "pylivetiming" / "data"
    assert default_log_directory() == tmp_path / "state-home" / "pylivetiming" / "logs"


def test_xdg_fallback(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv("XDG_DATA_HOME", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))

    assert default_data_directory() == tmp_path / ".local" / "share" / "pylivetiming" / "data"


def test_from_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("LIVETIMING_DATA_DIRECTORY", str(tmp_path))
    monkeypatch.setenv("LIVETIMING_VERBOSE", "yes")
    monkeypatch.setenv("LIVETIMING_NOTIFY", "off")
    monkeypatch.setenv("LIVETIMING_INITIAL_DELAY", "42.5")
    monkeypatch.setenv("LIVETIMING_STRICT_INGESTION", "1")

    config = LiveTimingConfig.from_env()

    assert config.data_directory == tmp_path
    assert config.verbose is True
    assert config.notify is False
    assert config.initial_delay_seconds == 42.5
    assert config.strict_ingestion is True


def test_from_env_overrides_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LIVETIMING_VERBOSE", "true")
    monkeypatch.setenv("LIVETIMING_DELAY_STEP", "10")

    config = LiveTimingConfig.from_env(verbose=False, delay_step_seconds=2.0)

    assert config.verbose is False
    assert config.delay_step_seconds == 2.0


def test_from_env_rejects_non_numeric(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LIVETIMING_COARSE_DELAY_STEP", "lots")

    with pytest.raises(LiveTimingConfigError):
        LiveTimingConfig.from_env()


def test_negative_delay_rejected() -> None:
    with pytest.raises(LiveTimingConfigError):
        LiveTimingConfig(initial_delay_seconds=-1)
