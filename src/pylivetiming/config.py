"""Session configuration for pylivetiming."""

from __future__ import annotations

import dataclasses
import os
from pathlib import Path
from typing import Any

from pylivetiming.exceptions import LiveTimingConfigError

_APP_DIR = "pylivetiming"


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _xdg_dir(env_key: str, *fallback: str) -> Path:
    base = os.environ.get(env_key, "").strip()
    root = Path(base) if base else Path.home().joinpath(*fallback)
    return root / _APP_DIR


def default_data_directory() -> Path:
    """``$XDG_DATA_HOME/pylivetiming/data`` or ``~/.local/share/pylivetiming/data``."""
    return _xdg_dir("XDG_DATA_HOME", ".local", "share") / "data"


def default_log_directory() -> Path:
    """``$XDG_STATE_HOME/pylivetiming/logs`` or ``~/.local/state/pylivetiming/logs``."""
    return _xdg_dir("XDG_STATE_HOME", ".local", "state") / "logs"


@dataclasses.dataclass(frozen=True)
class LiveTimingConfig:
    """Session configuration.

    Parameters
    ----------
    data_directory : Path
        Directory where recorded sessions are read from. Owned by the feed
        collaborator; carried here so every consumer agrees on it.
    log_directory : Path
        Directory for log files written by the hosting application.
    verbose : bool
        Whether the hosting application should log at DEBUG level.
    notify : bool
        Whether race control notifications should be delivered.
    api_enabled : bool
        Whether the hosting application exposes its control API.
    initial_delay_seconds : float
        Delay applied to the session clock when the session starts.
    delay_step_seconds : float
        Default step used when nudging the clock delay.
    fine_delay_step_seconds : float
        Small step used when nudging the clock delay.
    coarse_delay_step_seconds : float
        Large step used when nudging the clock delay.
    strict_ingestion : bool
        Re-raise malformed-message errors instead of logging and skipping them.
    """

    data_directory: Path = dataclasses.field(default_factory=default_data_directory)
    log_directory: Path = dataclasses.field(default_factory=default_log_directory)
    verbose: bool = False
    notify: bool = True
    api_enabled: bool = False
    initial_delay_seconds: float = 0.0
    delay_step_seconds: float = 5.0
    fine_delay_step_seconds: float = 1.0
    coarse_delay_step_seconds: float = 30.0
    strict_ingestion: bool = False

    def __post_init__(self) -> None:
        for name in (
            "initial_delay_seconds",
            "delay_step_seconds",
            "fine_delay_step_seconds",
            "coarse_delay_step_seconds",
        ):
            value = getattr(self, name)
            if value < 0:
                raise LiveTimingConfigError(f"{name} must be >= 0, got {value}")

    @classmethod
    def from_env(cls, **overrides: Any) -> LiveTimingConfig:
        """Create configuration from environment variables.

        Reads optional ``LIVETIMING_*`` variables. Explicit keyword arguments
        override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        LiveTimingConfig
            Populated configuration.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        _ENV_PATH_MAP = {
            "LIVETIMING_DATA_DIRECTORY": "data_directory",
            "LIVETIMING_LOG_DIRECTORY": "log_directory",
        }
        for env_key, field_name in _ENV_PATH_MAP.items():
            val = env.get(env_key)
            if val:
                config_kwargs[field_name] = Path(val).expanduser()

        _ENV_BOOL_MAP = {
            "LIVETIMING_VERBOSE": ("verbose", False),
            "LIVETIMING_NOTIFY": ("notify", True),
            "LIVETIMING_API_ENABLED": ("api_enabled", False),
            "LIVETIMING_STRICT_INGESTION": ("strict_ingestion", False),
        }
        for env_key, (field_name, default) in _ENV_BOOL_MAP.items():
            if field_name not in overrides:
                config_kwargs[field_name] = _env_bool(env.get(env_key), default)

        _ENV_FLOAT_MAP = {
            "LIVETIMING_INITIAL_DELAY": "initial_delay_seconds",
            "LIVETIMING_DELAY_STEP": "delay_step_seconds",
            "LIVETIMING_FINE_DELAY_STEP": "fine_delay_step_seconds",
            "LIVETIMING_COARSE_DELAY_STEP": "coarse_delay_step_seconds",
        }
        for env_key, field_name in _ENV_FLOAT_MAP.items():
            val = env.get(env_key)
            if val is None or field_name in overrides:
                continue
            try:
                config_kwargs[field_name] = float(val)
            except ValueError as exc:
                raise LiveTimingConfigError(f"{env_key} must be a number, got {val!r}") from exc

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
