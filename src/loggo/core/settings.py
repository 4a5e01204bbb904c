"""Environment-driven settings for the loggo host.

Every field can be set through a ``LOGGO_``-prefixed environment
variable, e.g. ``LOGGO_PLUGIN_DIR=/opt/loggo/bin``.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Literal, get_args

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from loggo.core.errors import SettingsError

ENV_PREFIX = "LOGGO_"
ENV_PLUGIN_DIR = f"{ENV_PREFIX}PLUGIN_DIR"
ENV_LOG_LEVEL = f"{ENV_PREFIX}LOG_LEVEL"
ENV_TERMINATE_TIMEOUT = f"{ENV_PREFIX}TERMINATE_TIMEOUT"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LOG_LEVELS: tuple[str, ...] = get_args(LogLevel)


class HostSettings(BaseSettings):
    """Settings resolved once at startup.

    Attributes
    ----------
    plugin_dir:
        Directory searched for ``loggo-*`` executables. ``None`` means the
        directory holding the running executable.
    log_level:
        Name of the logging level used for host diagnostics.
    terminate_timeout:
        Seconds granted to a cancelled plugin between ``terminate`` and
        ``kill``.
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_ignore_empty=True,
        case_sensitive=False,
        frozen=True,
    )

    plugin_dir: Path | None = None
    log_level: LogLevel = "WARNING"
    terminate_timeout: float = Field(default=5.0, ge=0, allow_inf_nan=False)

    @field_validator("plugin_dir")
    @classmethod
    def _resolve_plugin_dir(cls, v: Path | None) -> Path | None:
        if v is None:
            return None
        return v.expanduser().resolve()

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalise_log_level(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @classmethod
    def from_env(cls) -> "HostSettings":
        """Build settings from the ``LOGGO_*`` environment variables.

        Raises
        ------
        SettingsError
            If a variable is set to a value that cannot be used.
        """
        try:
            return cls()
        except ValidationError as exc:
            error = exc.errors()[0]
            field = str(error["loc"][0]) if error["loc"] else "settings"
            raise SettingsError(
                f"{ENV_PREFIX}{field.upper()}", str(error.get("input", "")), error["msg"]
            ) from exc
