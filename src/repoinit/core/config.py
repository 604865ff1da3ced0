"""Settings resolution and logging setup shared by every exposure."""

from __future__ import annotations

import json
import logging
import os
import sys
from pathlib import Path
from typing import IO, Any, cast
from collections.abc import Iterable, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigurationError

CONFIG_PATH_ENV = "REPOINIT_CONFIG"
GIT_EXECUTABLE_ENV = "REPOINIT_GIT_EXECUTABLE"
ALLOW_CMDS_ENV = "REPOINIT_ALLOW_CMDS"
LOG_LEVEL_ENV = "REPOINIT_LOG_LEVEL"

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class RepoInitSettings(BaseModel):
    """Runtime settings for the git init pipeline."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    git_executable: str = "git"
    allowed_executables: tuple[str, ...] = ("git",)
    log_level: str = "WARNING"
    terminate_grace_seconds: float = Field(default=5.0, gt=0)

    @field_validator("allowed_executables", mode="before")
    @classmethod
    def _split_allowlist(cls, value: object) -> object:
        if isinstance(value, str):
            return _normalize_allowlist(value.split(","))
        if isinstance(value, Iterable):
            return _normalize_allowlist(cast("Iterable[object]", value))
        return value

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if not isinstance(logging.getLevelName(normalized), int):
            message = f"Unknown log level: {value!r}"
            raise ValueError(message)
        return normalized


def _normalize_allowlist(candidates: Iterable[object]) -> tuple[str, ...]:
    allowed: list[str] = []
    for item in candidates:
        if not isinstance(item, str):
            message = "Allowed executables must be strings"
            raise ValueError(message)
        stripped = item.strip()
        if stripped and stripped not in allowed:
            allowed.append(stripped)
    if not allowed:
        message = "At least one allowed executable must be specified"
        raise ValueError(message)
    return tuple(allowed)


def default_config_path(env: Mapping[str, str] | None = None) -> Path:
    """Return the configuration file location honouring ``REPOINIT_CONFIG``."""
    environment = os.environ if env is None else env
    configured = environment.get(CONFIG_PATH_ENV)
    if configured:
        return Path(configured).expanduser()
    return Path.home() / ".config" / "repoinit" / "config.json"


def _load_config_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as error:
        message = f"Failed to read configuration from {path}: {error}"
        raise ConfigurationError(message) from error

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as error:
        message = f"Failed to parse configuration from {path}: {error}"
        raise ConfigurationError(message) from error

    if not isinstance(payload, Mapping):
        message = f"Configuration at {path} must be a JSON object"
        raise ConfigurationError(message)

    return dict(cast("Mapping[str, Any]", payload))


def load_settings(
    env: Mapping[str, str] | None = None,
    *,
    overrides: Mapping[str, Any] | None = None,
) -> RepoInitSettings:
    """Build settings from the config file, environment and explicit *overrides*."""
    environment = os.environ if env is None else env
    raw = _load_config_file(default_config_path(environment))

    for env_name, key in (
        (GIT_EXECUTABLE_ENV, "git_executable"),
        (ALLOW_CMDS_ENV, "allowed_executables"),
        (LOG_LEVEL_ENV, "log_level"),
    ):
        value = environment.get(env_name)
        if value:
            raw[key] = value

    if overrides:
        raw.update({key: value for key, value in overrides.items() if value is not None})

    try:
        return RepoInitSettings.model_validate(raw)
    except ValidationError as error:
        message = f"Invalid repoinit configuration: {error}"
        raise ConfigurationError(message) from error


def configure_logging(level: str | int = "WARNING", *, stream: IO[str] | None = None) -> logging.Logger:
    """Attach a single stderr handler to the ``repoinit`` logger tree.

    stdout stays reserved for MCP stdio traffic and CLI JSON output.
    """
    logger = logging.getLogger("repoinit")
    logger.setLevel(level)
    for handler in list(logger.handlers):
        if getattr(handler, "_repoinit_handler", False):
            logger.removeHandler(handler)
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    handler._repoinit_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    return logger


__all__ = [
    "ALLOW_CMDS_ENV",
    "CONFIG_PATH_ENV",
    "GIT_EXECUTABLE_ENV",
    "LOG_LEVEL_ENV",
    "RepoInitSettings",
    "configure_logging",
    "default_config_path",
    "load_settings",
]
