"""Domain-specific exception hierarchy for repoinit."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

DEFAULT_OPERATION = "git_init"


class ErrorKind(StrEnum):
    """Closed set of error kinds consumed by the protocol layer."""

    VALIDATION = "validation"
    FORBIDDEN = "forbidden"
    INTERNAL = "internal"


class RepoInitError(Exception):
    """Base class for all domain-specific errors raised by repoinit."""


class ClassifiedError(RepoInitError):
    """An error tagged with an :class:`ErrorKind` and call context."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        raw_message: str | None = None,
        operation: str = DEFAULT_OPERATION,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.path = path
        self.raw_message = raw_message
        self.operation = operation
        self.details: dict[str, Any] = dict(details or {})

    def to_payload(self) -> dict[str, Any]:
        """Return a JSON-compatible description of the error."""
        details: dict[str, Any] = {"operation": self.operation}
        if self.path is not None:
            details["path"] = self.path
        if self.raw_message is not None:
            details["raw_message"] = self.raw_message
        details.update(self.details)
        return {"kind": self.kind.value, "message": self.message, "details": details}


class RepoInitValidationError(ClassifiedError):
    """Raised when inputs are invalid or the parent directory is unusable."""

    kind = ErrorKind.VALIDATION

    def __init__(self, message: str, *, reason: str | None = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.reason = reason or message
        self.details.setdefault("reason", self.reason)


class RepoInitPermissionError(ClassifiedError):
    """Raised when git reports a filesystem permission denial."""

    kind = ErrorKind.FORBIDDEN


class RepoInitInternalError(ClassifiedError):
    """Raised for unclassified git failures or when git cannot be launched."""

    kind = ErrorKind.INTERNAL


class ProcessLaunchError(RepoInitError):
    """Raised when the external executable cannot be started at all."""

    def __init__(self, command: tuple[str, ...], cause: OSError) -> None:
        message = f"Failed to launch {command[0]!r}: {cause}"
        super().__init__(message)
        self.command = command
        self.cause = cause


class ConfigurationError(RepoInitError):
    """Raised when settings files or environment overrides are invalid."""


class ExposureError(RepoInitError):
    """Base class for errors surfaced through CLI or MCP exposures."""


class ExposureConfigurationError(ExposureError, ValueError):
    """Raised when an exposure receives invalid configuration or options."""


class ExposureStateError(ExposureError, RuntimeError):
    """Raised when an exposure is invoked while it is in an invalid state."""


__all__ = [
    "DEFAULT_OPERATION",
    "ClassifiedError",
    "ConfigurationError",
    "ErrorKind",
    "ExposureConfigurationError",
    "ExposureError",
    "ExposureStateError",
    "ProcessLaunchError",
    "RepoInitError",
    "RepoInitInternalError",
    "RepoInitPermissionError",
    "RepoInitValidationError",
]
