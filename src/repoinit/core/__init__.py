"""Core domain modules for repoinit."""

from .errors import (
    ClassifiedError,
    ConfigurationError,
    ErrorKind,
    ExposureConfigurationError,
    ExposureError,
    ExposureStateError,
    ProcessLaunchError,
    RepoInitError,
    RepoInitInternalError,
    RepoInitPermissionError,
    RepoInitValidationError,
)
from .models import (
    DEFAULT_SCHEMA_VERSION,
    GitInitInput,
    GitInitResult,
    InitRequest,
    ProcessOutcome,
    RequestContext,
)

__all__ = [
    "DEFAULT_SCHEMA_VERSION",
    "ClassifiedError",
    "ConfigurationError",
    "ErrorKind",
    "ExposureConfigurationError",
    "ExposureError",
    "ExposureStateError",
    "GitInitInput",
    "GitInitResult",
    "InitRequest",
    "ProcessLaunchError",
    "ProcessOutcome",
    "RepoInitError",
    "RepoInitInternalError",
    "RepoInitPermissionError",
    "RepoInitValidationError",
    "RequestContext",
]
