"""Core package for the repoinit project."""

from .core.errors import (
    ClassifiedError,
    ErrorKind,
    RepoInitError,
    RepoInitInternalError,
    RepoInitPermissionError,
    RepoInitValidationError,
)
from .core.models import GitInitInput, GitInitResult
from .operations import GitInitOperation, git_init

__all__ = [
    "ClassifiedError",
    "ErrorKind",
    "GitInitInput",
    "GitInitOperation",
    "GitInitResult",
    "RepoInitError",
    "RepoInitInternalError",
    "RepoInitPermissionError",
    "RepoInitValidationError",
    "git_init",
]
