"""Normalization and access checks for caller-supplied repository paths."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import ValidationError

from repoinit.core.errors import RepoInitValidationError
from repoinit.core.models import GitInitInput, InitRequest

PARENT_MISSING_REASON = "parent directory does not exist"
PARENT_INACCESSIBLE_REASON = "cannot access parent directory"


def sanitize_path(raw_path: str) -> Path:
    """Return a normalized absolute :class:`Path` for *raw_path*.

    Separators are normalized and ``.``/``..`` segments collapsed without
    touching the filesystem.
    """
    if not raw_path or not raw_path.strip():
        message = "Path must be a non-empty string"
        raise RepoInitValidationError(message, reason="empty path", path=raw_path)
    if "\x00" in raw_path:
        message = "Path must not contain NUL bytes"
        raise RepoInitValidationError(message, reason="invalid character", path=raw_path)

    if raw_path != raw_path.strip():
        message = f"Path must not start or end with whitespace: {raw_path!r}"
        raise RepoInitValidationError(message, reason="surrounding whitespace", path=raw_path)
    if not os.path.isabs(raw_path):
        message = f"Path must be absolute: {raw_path}"
        raise RepoInitValidationError(message, reason="path is not absolute", path=raw_path)

    normalized = Path(os.path.normpath(raw_path))
    if normalized.parent == normalized:
        message = "Refusing to initialize a repository at the filesystem root"
        raise RepoInitValidationError(message, reason="path is the filesystem root", path=raw_path)
    return normalized


def check_parent_directory(path: Path, *, raw_path: str | None = None) -> Path:
    """Ensure the parent of *path* exists and accepts new entries."""
    parent = path.parent
    reported = raw_path if raw_path is not None else str(path)
    if not parent.exists():
        message = f"Parent directory does not exist: {parent}"
        raise RepoInitValidationError(message, reason=PARENT_MISSING_REASON, path=reported)
    if not parent.is_dir() or not os.access(parent, os.W_OK | os.X_OK):
        message = f"Cannot access parent directory: {parent}"
        raise RepoInitValidationError(message, reason=PARENT_INACCESSIBLE_REASON, path=reported)
    return parent


def validate_input(payload: GitInitInput | Mapping[str, object]) -> InitRequest:
    """Validate *payload* and return the :class:`InitRequest` used downstream."""
    if not isinstance(payload, GitInitInput):
        try:
            payload = GitInitInput.model_validate(payload)
        except ValidationError as error:
            raw = payload.get("path")
            message = f"Invalid git_init parameters: {error.error_count()} validation error(s)"
            raise RepoInitValidationError(
                message,
                reason="invalid parameters",
                path=raw if isinstance(raw, str) else None,
                raw_message=str(error),
            ) from error

    path = sanitize_path(payload.path)
    check_parent_directory(path, raw_path=payload.path)
    return InitRequest(
        path=path,
        raw_path=payload.path,
        initial_branch=payload.initial_branch,
        bare=payload.bare,
        quiet=payload.quiet,
    )


__all__ = [
    "PARENT_INACCESSIBLE_REASON",
    "PARENT_MISSING_REASON",
    "check_parent_directory",
    "sanitize_path",
    "validate_input",
]
