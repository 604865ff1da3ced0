"""Argument vector construction for ``git init``."""

from __future__ import annotations

import shlex
import unicodedata
from collections.abc import Sequence

from repoinit.core.errors import RepoInitValidationError
from repoinit.core.models import InitRequest

DEFAULT_GIT_EXECUTABLE = "git"


def sanitize_branch_name(name: str, *, path: str | None = None) -> str:
    """Return *name* unchanged if it can travel safely as a single argument.

    Quote characters are kept literally: the value is attached to its option
    with ``=`` and never passes through a shell.
    """
    if not name or not name.strip():
        message = "Initial branch name must be a non-empty string"
        raise RepoInitValidationError(message, reason="empty branch name", path=path)
    if name.startswith("-"):
        message = f"Initial branch name must not start with '-': {name!r}"
        raise RepoInitValidationError(message, reason="invalid branch name", path=path)
    if any(unicodedata.category(char) == "Cc" for char in name):
        message = f"Initial branch name contains control characters: {name!r}"
        raise RepoInitValidationError(message, reason="invalid branch name", path=path)
    return name


def build_command(
    request: InitRequest,
    *,
    executable: str = DEFAULT_GIT_EXECUTABLE,
) -> tuple[str, ...]:
    """Return the ``git init`` argument vector for *request*."""
    args: list[str] = [executable, "init"]
    if request.quiet:
        args.append("--quiet")
    if request.bare:
        args.append("--bare")
    if request.initial_branch:
        branch = sanitize_branch_name(request.initial_branch, path=request.raw_path)
        args.append(f"--initial-branch={branch}")
    args.extend(["--", str(request.path)])
    return tuple(args)


def render_command(argv: Sequence[str]) -> str:
    """Return a shell-quoted rendering of *argv* for log output."""
    return shlex.join(argv)


__all__ = [
    "DEFAULT_GIT_EXECUTABLE",
    "build_command",
    "render_command",
    "sanitize_branch_name",
]
