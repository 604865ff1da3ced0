"""Classification of ``git init`` outcomes into results or classified errors.

git offers no structured failure codes for ``init``, so failures are mapped
from their diagnostic text. The mapping lives in :data:`FAILURE_RULES`, an
ordered table evaluated top to bottom where the first matching rule wins.
Diagnostics are produced under ``LC_ALL=C`` (see
:mod:`repoinit.tools.process`) so the English patterns stay stable.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

from repoinit.core.errors import RepoInitInternalError, RepoInitPermissionError
from repoinit.core.models import GitInitResult, InitRequest, ProcessOutcome


class FailureKind(StrEnum):
    """Categories recognised in the diagnostics of a failed ``git init``."""

    REINITIALIZED = "reinitialized"
    PERMISSION_DENIED = "permission_denied"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class FailureRule:
    """Match when every needle occurs in the lower-cased diagnostic text."""

    kind: FailureKind
    needles: tuple[str, ...]

    def matches(self, text: str) -> bool:
        """Return whether all needles are present in *text*."""
        lowered = text.lower()
        return all(needle in lowered for needle in self.needles)


FAILURE_RULES: tuple[FailureRule, ...] = (
    FailureRule(FailureKind.REINITIALIZED, ("already exists", "repository")),
    FailureRule(FailureKind.PERMISSION_DENIED, ("permission denied",)),
)


def classify_failure(text: str, rules: tuple[FailureRule, ...] = FAILURE_RULES) -> FailureKind:
    """Return the first :class:`FailureKind` whose rule matches *text*."""
    for rule in rules:
        if rule.matches(text):
            return rule.kind
    return FailureKind.UNKNOWN


def initialized_message(path: Path | str) -> str:
    """Return the message used when git printed nothing on success."""
    return f"Initialized empty Git repository in {path}"


def reinitialized_message(path: Path | str) -> str:
    """Return the message used when an existing repository was detected."""
    return f"Reinitialized existing Git repository in {path}"


def marker_exists(request: InitRequest) -> bool:
    """Probe the filesystem for the repository marker of *request*."""
    return request.marker_path.exists()


def has_worktree_repository(request: InitRequest) -> bool:
    """Return whether a bare *request* targets an existing non-bare repository.

    git accepts ``--bare`` on such a directory and reports a fresh
    initialization, although the working-tree repository was already there.
    """
    return request.bare and (request.path / ".git").exists()


def interpret(
    outcome: ProcessOutcome,
    request: InitRequest,
    *,
    logger: logging.Logger | None = None,
) -> GitInitResult:
    """Turn *outcome* into a :class:`GitInitResult` or raise a classified error."""
    log = logger or logging.getLogger(__name__)
    path = str(request.path)

    if outcome.exit_succeeded:
        exists = marker_exists(request)
        if not exists:
            log.warning(
                "Could not verify repository marker after git init",
                extra={"marker_path": str(request.marker_path)},
            )
        if has_worktree_repository(request):
            message = reinitialized_message(request.path)
        else:
            message = outcome.stdout.strip() or initialized_message(request.path)
        return GitInitResult(
            success=True,
            message=message,
            path=path,
            repository_marker_exists=exists,
        )

    raw_message = outcome.stderr.strip() or outcome.stdout.strip() or f"exit status {outcome.exit_code}"
    kind = classify_failure(outcome.combined_output)

    if kind is FailureKind.REINITIALIZED:
        exists = marker_exists(request)
        if not exists:
            log.warning(
                "git reported an existing repository but the marker is missing",
                extra={"marker_path": str(request.marker_path)},
            )
        return GitInitResult(
            success=True,
            message=reinitialized_message(request.path),
            path=path,
            repository_marker_exists=exists,
        )

    if kind is FailureKind.PERMISSION_DENIED:
        message = f"Permission denied to initialize repository at: {path}. Error: {raw_message}"
        raise RepoInitPermissionError(message, path=request.raw_path, raw_message=raw_message)

    message = f"Failed to initialize repository at: {path}. Error: {raw_message}"
    raise RepoInitInternalError(
        message,
        path=request.raw_path,
        raw_message=raw_message,
        details={"exit_code": outcome.exit_code},
    )


__all__ = [
    "FAILURE_RULES",
    "FailureKind",
    "FailureRule",
    "classify_failure",
    "has_worktree_repository",
    "initialized_message",
    "interpret",
    "marker_exists",
    "reinitialized_message",
]
