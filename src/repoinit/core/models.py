"""Domain models flowing through the git init pipeline."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from .errors import DEFAULT_OPERATION

DEFAULT_SCHEMA_VERSION = "0.1.0"


class GitInitInput(BaseModel):
    """Caller-supplied parameters for the ``git_init`` operation."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    path: str = Field(
        min_length=1,
        description="The absolute path where the new Git repository should be initialized.",
    )
    initial_branch: str | None = Field(
        default=None,
        alias="initialBranch",
        description="Optional name for the initial branch (e.g. 'main'). Uses Git's default if omitted.",
    )
    bare: bool = Field(
        default=False,
        description="Create a bare repository (no working directory).",
    )
    quiet: bool = Field(
        default=False,
        description="Only print error and warning messages; all other output is suppressed.",
    )


class GitInitResult(BaseModel):
    """Normalized outcome returned to the caller."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    success: bool
    message: str
    path: str
    repository_marker_exists: bool = Field(alias="repositoryMarkerExists")

    def to_wire(self) -> dict[str, object]:
        """Return the camelCase JSON representation used by exposures."""
        return self.model_dump(mode="json", by_alias=True)


@dataclass(frozen=True)
class InitRequest:
    """Validated input produced by the path sanitizer."""

    path: Path
    raw_path: str
    initial_branch: str | None = None
    bare: bool = False
    quiet: bool = False

    @property
    def marker_path(self) -> Path:
        """Return the on-disk location that proves the repository exists."""
        return self.path if self.bare else self.path / ".git"


@dataclass(frozen=True)
class ProcessOutcome:
    """Captured result of a finished child process."""

    command: tuple[str, ...]
    exit_code: int
    stdout: str = ""
    stderr: str = ""

    @property
    def exit_succeeded(self) -> bool:
        """Return whether the process exited with status zero."""
        return self.exit_code == 0

    @property
    def combined_output(self) -> str:
        """Return stderr and stdout joined for diagnostic matching."""
        return "\n".join(part for part in (self.stderr, self.stdout) if part)


def _new_request_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class RequestContext:
    """Per-call identifiers attached to log events and errors."""

    operation: str = DEFAULT_OPERATION
    request_id: str = field(default_factory=_new_request_id)

    def as_log_extra(self) -> dict[str, str]:
        """Return the context as a ``logging`` ``extra`` mapping."""
        return {"operation": self.operation, "request_id": self.request_id}


__all__ = [
    "DEFAULT_SCHEMA_VERSION",
    "GitInitInput",
    "GitInitResult",
    "InitRequest",
    "ProcessOutcome",
    "RequestContext",
]
