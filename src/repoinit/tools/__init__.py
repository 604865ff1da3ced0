"""Pipeline stages backing the ``git_init`` operation."""

from .command import (
    DEFAULT_GIT_EXECUTABLE,
    build_command,
    render_command,
    sanitize_branch_name,
)
from .interpret import (
    FAILURE_RULES,
    FailureKind,
    FailureRule,
    classify_failure,
    interpret,
)
from .paths import (
    PARENT_INACCESSIBLE_REASON,
    PARENT_MISSING_REASON,
    check_parent_directory,
    sanitize_path,
    validate_input,
)
from .process import ProcessExecutor

__all__ = [
    "DEFAULT_GIT_EXECUTABLE",
    "FAILURE_RULES",
    "PARENT_INACCESSIBLE_REASON",
    "PARENT_MISSING_REASON",
    "FailureKind",
    "FailureRule",
    "ProcessExecutor",
    "build_command",
    "check_parent_directory",
    "classify_failure",
    "interpret",
    "render_command",
    "sanitize_branch_name",
    "sanitize_path",
    "validate_input",
]
