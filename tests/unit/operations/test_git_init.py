"""Tests for the git_init operation entry point."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence
from pathlib import Path

import pytest

from repoinit.core.config import RepoInitSettings
from repoinit.core.errors import (
    ConfigurationError,
    ProcessLaunchError,
    RepoInitInternalError,
    RepoInitPermissionError,
    RepoInitValidationError,
)
from repoinit.core.models import GitInitInput, ProcessOutcome, RequestContext
from repoinit.operations.git_init import GitInitOperation, git_init
from repoinit.tools.paths import PARENT_MISSING_REASON


class StubExecutor:
    """Executor double that records argv and fabricates outcomes."""

    def __init__(
        self,
        respond: Callable[[tuple[str, ...]], ProcessOutcome] | None = None,
        *,
        launch_error: OSError | None = None,
    ) -> None:
        self.calls: list[tuple[str, ...]] = []
        self._respond = respond
        self._launch_error = launch_error

    def is_allowed(self, executable: str) -> bool:
        return Path(executable).name == "git"

    async def run(self, argv: Sequence[str]) -> ProcessOutcome:
        command = tuple(argv)
        self.calls.append(command)
        if self._launch_error is not None:
            raise ProcessLaunchError(command, self._launch_error)
        if self._respond is None:
            return ProcessOutcome(command=command, exit_code=0)
        return self._respond(command)


def _fake_git(command: tuple[str, ...]) -> ProcessOutcome:
    """Create the marker the way ``git init`` would and report like git."""
    target = Path(command[-1])
    bare = "--bare" in command
    marker = target if bare else target / ".git"
    existed = (marker / "HEAD").exists()
    marker.mkdir(parents=True, exist_ok=True)
    (marker / "HEAD").write_text("ref: refs/heads/main\n", encoding="utf-8")
    verb = "Reinitialized existing" if existed else "Initialized empty"
    stdout = "" if "--quiet" in command else f"{verb} Git repository in {marker}/\n"
    return ProcessOutcome(command=command, exit_code=0, stdout=stdout)


def _operation(executor: StubExecutor, logger: logging.Logger | None = None) -> GitInitOperation:
    return GitInitOperation(executor=executor, logger=logger)  # type: ignore[arg-type]


def test_run_initializes_repository(tmp_path: Path) -> None:
    """A valid path yields success and a verified marker."""
    executor = StubExecutor(_fake_git)
    target = tmp_path / "r1"

    result = asyncio.run(_operation(executor).run({"path": str(target), "bare": False, "quiet": False}))

    assert result.success is True
    assert result.path == str(target)
    assert result.repository_marker_exists is True
    assert "Initialized" in result.message
    assert executor.calls == [("git", "init", "--", str(target))]


def test_run_is_idempotent(tmp_path: Path) -> None:
    """A second call on the same path reports reinitialization."""
    executor = StubExecutor(_fake_git)
    operation = _operation(executor)
    payload = GitInitInput(path=str(tmp_path / "r1"))

    first = asyncio.run(operation.run(payload))
    second = asyncio.run(operation.run(payload))

    assert first.success is second.success is True
    assert "Reinitialized" in second.message
    assert second.repository_marker_exists is True


def test_run_forwards_options(tmp_path: Path) -> None:
    """Flags and branch names reach the argument vector."""
    executor = StubExecutor(_fake_git)

    result = asyncio.run(
        _operation(executor).run(
            GitInitInput(path=str(tmp_path / "b.git"), initialBranch='we"ird', bare=True, quiet=True),
        ),
    )

    assert executor.calls[0] == (
        "git",
        "init",
        "--quiet",
        "--bare",
        '--initial-branch=we"ird',
        "--",
        str(tmp_path / "b.git"),
    )
    assert result.message == f"Initialized empty Git repository in {tmp_path / 'b.git'}"


def test_missing_parent_never_starts_process(tmp_path: Path) -> None:
    """Validation failures short-circuit before execution."""
    executor = StubExecutor(_fake_git)

    with pytest.raises(RepoInitValidationError) as excinfo:
        asyncio.run(_operation(executor).run({"path": str(tmp_path / "nope" / "r1")}))

    assert excinfo.value.reason == PARENT_MISSING_REASON
    assert executor.calls == []
    assert not (tmp_path / "nope").exists()


def test_invalid_branch_never_starts_process(tmp_path: Path) -> None:
    """Unsafe branch names are rejected before execution."""
    executor = StubExecutor(_fake_git)

    with pytest.raises(RepoInitValidationError):
        asyncio.run(_operation(executor).run({"path": str(tmp_path / "r1"), "initialBranch": "--evil"}))

    assert executor.calls == []


def test_permission_denied_is_forbidden(tmp_path: Path) -> None:
    """git's permission diagnostics become forbidden errors."""
    target = tmp_path / "forbidden"

    def _denied(command: tuple[str, ...]) -> ProcessOutcome:
        return ProcessOutcome(
            command=command,
            exit_code=1,
            stderr=f"fatal: cannot mkdir {target}: Permission denied\n",
        )

    with pytest.raises(RepoInitPermissionError) as excinfo:
        asyncio.run(_operation(StubExecutor(_denied)).run({"path": str(target)}))

    assert str(target) in str(excinfo.value)
    assert "Permission denied" in str(excinfo.value.raw_message)


def test_launch_failure_is_internal(tmp_path: Path) -> None:
    """A missing git binary surfaces as an internal error."""
    executor = StubExecutor(launch_error=FileNotFoundError(2, "No such file or directory"))
    context = RequestContext(request_id="req-1")

    with pytest.raises(RepoInitInternalError) as excinfo:
        asyncio.run(_operation(executor).run({"path": str(tmp_path / "r1")}, context=context))

    payload = excinfo.value.to_payload()
    assert payload["kind"] == "internal"
    assert payload["details"]["request_id"] == "req-1"
    assert "No such file" in payload["details"]["raw_message"]


def test_logging_events_follow_stages(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    """Debug on entry, info on success, warning for stderr."""

    def _with_hint(command: tuple[str, ...]) -> ProcessOutcome:
        outcome = _fake_git(command)
        return ProcessOutcome(command=command, exit_code=0, stdout=outcome.stdout, stderr="hint: default branch\n")

    logger = logging.getLogger("repoinit.tests.operation")
    caplog.set_level(logging.DEBUG, logger="repoinit.tests.operation")

    asyncio.run(_operation(StubExecutor(_with_hint), logger).run({"path": str(tmp_path / "r1")}))

    levels = [(record.levelno, record.getMessage()) for record in caplog.records]
    assert levels[0] == (logging.DEBUG, "Executing git_init")
    assert (logging.WARNING, "git init produced stderr") in levels
    assert levels[-1] == (logging.INFO, "git_init executed successfully")
    assert all(getattr(record, "operation", None) == "git_init" for record in caplog.records)


def test_quiet_suppresses_output_warnings(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    """Quiet calls do not log git's stderr as warnings."""

    def _with_hint(command: tuple[str, ...]) -> ProcessOutcome:
        _fake_git(command)
        return ProcessOutcome(command=command, exit_code=0, stderr="hint: default branch\n")

    logger = logging.getLogger("repoinit.tests.quiet")
    caplog.set_level(logging.DEBUG, logger="repoinit.tests.quiet")

    asyncio.run(_operation(StubExecutor(_with_hint), logger).run({"path": str(tmp_path / "r1"), "quiet": True}))

    assert not [record for record in caplog.records if record.levelno >= logging.WARNING]


def test_failures_are_logged_as_errors(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    """Every failure path emits an error event."""
    logger = logging.getLogger("repoinit.tests.failure")
    caplog.set_level(logging.DEBUG, logger="repoinit.tests.failure")

    with pytest.raises(RepoInitValidationError):
        asyncio.run(_operation(StubExecutor(), logger).run({"path": "relative"}))

    errors = [record for record in caplog.records if record.levelno == logging.ERROR]
    assert len(errors) == 1
    assert getattr(errors[0], "kind", None) == "validation"


def test_from_settings_rejects_unlisted_executable() -> None:
    """The configured git executable must be allowlisted."""
    settings = RepoInitSettings(git_executable="/opt/bin/hg", allowed_executables=("git",))

    with pytest.raises(ConfigurationError):
        GitInitOperation.from_settings(settings)


def test_git_init_helper_uses_given_operation(tmp_path: Path) -> None:
    """The convenience coroutine delegates to the supplied operation."""
    executor = StubExecutor(_fake_git)

    result = asyncio.run(git_init(str(tmp_path / "r1"), bare=True, operation=_operation(executor)))

    assert result.repository_marker_exists is True
    assert "--bare" in executor.calls[0]
