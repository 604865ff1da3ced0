"""The ``git_init`` operation: validate, build, execute, interpret."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from repoinit.core.config import RepoInitSettings
from repoinit.core.errors import (
    ClassifiedError,
    ConfigurationError,
    ProcessLaunchError,
    RepoInitInternalError,
)
from repoinit.core.models import GitInitInput, GitInitResult, RequestContext
from repoinit.core.safety import scrub_for_logging
from repoinit.tools.command import DEFAULT_GIT_EXECUTABLE, build_command, render_command
from repoinit.tools.interpret import interpret
from repoinit.tools.paths import validate_input
from repoinit.tools.process import ProcessExecutor


class GitInitOperation:
    """Orchestrates the git init pipeline; the sole entry point for exposures."""

    def __init__(
        self,
        *,
        executor: ProcessExecutor | None = None,
        git_executable: str = DEFAULT_GIT_EXECUTABLE,
        logger: logging.Logger | None = None,
    ) -> None:
        """Store collaborators; a default :class:`ProcessExecutor` is built if omitted."""
        self._logger = logger or logging.getLogger(__name__)
        self._executor = executor or ProcessExecutor(logger=self._logger)
        if not self._executor.is_allowed(git_executable):
            message = f"git executable is not allowlisted: {git_executable}"
            raise ConfigurationError(message)
        self._git_executable = git_executable

    @classmethod
    def from_settings(
        cls,
        settings: RepoInitSettings,
        *,
        logger: logging.Logger | None = None,
    ) -> GitInitOperation:
        """Build an operation wired according to *settings*."""
        executor = ProcessExecutor(
            allowed_commands=settings.allowed_executables,
            terminate_grace_seconds=settings.terminate_grace_seconds,
            logger=logger,
        )
        return cls(executor=executor, git_executable=settings.git_executable, logger=logger)

    async def run(
        self,
        payload: GitInitInput | Mapping[str, Any],
        *,
        context: RequestContext | None = None,
    ) -> GitInitResult:
        """Initialize a repository described by *payload*."""
        ctx = context or RequestContext()
        log_extra = ctx.as_log_extra()
        raw_input = payload.model_dump(by_alias=True) if isinstance(payload, GitInitInput) else dict(payload)
        self._logger.debug(
            "Executing git_init",
            extra={**log_extra, "input": scrub_for_logging(raw_input)},
        )

        try:
            request = validate_input(payload)
            argv = build_command(request, executable=self._git_executable)
        except ClassifiedError as error:
            self._record_failure(error, ctx)
            raise

        self._logger.debug(
            "Executing command: %s",
            render_command(argv),
            extra={**log_extra, "path": str(request.path)},
        )

        try:
            outcome = await self._executor.run(argv)
        except ProcessLaunchError as error:
            internal = RepoInitInternalError(
                f"Failed to initialize repository at: {request.path}. Error: {error}",
                path=request.raw_path,
                raw_message=str(error.cause),
                operation=ctx.operation,
            )
            self._record_failure(internal, ctx)
            raise internal from error

        if not request.quiet:
            if outcome.stderr.strip():
                self._logger.warning(
                    "git init produced stderr",
                    extra={**log_extra, "stderr": scrub_for_logging(outcome.stderr)},
                )
            if outcome.stdout.strip():
                self._logger.info(
                    "git init produced stdout",
                    extra={**log_extra, "stdout": scrub_for_logging(outcome.stdout)},
                )

        try:
            result = interpret(outcome, request, logger=self._logger)
        except ClassifiedError as error:
            error.operation = ctx.operation
            self._record_failure(error, ctx)
            raise

        self._logger.info(
            "git_init executed successfully",
            extra={
                **log_extra,
                "path": result.path,
                "repository_marker_exists": result.repository_marker_exists,
            },
        )
        return result

    def _record_failure(self, error: ClassifiedError, context: RequestContext) -> None:
        error.details.setdefault("request_id", context.request_id)
        self._logger.error(
            "git_init failed",
            extra={
                **context.as_log_extra(),
                "kind": error.kind.value,
                "error": scrub_for_logging(error.message),
                "path": error.path,
            },
        )


async def git_init(
    path: str,
    *,
    initial_branch: str | None = None,
    bare: bool = False,
    quiet: bool = False,
    operation: GitInitOperation | None = None,
) -> GitInitResult:
    """Initialize a repository at *path* with a default :class:`GitInitOperation`."""
    runner = operation or GitInitOperation()
    payload = GitInitInput(path=path, initial_branch=initial_branch, bare=bare, quiet=quiet)
    return await runner.run(payload)


__all__ = ["GitInitOperation", "git_init"]
