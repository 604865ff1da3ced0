"""Asynchronous child-process execution for external version-control tools."""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Awaitable, Callable, Collection, Mapping, Sequence
from pathlib import Path
from typing import Any

from repoinit.core.errors import ProcessLaunchError
from repoinit.core.models import ProcessOutcome

Runner = Callable[..., Awaitable[Any]]

_CHILD_ENV_OVERRIDES = {
    "LC_ALL": "C",
    "GIT_TERMINAL_PROMPT": "0",
}


class ProcessExecutor:
    """Run an allowlisted executable and capture its exit status and streams."""

    def __init__(
        self,
        *,
        allowed_commands: Collection[str] = ("git",),
        runner: Runner | None = None,
        env: Mapping[str, str] | None = None,
        terminate_grace_seconds: float = 5.0,
        logger: logging.Logger | None = None,
    ) -> None:
        """Configure the executor and the permitted executables."""
        if not allowed_commands:
            error_message = "ProcessExecutor requires at least one allowed command"
            raise ValueError(error_message)
        if terminate_grace_seconds <= 0:
            error_message = "terminate_grace_seconds must be > 0"
            raise ValueError(error_message)

        self._allowed = frozenset(allowed_commands)
        self._runner: Runner = runner or asyncio.create_subprocess_exec
        self._env = os.environ.copy()
        if env:
            self._env.update(env)
        self._env.update(_CHILD_ENV_OVERRIDES)
        self._grace = terminate_grace_seconds
        self._logger = logger or logging.getLogger(__name__)

    def is_allowed(self, executable: str) -> bool:
        """Return whether *executable* (full path or basename) is allowlisted."""
        return executable in self._allowed or Path(executable).name in self._allowed

    async def run(self, argv: Sequence[str]) -> ProcessOutcome:
        """Execute *argv* and return its outcome; non-zero exits are not errors."""
        if not argv:
            error_message = "ProcessExecutor.run requires a non-empty argument vector"
            raise ValueError(error_message)
        command = tuple(argv)
        if not self.is_allowed(command[0]):
            error_message = f"Executable is not present in the allowlist: {command[0]}"
            raise ValueError(error_message)

        spawn = asyncio.ensure_future(
            self._runner(
                *command,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                env=self._env,
            ),
        )
        try:
            process = await asyncio.shield(spawn)
        except OSError as error:
            raise ProcessLaunchError(command, error) from error
        except asyncio.CancelledError:
            self._logger.warning(
                "Cancelled while starting child process; terminating",
                extra={"command": list(command)},
            )
            await self._reap_spawned(spawn)
            raise

        try:
            stdout_bytes, stderr_bytes = await process.communicate()
        except asyncio.CancelledError:
            self._logger.warning(
                "Child process cancelled; terminating",
                extra={"command": list(command)},
            )
            await self._terminate(process)
            raise

        return ProcessOutcome(
            command=command,
            exit_code=process.returncode if process.returncode is not None else -1,
            stdout=_decode(stdout_bytes),
            stderr=_decode(stderr_bytes),
        )

    async def _reap_spawned(self, spawn: asyncio.Future[Any]) -> None:
        try:
            process = await spawn
        except OSError:
            return
        await self._terminate(process)

    async def _terminate(self, process: Any) -> None:
        if process.returncode is not None:
            return
        try:
            process.terminate()
        except ProcessLookupError:
            return
        try:
            await asyncio.wait_for(process.wait(), timeout=self._grace)
        except TimeoutError:
            process.kill()
            await process.wait()


def _decode(data: bytes | str | None) -> str:
    if data is None:
        return ""
    if isinstance(data, str):
        return data
    return data.decode("utf-8", errors="replace")


__all__ = ["ProcessExecutor", "Runner"]
