"""FastMCP(stdio) exposure implementation for repoinit."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, cast
from collections.abc import Mapping

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import BaseModel, ConfigDict, Field

from repoinit.core.config import configure_logging, load_settings
from repoinit.core.errors import ClassifiedError, ExposureConfigurationError, ExposureStateError
from repoinit.core.models import GitInitInput, RequestContext
from repoinit.core.safety import scrub_for_logging
from repoinit.operations import GitInitOperation

logger = logging.getLogger(__name__)

TOOL_NAME = "git_init"


class ServeOptions(BaseModel):
    """Options accepted by :meth:`MCPExposure.serve`."""

    model_config = ConfigDict(extra="ignore")

    transport: str | None = None
    transport_kwargs: dict[str, Any] = Field(default_factory=dict)
    show_banner: bool = True
    strict_input_validation: bool = True
    settings: dict[str, Any] = Field(default_factory=dict)


@dataclass
class MCPRuntime:
    """Stateless helpers shared between FastMCP tool invocations."""

    operation: GitInitOperation

    async def git_init(self, payload: GitInitInput | Mapping[str, Any]) -> dict[str, object]:
        """Run the operation and convert classified errors into tool errors."""
        context = RequestContext(operation=TOOL_NAME)
        try:
            result = await self.operation.run(payload, context=context)
        except ClassifiedError as error:
            raise ToolError(format_tool_error(error)) from error
        return result.to_wire()


def format_tool_error(error: ClassifiedError) -> str:
    """Serialize *error* as the JSON text carried by a :class:`ToolError`."""
    payload = scrub_for_logging(error.to_payload())
    return json.dumps(payload, ensure_ascii=False, sort_keys=True)


class MCPExposure:
    """FastMCP(stdio) exposure that publishes the ``git_init`` tool."""

    def __init__(self) -> None:
        """Initialise the FastMCP server and register the tool."""
        self._mcp = FastMCP("repoinit")
        self._runtime: MCPRuntime | None = None

        @self._mcp.tool(name=TOOL_NAME)
        async def git_init(
            path: str,
            initialBranch: str | None = None,  # noqa: N803 - wire contract uses camelCase
            bare: bool = False,
            quiet: bool = False,
        ) -> dict[str, object]:
            """Initialize a new Git repository at an absolute filesystem path."""
            runtime = self._require_runtime()
            payload = {"path": path, "initial_branch": initialBranch, "bare": bare, "quiet": quiet}
            return await runtime.git_init(payload)

    @property
    def server(self) -> FastMCP:
        """Return the underlying FastMCP server."""
        return self._mcp

    def configure(self, *, operation: GitInitOperation) -> MCPRuntime:
        """Attach the runtime that tool calls delegate to."""
        self._runtime = MCPRuntime(operation=operation)
        return self._runtime

    def serve(self, *, config: Mapping[str, Any] | None = None) -> None:
        """Start the FastMCP server and publish the repoinit tools."""
        try:
            options = ServeOptions.model_validate(dict(config or {}))
        except ValueError as error:
            message = f"Invalid MCP exposure configuration: {error}"
            raise ExposureConfigurationError(message) from error

        settings = load_settings(overrides=options.settings)
        configure_logging(settings.log_level)
        self.configure(operation=GitInitOperation.from_settings(settings))
        logger.info("Starting repoinit MCP server", extra={"transport": options.transport or "stdio"})
        try:
            self._mcp.strict_input_validation = options.strict_input_validation
            transport = cast("Any", options.transport)
            self._mcp.run(transport=transport, show_banner=options.show_banner, **options.transport_kwargs)
        finally:
            self._runtime = None

    def _require_runtime(self) -> MCPRuntime:
        runtime = self._runtime
        if runtime is None:
            message = "FastMCP runtime has not been initialised"
            raise ExposureStateError(message)
        return runtime


def main() -> None:
    """Console-script entry point serving over stdio."""
    MCPExposure().serve()


__all__ = ["MCPExposure", "MCPRuntime", "ServeOptions", "format_tool_error", "main"]
