"""Factories for creating exposure entry points."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import TYPE_CHECKING

from repoinit.core.errors import ExposureConfigurationError
from repoinit.interfases.cli.app import CLIExposure
from repoinit.interfases.mcp.server_fastmcp import MCPExposure

if TYPE_CHECKING:
    from repoinit.interfases.types import Exposure

EXPOSE_ENV = "REPOINIT_EXPOSE"

_EXPOSURE_FACTORIES = {
    "cli": CLIExposure,
    "mcp": MCPExposure,
}


def make_exposure(kind: str) -> Exposure:
    """Create an exposure implementation for *kind*."""
    try:
        factory = _EXPOSURE_FACTORIES[kind.strip().lower()]
    except KeyError:
        message = f"unknown exposure kind: {kind}"
        raise ExposureConfigurationError(message) from None
    return factory()


def resolve_exposure_from_environment(
    env: Mapping[str, str] | None = None,
    *,
    default: str = "cli",
) -> Exposure:
    """Resolve the exposure based on the provided environment mapping."""
    environment = os.environ if env is None else env
    kind = environment.get(EXPOSE_ENV, default)
    return make_exposure(kind)


__all__ = ["EXPOSE_ENV", "make_exposure", "resolve_exposure_from_environment"]
