"""Shared interface definitions for repoinit exposures."""

from __future__ import annotations

from typing import Any, Protocol
from collections.abc import Mapping


class Exposure(Protocol):
    """Protocol describing an executable exposure entry point."""

    def serve(self, *, config: Mapping[str, Any] | None = None) -> None:
        """Start the exposure using an optional configuration mapping."""
        raise NotImplementedError


__all__ = ["Exposure"]
