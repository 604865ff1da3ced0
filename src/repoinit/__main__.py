"""Entry point for the repoinit interfaces."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, NoReturn

from repoinit.core.errors import ExposureConfigurationError
from repoinit.interfases.factory import resolve_exposure_from_environment

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from typing import Any


def main(argv: Sequence[str] | None = None) -> NoReturn:
    """Resolve the requested exposure and delegate execution to it."""
    try:
        exposure = resolve_exposure_from_environment()
    except ExposureConfigurationError as error:
        raise SystemExit(str(error)) from error

    arguments = list(sys.argv[1:] if argv is None else argv)
    config: Mapping[str, Any] = {"argv": arguments}

    exposure.serve(config=config)
    raise SystemExit(0)


if __name__ == "__main__":  # pragma: no cover - manual execution guard
    main()
