"""Command-line interface for the repoinit project."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any, cast
from collections.abc import Mapping, Sequence

from repoinit.core.config import configure_logging, load_settings
from repoinit.core.errors import (
    ClassifiedError,
    ConfigurationError,
    ErrorKind,
    ExposureError,
)
from repoinit.core.safety import redact_secrets, scrub_for_logging
from repoinit.core.schema import build_tool_schemas, export_tool_schemas
from repoinit.operations import GitInitOperation

EXIT_CODES: Mapping[ErrorKind, int] = {
    ErrorKind.INTERNAL: 1,
    ErrorKind.VALIDATION: 2,
    ErrorKind.FORBIDDEN: 3,
}


class CliError(ExposureError):
    """Exception raised for anticipated CLI failures."""

    def __init__(
        self,
        message: str,
        *,
        exit_code: int = 1,
        kind: str | None = None,
        details: Any | None = None,
    ) -> None:
        super().__init__(message)
        self.exit_code = exit_code
        self.kind = kind
        self.details = details

    @classmethod
    def from_classified(cls, error: ClassifiedError) -> CliError:
        """Wrap a :class:`ClassifiedError` raised by the operation."""
        payload = error.to_payload()
        return cls(
            error.message,
            exit_code=EXIT_CODES[error.kind],
            kind=error.kind.value,
            details=payload["details"],
        )


def main(argv: Sequence[str] | None = None) -> int:
    """Parse *argv*, execute the requested command and return the exit code."""
    parser = _build_parser()
    args_namespace = parser.parse_args(argv)
    command = getattr(args_namespace, "command", None)
    if command is None:
        parser.print_help()
        return 1
    try:
        exit_code = command(args_namespace)
    except CliError as error:
        _emit_error(error)
        exit_code = error.exit_code
    except ClassifiedError as error:
        cli_error = CliError.from_classified(error)
        _emit_error(cli_error)
        exit_code = cli_error.exit_code
    except ConfigurationError as error:
        cli_error = CliError(str(error), exit_code=2, kind="configuration")
        _emit_error(cli_error)
        exit_code = cli_error.exit_code
    except KeyboardInterrupt as error:  # pragma: no cover - manual interruption
        cli_error = CliError("Aborted by user", exit_code=130, details=str(error))
        _emit_error(cli_error)
        exit_code = cli_error.exit_code
    return exit_code


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="repoinit",
        description="Initialize Git repositories with validated, classified results.",
    )
    parser.add_argument("--version", action="version", version="repoinit 0.1.0")
    subparsers = parser.add_subparsers(dest="command_name")

    _configure_init(subparsers)
    _configure_schema(subparsers)

    return parser


def _configure_init(subparsers: Any) -> None:
    parser = subparsers.add_parser(
        "init",
        help="Initialize a Git repository at an absolute path.",
    )
    parser.set_defaults(command=_command_init)
    parser.add_argument("path", help="Absolute path of the repository to create.")
    parser.add_argument(
        "--initial-branch",
        "-b",
        dest="initial_branch",
        help="Name of the initial branch (uses Git's default when omitted).",
    )
    parser.add_argument(
        "--bare",
        action="store_true",
        help="Create a bare repository without a working tree.",
    )
    parser.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Suppress git output and warning-level log events.",
    )
    parser.add_argument(
        "--git",
        dest="git_executable",
        help="git executable to run (must be allowlisted; default from configuration).",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        help="Logging level for stderr diagnostics (default from configuration).",
    )


def _configure_schema(subparsers: Any) -> None:
    schema_parser = subparsers.add_parser(
        "schema",
        help="Interact with the git_init JSON Schema utilities.",
    )
    schema_subparsers = schema_parser.add_subparsers(dest="schema_command")

    export_parser = schema_subparsers.add_parser(
        "export",
        help="Export the git_init tool schemas to a file (default: stdout).",
    )
    export_parser.set_defaults(command=_command_schema_export)
    export_parser.add_argument(
        "--output",
        "--out",
        dest="output_path",
        default="-",
        help="Destination file for the JSON Schemas or '-' for stdout.",
    )


def _command_init(args: argparse.Namespace) -> int:
    settings = load_settings(
        overrides={"git_executable": args.git_executable, "log_level": args.log_level},
    )
    configure_logging(settings.log_level)
    operation = GitInitOperation.from_settings(settings)
    payload = {
        "path": args.path,
        "initial_branch": args.initial_branch,
        "bare": args.bare,
        "quiet": args.quiet,
    }
    result = asyncio.run(operation.run(payload))
    _write_json_output(result.to_wire())
    return 0


def _command_schema_export(args: argparse.Namespace) -> int:
    if args.output_path in {"", "-"}:
        _write_json_output(build_tool_schemas())
    else:
        export_tool_schemas(args.output_path)
    return 0


def _write_json_output(payload: Any) -> None:
    serialized = json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True)
    sys.stdout.write(serialized + "\n")
    sys.stdout.flush()


def _emit_error(error: CliError) -> None:
    payload: dict[str, Any] = {
        "status": "error",
        "message": redact_secrets(str(error)),
        "type": type(error).__name__,
    }
    if error.kind is not None:
        payload["kind"] = error.kind
    if error.details is not None:
        payload["details"] = scrub_for_logging(error.details)
    serialized = json.dumps(payload, ensure_ascii=False, sort_keys=True)
    sys.stderr.write(serialized + "\n")
    sys.stderr.flush()


def main_entry() -> None:
    """Console-script entry point."""
    raise SystemExit(main())


__all__ = ["CLIExposure", "CliError", "main", "main_entry"]


class CLIExposure:
    """Exposure adapter that delegates to the CLI entry point."""

    def serve(self, *, config: Mapping[str, Any] | None = None) -> None:
        """Execute the CLI using the provided configuration."""
        argv: Sequence[str] | None = None
        if config is not None and "argv" in config:
            raw_argv = config["argv"]
            if raw_argv is not None:
                if not isinstance(raw_argv, Sequence) or isinstance(raw_argv, (str, bytes)):
                    message = "config['argv'] must be a sequence of strings"
                    raise TypeError(message)
                sequence_candidate = cast("Sequence[Any]", raw_argv)
                validated_arguments: list[str] = []
                for argument in sequence_candidate:
                    if not isinstance(argument, str):
                        message = "config['argv'] must contain only strings"
                        raise TypeError(message)
                    validated_arguments.append(argument)
                argv = list(validated_arguments)
        exit_code = main(argv)
        raise SystemExit(exit_code)
