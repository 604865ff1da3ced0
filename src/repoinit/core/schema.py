"""Utilities for exporting the ``git_init`` tool contract as JSON Schema."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from jsonschema import Draft202012Validator

from .errors import ErrorKind
from .models import DEFAULT_SCHEMA_VERSION, GitInitInput, GitInitResult

SCHEMA_DRAFT_URL = "https://json-schema.org/draft/2020-12/schema"
SCHEMA_BASE_ID = "https://schemas.repoinit.dev"


def build_input_json_schema() -> dict[str, Any]:
    """Return the JSON Schema accepted by the ``git_init`` tool."""
    schema = GitInitInput.model_json_schema(by_alias=True)
    schema.setdefault("$schema", SCHEMA_DRAFT_URL)
    schema["title"] = "GitInitInput"
    schema.setdefault("$id", f"{SCHEMA_BASE_ID}/git_init.input.json")
    Draft202012Validator.check_schema(schema)
    return schema


def build_result_json_schema() -> dict[str, Any]:
    """Return the JSON Schema of a successful ``git_init`` result."""
    schema = GitInitResult.model_json_schema(by_alias=True, mode="serialization")
    schema.setdefault("$schema", SCHEMA_DRAFT_URL)
    schema["title"] = "GitInitResult"
    schema.setdefault("$id", f"{SCHEMA_BASE_ID}/git_init.result.json")
    Draft202012Validator.check_schema(schema)
    return schema


def build_error_json_schema() -> dict[str, Any]:
    """Return the JSON Schema of a classified error payload."""
    schema: dict[str, Any] = {
        "$schema": SCHEMA_DRAFT_URL,
        "$id": f"{SCHEMA_BASE_ID}/git_init.error.json",
        "title": "ClassifiedError",
        "type": "object",
        "properties": {
            "kind": {"type": "string", "enum": [kind.value for kind in ErrorKind]},
            "message": {"type": "string"},
            "details": {
                "type": "object",
                "properties": {
                    "operation": {"type": "string"},
                    "path": {"type": "string"},
                    "raw_message": {"type": "string"},
                    "request_id": {"type": "string"},
                },
                "required": ["operation"],
            },
        },
        "required": ["kind", "message", "details"],
    }
    Draft202012Validator.check_schema(schema)
    return schema


def build_tool_schemas() -> dict[str, Any]:
    """Return every schema describing the ``git_init`` contract."""
    return {
        "schema_version": DEFAULT_SCHEMA_VERSION,
        "tool": "git_init",
        "input": build_input_json_schema(),
        "result": build_result_json_schema(),
        "error": build_error_json_schema(),
    }


def validate_payload(schema: dict[str, Any], payload: Any) -> None:
    """Raise :class:`jsonschema.ValidationError` if *payload* violates *schema*."""
    Draft202012Validator(schema).validate(payload)


def export_tool_schemas(path: Path | str) -> dict[str, Any]:
    """Write the tool schemas to *path* and return them."""
    schemas = build_tool_schemas()
    path_obj = Path(path)
    path_obj.parent.mkdir(parents=True, exist_ok=True)
    path_obj.write_text(
        json.dumps(schemas, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return schemas


__all__ = [
    "SCHEMA_DRAFT_URL",
    "build_error_json_schema",
    "build_input_json_schema",
    "build_result_json_schema",
    "build_tool_schemas",
    "export_tool_schemas",
    "validate_payload",
]
