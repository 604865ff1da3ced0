"""Tests for the git_init JSON Schema helpers."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from jsonschema import ValidationError

from repoinit.core.errors import RepoInitValidationError
from repoinit.core.models import GitInitResult
from repoinit.core.schema import (
    SCHEMA_DRAFT_URL,
    build_error_json_schema,
    build_input_json_schema,
    build_result_json_schema,
    export_tool_schemas,
    validate_payload,
)


def test_input_schema_uses_wire_names() -> None:
    """The input schema mirrors the tool contract."""
    schema = build_input_json_schema()

    assert schema["$schema"] == SCHEMA_DRAFT_URL
    assert schema["required"] == ["path"]
    assert set(schema["properties"]) == {"path", "initialBranch", "bare", "quiet"}
    assert schema["additionalProperties"] is False


def test_input_schema_rejects_unknown_fields() -> None:
    """Payloads with extra fields are invalid."""
    with pytest.raises(ValidationError):
        validate_payload(build_input_json_schema(), {"path": "/tmp/r1", "force": True})


def test_result_schema_accepts_results() -> None:
    """Serialized results validate against the result schema."""
    result = GitInitResult(success=True, message="ok", path="/tmp/r1", repositoryMarkerExists=True)

    validate_payload(build_result_json_schema(), result.to_wire())


def test_error_schema_accepts_error_payloads() -> None:
    """Classified error payloads validate against the error schema."""
    error = RepoInitValidationError("Path must be absolute", path="relative")

    validate_payload(build_error_json_schema(), error.to_payload())


def test_export_tool_schemas(tmp_path: Path) -> None:
    """Exported schemas are written as JSON and returned."""
    output = tmp_path / "nested" / "schemas.json"

    schemas = export_tool_schemas(output)

    assert json.loads(output.read_text(encoding="utf-8")) == schemas
    assert schemas["tool"] == "git_init"
    assert schemas["error"]["properties"]["kind"]["enum"] == ["validation", "forbidden", "internal"]
