"""Minimal structural check against a caller-supplied JSON schema.

Supports the top-level subset of JSON Schema that matters for config
files: ``type: object``, ``required`` and ``properties.<name>.type``.
"""

from __future__ import annotations

import json
import logging
import tomllib
from io import StringIO
from typing import Any

from ruamel.yaml import YAML, YAMLError

from confcheck.validator.models import (
    Dialect,
    SchemaError,
    SchemaValidation,
    SchemaWarning,
)

logger = logging.getLogger(__name__)

SCHEMA_DIALECTS = {Dialect.json, Dialect.yaml, Dialect.toml}


def _type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def _shape_error(schema: dict[str, Any]) -> str | None:
    """Describe the first unsupported keyword shape in ``schema``, if any."""
    root_type = schema.get("type")
    if root_type is not None and not (
        isinstance(root_type, str)
        or (isinstance(root_type, list) and all(isinstance(t, str) for t in root_type))
    ):
        return "Schema 'type' must be a string or a list of strings"
    if not isinstance(schema.get("properties", {}), dict):
        return "Schema 'properties' must be an object"
    required = schema.get("required", [])
    if not isinstance(required, list) or not all(isinstance(name, str) for name in required):
        return "Schema 'required' must be a list of strings"
    return None


def _matches_type(value: Any, expected: str | list[str]) -> bool:
    if isinstance(expected, list):
        return any(_matches_type(value, e) for e in expected)
    actual = _type_name(value)
    if expected == "number":
        return actual in ("number", "integer")
    return actual == expected


def _load(content: str, dialect: Dialect) -> Any:
    if dialect is Dialect.json:
        return json.loads(content)
    if dialect is Dialect.toml:
        return tomllib.loads(content)
    yaml = YAML(typ="safe", pure=True)
    yaml.allow_duplicate_keys = True
    return yaml.load(StringIO(content))


def check_schema(content: str, dialect: Dialect, schema_text: str | None) -> SchemaValidation:
    """Check parsed content against ``schema_text`` (JSON)."""
    if not schema_text or not schema_text.strip():
        return SchemaValidation(
            warnings=[
                SchemaWarning(
                    path="$",
                    message="No schema provided",
                    suggestion="Pass a JSON schema in custom_schema",
                )
            ]
        )

    try:
        schema = json.loads(schema_text)
    except ValueError as e:
        return SchemaValidation(
            valid=False,
            errors=[SchemaError(path="$schema", message=f"Schema is not valid JSON: {e}")],
        )
    if not isinstance(schema, dict):
        return SchemaValidation(
            valid=False,
            errors=[SchemaError(path="$schema", message="Schema must be a JSON object")],
        )
    shape_error = _shape_error(schema)
    if shape_error:
        return SchemaValidation(valid=False, errors=[SchemaError(path="$schema", message=shape_error)])

    if dialect not in SCHEMA_DIALECTS:
        return SchemaValidation(
            warnings=[
                SchemaWarning(
                    path="$",
                    message=f"Schema validation is not supported for {dialect.value} files",
                    suggestion="Schema checks apply to json, yaml and toml content",
                )
            ]
        )

    try:
        data = _load(content, dialect)
    except (ValueError, tomllib.TOMLDecodeError, YAMLError) as e:
        logger.debug("Schema check skipped, content did not parse: %s", e)
        return SchemaValidation(
            valid=False,
            errors=[SchemaError(path="$", message="Content could not be parsed for schema validation")],
        )

    errors: list[SchemaError] = []
    warnings: list[SchemaWarning] = []

    root_type = schema.get("type")
    if root_type and not _matches_type(data, root_type):
        errors.append(
            SchemaError(
                path="$",
                message="Document root has the wrong type",
                expected_type=str(root_type),
                actual_type=_type_name(data),
                constraint="type",
            )
        )
        return SchemaValidation(valid=False, errors=errors, coverage=0.0)

    if not isinstance(data, dict):
        return SchemaValidation(
            warnings=[SchemaWarning(path="$", message="Document root is not a mapping; only the root type was checked")]
        )

    properties = schema.get("properties") or {}
    required = schema.get("required") or []

    missing = [name for name in required if name not in data]
    for name in missing:
        errors.append(
            SchemaError(
                path=f"$.{name}",
                message=f"Missing required field '{name}'",
                constraint="required",
            )
        )

    for name, prop in properties.items():
        if name not in data or not isinstance(prop, dict) or "type" not in prop:
            continue
        if not _matches_type(data[name], prop["type"]):
            errors.append(
                SchemaError(
                    path=f"$.{name}",
                    message=f"Field '{name}' has the wrong type",
                    expected_type=str(prop["type"]),
                    actual_type=_type_name(data[name]),
                    constraint="type",
                )
            )

    extra = [str(key) for key in data if key not in properties] if properties else []
    if extra and schema.get("additionalProperties") is False:
        for name in extra:
            errors.append(
                SchemaError(
                    path=f"$.{name}",
                    message=f"Field '{name}' is not allowed by the schema",
                    constraint="additionalProperties",
                )
            )
    else:
        for name in extra:
            warnings.append(
                SchemaWarning(
                    path=f"$.{name}",
                    message=f"Field '{name}' is not declared in the schema",
                    suggestion="Declare the field or remove it",
                )
            )

    coverage = 100.0
    if properties:
        present = sum(1 for name in properties if name in data)
        coverage = round(present * 100.0 / len(properties), 1)

    return SchemaValidation(
        valid=not errors,
        errors=errors,
        warnings=warnings,
        coverage=coverage,
        missing_fields=missing,
        extra_fields=extra,
    )
