"""JSON Schema for project files and validation helpers."""

from __future__ import annotations

from typing import Any, Dict, List

import jsonschema

__all__ = ["PROJECT_SCHEMA", "validate_project_dict"]

# Integers may also be written as strings with a base prefix ("0x1000").
_INT_PATTERN = (
    r"^\s*(0[xX][0-9a-fA-F]+|0[oO][0-7]+|0[bB][01]+|0|[1-9][0-9]*)\s*$"
)
_INT = {
    "anyOf": [
        {"type": "integer", "minimum": 0},
        {"type": "string", "pattern": _INT_PATTERN},
    ]
}

_RESOURCE_PROPS: Dict[str, Any] = {
    "file": {"type": "string", "minLength": 1},
    "offset": _INT,
    "length": _INT,
    "compression": {"type": ["string", "null"]},
    "kosinski_module_size": _INT,
}


def _section(extra: Dict[str, Any] | None = None, required=("file",)):
    props = dict(_RESOURCE_PROPS)
    props.update(extra or {})
    return {
        "type": "object",
        "properties": props,
        "required": list(required),
        "additionalProperties": False,
    }


PROJECT_SCHEMA: Dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "PlaneRes project",
    "type": "object",
    "properties": {
        "version": {"type": "integer", "const": 1},
        "work_dir": {"type": "string", "minLength": 1},
        "palette": _section(),
        "art": _section(),
        "map": _section(
            {
                "x_size": _INT,
                "y_size": _INT,
                "save_file": {"type": ["string", "null"]},
            },
            required=("file", "x_size", "y_size"),
        ),
    },
    "anyOf": [
        {"required": ["palette"]},
        {"required": ["art"]},
        {"required": ["map"]},
    ],
    "additionalProperties": False,
}


def validate_project_dict(data: Dict[str, Any]) -> List[str]:
    """Return one message per schema violation; empty means valid."""
    validator = jsonschema.Draft202012Validator(PROJECT_SCHEMA)
    errors = []
    for err in sorted(validator.iter_errors(data), key=lambda e: list(e.path)):
        where = ".".join(str(p) for p in err.path) or "<root>"
        errors.append(f"{where}: {err.message}")
    return errors
