"""
Snippet builders for persisted ``record`` definitions.

The generated ``schema.py`` validates input through a chain of
``Changeset`` calls::

    Changeset(record, params, cls.__storage__)
        .cast(["text", "createdAt"])
        .validate_required(["text", "createdAt"])
        .validate_length("text", max=3000, count="bytes")

``operations`` computes that chain, one call per entry, in order.
"""

from __future__ import annotations

import json
from typing import Any, List, Mapping, Optional

from ..ir import FieldSpec, SchemaDef
from ..types import STORAGE_BYTES, STORAGE_INTEGER, STORAGE_STRING, is_array_storage


def _names(fields) -> str:
    return "[" + ", ".join(json.dumps(field.name) for field in fields) + "]"


def _bounds(
    constraints: Mapping[str, Any],
    low_key: str,
    high_key: str,
    low_arg: str,
    high_arg: str,
) -> Optional[List[str]]:
    args = []
    if low_key in constraints:
        args.append(f"{low_arg}={constraints[low_key]!r}")
    if high_key in constraints:
        args.append(f"{high_arg}={constraints[high_key]!r}")
    return args or None


def constraint(field: FieldSpec) -> Optional[str]:
    """
    The range or length check for one field, chosen by its storage tag.

    Returns ``None`` when the field carries no recognized min/max pair.
    """
    name = json.dumps(field.name)
    storage = field.storage_type
    constraints = field.constraints

    if storage == STORAGE_INTEGER:
        args = _bounds(constraints, "minimum", "maximum", "ge", "le")
        return f"validate_number({name}, {', '.join(args)})" if args else None

    if storage == STORAGE_BYTES or is_array_storage(storage):
        args = _bounds(constraints, "minLength", "maxLength", "min", "max")
        return f"validate_length({name}, {', '.join(args)})" if args else None

    if storage == STORAGE_STRING:
        args = _bounds(constraints, "minLength", "maxLength", "min", "max")
        if args:
            return f"validate_length({name}, {', '.join(args)}, count=\"bytes\")"
        args = _bounds(constraints, "minGraphemes", "maxGraphemes", "min", "max")
        if args:
            return f"validate_length({name}, {', '.join(args)}, count=\"graphemes\")"

    return None


def operations(schema: SchemaDef) -> List[str]:
    """
    Ordered validation pipeline for a record.

    Args:
        schema: Compiled record definition

    Returns:
        Call snippets without the leading dot: one ``cast`` when there are
        fields, one ``validate_required`` when some are required, then one
        check per constrained field
    """
    steps: List[str] = []
    if schema.fields:
        steps.append(f"cast({_names(schema.fields)})")
    required = schema.required_fields
    if required:
        steps.append(f"validate_required({_names(required)})")
    for field in schema.fields:
        if not field.constraints:
            continue
        step = constraint(field)
        if step is not None:
            steps.append(step)
    return steps


def storage_map(schema: SchemaDef) -> str:
    """Literal ``{"json name": "storage tag"}`` dict for the generated class."""
    if not schema.fields:
        return "{}"
    entries = ",\n        ".join(
        f"{json.dumps(field.name)}: {json.dumps(field.storage_type)}" for field in schema.fields
    )
    return "{\n        " + entries + ",\n    }"
