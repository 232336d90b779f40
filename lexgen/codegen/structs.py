"""Snippet builders for dataclass-based definitions (``structs.py`` and ``schema.py``)."""

from __future__ import annotations

import json
from typing import AbstractSet, Iterable, List

from ..ir import FieldSpec
from .names import python_name


def annotation(field: FieldSpec) -> str:
    """Annotation for a generated attribute; optional when it defaults to ``None``."""
    if field.has_default or field.native_type in ("Any", "None"):
        return field.native_type
    return f"{field.native_type} | None"


def _field_call(default: str, json_key: str | None) -> str:
    args = [default]
    if json_key is not None:
        args.append(f"metadata={{\"json_key\": {json.dumps(json_key)}}}")
    return f"field({', '.join(args)})"


def attribute(field: FieldSpec, reserved: AbstractSet[str] = frozenset()) -> str:
    """
    One dataclass attribute line, e.g. ``langs: list[str] = field(default_factory=list)``.

    Mutable literal defaults become ``default_factory`` lambdas, and JSON
    names that are not valid identifiers keep their original spelling in the
    field metadata. Names in ``reserved`` are renamed the same way.
    """
    name = python_name(field.name, reserved)
    json_key = field.name if name != field.name else None
    default = field.default
    if default == "[]":
        value = _field_call("default_factory=list", json_key)
    elif default[:1] in ("[", "{"):
        value = _field_call(f"default_factory=lambda: {default}", json_key)
    elif json_key is not None:
        value = _field_call(f"default={default}", json_key)
    else:
        value = default
    return f"{name}: {annotation(field)} = {value}"


def attributes(
    fields: Iterable[FieldSpec], reserved: AbstractSet[str] = frozenset()
) -> List[str]:
    return [attribute(field, reserved) for field in fields]
