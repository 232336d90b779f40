"""
Type resolution for Lexicon field definitions.

Every field node is mapped twice: to a Python annotation used in generated
classes (``to_native``) and to a coarse storage tag consumed by the
generated runtime's ``Changeset.cast`` (``to_storage``). Both functions are
total; unknown or incomplete nodes fall back to the open ``Any``/``map``
marker.
"""

from __future__ import annotations

import json
import logging
from typing import Any, List, Mapping

from .ir import NO_DEFAULT
from .nsid import split_ref, title_nsid, titlecase

logger = logging.getLogger(__name__)

# Lexicon objects nest a handful of levels deep in practice.
MAX_DEPTH = 32

ANY_TYPE = "Any"
MAP_TYPE = "dict[str, Any]"

STORAGE_MAP = "map"
STORAGE_DATETIME = "utc_datetime"
STORAGE_STRING = "string"
STORAGE_NULL = "null"
STORAGE_INTEGER = "integer"
STORAGE_BOOLEAN = "boolean"
STORAGE_BYTES = "bytes"


def array_storage(inner: str) -> str:
    return f"array[{inner}]"


def is_array_storage(tag: str) -> bool:
    return tag.startswith("array[")


def _type_of(node: Any) -> Any:
    if isinstance(node, Mapping):
        return node.get("type")
    return None


def _too_deep(depth: int) -> bool:
    if depth > MAX_DEPTH:
        logger.warning("Type nesting exceeds %d levels; falling back to %s", MAX_DEPTH, ANY_TYPE)
        return True
    return False


def to_storage(node: Any, _depth: int = 0) -> str:
    """Convert a field definition to a storage tag."""
    if _too_deep(_depth):
        return STORAGE_MAP
    kind = _type_of(node)
    if kind == "string":
        return STORAGE_DATETIME if node.get("format") == "datetime" else STORAGE_STRING
    if kind == "cid-link":
        return STORAGE_STRING
    if kind == "null":
        return STORAGE_NULL
    if kind == "integer":
        return STORAGE_INTEGER
    if kind == "boolean":
        return STORAGE_BOOLEAN
    if kind == "bytes":
        return STORAGE_BYTES
    if kind == "array":
        return array_storage(to_storage(node.get("items"), _depth + 1))
    # ref, union, blob, unknown, object and anything unrecognized
    return STORAGE_MAP


def to_native(nsid: str, node: Any, _depth: int = 0) -> str:
    """Convert a field definition to a Python type annotation."""
    if _too_deep(_depth):
        return ANY_TYPE
    kind = _type_of(node)
    if kind == "ref":
        ref = node.get("ref")
        return ref_to_type(nsid, ref) if isinstance(ref, str) and ref else ANY_TYPE
    if kind == "string":
        return "datetime" if node.get("format") == "datetime" else "str"
    if kind == "cid-link":
        return "str"
    if kind == "null":
        return "None"
    if kind == "integer":
        return "int"
    if kind == "boolean":
        return "bool"
    if kind == "bytes":
        return "bytes"
    if kind == "blob":
        return MAP_TYPE
    if kind == "array":
        items = node.get("items")
        inner = to_native(nsid, items, _depth + 1) if items is not None else ANY_TYPE
        return f"list[{inner}]"
    if kind == "object":
        properties = node.get("properties")
        if not isinstance(properties, Mapping) or not properties:
            return MAP_TYPE
        members = ", ".join(
            f"{json.dumps(name)}: {to_native(nsid, prop, _depth + 1)}"
            for name, prop in properties.items()
        )
        return f"TypedDict[{{{members}}}]"
    # union, unknown and anything unrecognized
    return ANY_TYPE


def ref_to_type(nsid: str, ref: str) -> str:
    """
    Convert a ``ref`` string to a dotted type name.

    ``#name`` resolves inside ``nsid``; a bare NSID resolves to its ``main``
    definition; ``other.nsid#name`` resolves to ``name`` inside that NSID.
    """
    target, name = split_ref(nsid, ref)
    return f"{title_nsid(target)}.{titlecase(name)}"


def qualify_ref(nsid: str, ref: str) -> str:
    """Return ``ref`` as a fully qualified ``nsid#name`` string."""
    target, name = split_ref(nsid, ref)
    return f"{target}#{name}"


def collect_refs(nsid: str, node: Any, _depth: int = 0) -> List[str]:
    """Collect every reference below ``node``, fully qualified, in document order."""
    if _depth > MAX_DEPTH:
        return []
    found: List[str] = []
    if isinstance(node, Mapping):
        kind = node.get("type")
        skip = None
        if kind == "ref" and isinstance(node.get("ref"), str):
            found.append(qualify_ref(nsid, node["ref"]))
            skip = "ref"
        elif kind == "union" and isinstance(node.get("refs"), list):
            found.extend(qualify_ref(nsid, ref) for ref in node["refs"] if isinstance(ref, str))
            skip = "refs"
        for key, value in node.items():
            if key != skip:
                found.extend(collect_refs(nsid, value, _depth + 1))
    elif isinstance(node, list):
        for item in node:
            found.extend(collect_refs(nsid, item, _depth + 1))
    return found


def default_value(node: Any) -> str:
    """
    Return the default value for a field as Python source text.

    An explicit ``default`` wins (quoted for strings). Otherwise the field
    type decides: ``0`` for integers, ``False`` for booleans, ``[]`` for
    arrays and ``None`` for everything else.
    """
    if not isinstance(node, Mapping):
        return NO_DEFAULT
    kind = node.get("type")
    if "default" in node:
        default = node["default"]
        if kind == "string":
            return json.dumps(str(default), ensure_ascii=False)
        return repr(default)
    if kind == "integer":
        return "0"
    if kind == "boolean":
        return "False"
    if kind == "array":
        return "[]"
    return NO_DEFAULT


__all__ = [
    "ANY_TYPE",
    "MAP_TYPE",
    "MAX_DEPTH",
    "array_storage",
    "collect_refs",
    "default_value",
    "is_array_storage",
    "qualify_ref",
    "ref_to_type",
    "to_native",
    "to_storage",
]
