"""Identifier helpers shared by the snippet builders."""

from __future__ import annotations

import keyword
import re
from typing import AbstractSet

from ..ir import Lexicon
from ..nsid import titlecase

_INVALID = re.compile(r"[^0-9a-zA-Z_]")
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")

# Names the generated modules import or evaluate in default expressions.
_SHADOWED = frozenset({"Changeset", "Record", "TID", "dataclass", "field", "list"})

# Members every generated record class declares or inherits from ``Record``.
RECORD_MEMBERS = frozenset({"rkey", "changeset", "from_params", "to_dict"})


def python_name(name: str, reserved: AbstractSet[str] = frozenset()) -> str:
    """
    Make a JSON property name usable as a Python attribute.

    Keywords, names the generated modules rely on and anything in
    ``reserved`` get a trailing underscore.
    """
    cleaned = _INVALID.sub("_", name) or "_"
    if cleaned[0].isdigit():
        cleaned = f"_{cleaned}"
    if keyword.iskeyword(cleaned) or cleaned in _SHADOWED or cleaned in reserved:
        cleaned = f"{cleaned}_"
    return cleaned


def class_name(key: str) -> str:
    return python_name(titlecase(key))


def snake_case(name: str) -> str:
    return python_name(_CAMEL_BOUNDARY.sub("_", name).lower())


def safe_key(lexicon: Lexicon, key: str) -> str:
    """``main`` stands for the document itself, so it takes the NSID's last segment."""
    return lexicon.id if key == "main" else key


def deref_main(lexicon: Lexicon, key: str) -> str:
    """Dotted type name that references to this definition resolve to."""
    return f"{lexicon.nsid_title}.{titlecase(key)}"


def type_tag(lexicon: Lexicon, key: str) -> str:
    """The ``$type`` value for a definition."""
    return lexicon.nsid if key == "main" else f"{lexicon.nsid}#{key}"
