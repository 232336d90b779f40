"""
Lexicon loading and definition compilation.

In the AT Protocol Lexicon format:

- A Lexicon is a JSON document with an ``id`` (its NSID) and a ``defs`` map.
- Each Lexicon has *at most* one primary definition (record, query or
  procedure), conventionally named ``main``.
- References to a ``main`` definition omit the ``#main`` suffix.

``load`` turns one document into an immutable :class:`~lexgen.ir.Lexicon`.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from .errors import MalformedDocumentError
from .ir import (
    CompiledDefinition,
    Definitions,
    FieldSpec,
    Lexicon,
    PrimaryKeyKind,
    ProcedureDef,
    QueryDef,
    SchemaDef,
    StructDef,
)
from .nsid import split_nsid, title_nsid, titlecase
from .types import ANY_TYPE, collect_refs, default_value, to_native, to_storage

logger = logging.getLogger(__name__)

_CONSTRAINT_KEYS: Dict[str, Tuple[str, ...]] = {
    "boolean": ("default", "const"),
    "integer": ("minimum", "maximum", "enum", "default", "const"),
    "string": (
        "format",
        "minLength",
        "maxLength",
        "minGraphemes",
        "maxGraphemes",
        "knownValues",
        "enum",
        "default",
        "const",
    ),
    "bytes": ("minLength", "maxLength"),
    "array": ("minLength", "maxLength", "items"),
    "blob": ("accept", "maxSize"),
    "union": ("refs", "closed"),
}

Document = Union[bytes, bytearray, str, Mapping[str, Any]]


def constraint_keys(json_type: Any) -> Tuple[str, ...]:
    """Constraint keys that apply to a JSON type; empty for all others."""
    return _CONSTRAINT_KEYS.get(json_type, ()) if isinstance(json_type, str) else ()


def build_constraints(field_def: Any) -> Dict[str, Any]:
    if not isinstance(field_def, Mapping):
        return {}
    return {
        key: field_def[key]
        for key in constraint_keys(field_def.get("type"))
        if field_def.get(key) is not None
    }


def build_fields(nsid: str, node: Any) -> Tuple[FieldSpec, ...]:
    """
    Resolve the ``properties`` of an object-like node into field specs.

    Args:
        nsid: NSID of the enclosing document, used to qualify references
        node: Object node with ``properties`` and optional ``required``

    Returns:
        Fields in document order
    """
    if not isinstance(node, Mapping):
        return ()
    properties = node.get("properties")
    if not isinstance(properties, Mapping):
        return ()
    required = node.get("required")
    required_names = set(required) if isinstance(required, list) else set()
    return tuple(
        FieldSpec(
            name=name,
            native_type=to_native(nsid, field_def),
            storage_type=to_storage(field_def),
            required=name in required_names,
            constraints=build_constraints(field_def),
            default=default_value(field_def),
        )
        for name, field_def in properties.items()
    )


def parse_output(nsid: str, node: Mapping[str, Any]) -> str:
    output = node.get("output")
    if isinstance(output, Mapping) and isinstance(output.get("schema"), Mapping):
        return to_native(nsid, output["schema"])
    return ANY_TYPE


def _description(node: Mapping[str, Any]) -> Optional[str]:
    description = node.get("description")
    return description if isinstance(description, str) else None


def compile_definition(nsid: str, key: str, node: Any) -> Optional[CompiledDefinition]:
    """Classify one ``defs`` entry; unrecognized kinds yield ``None``."""
    if not isinstance(node, Mapping):
        return None
    kind = node.get("type")
    if kind == "object":
        return StructDef(
            key=key,
            fields=build_fields(nsid, node),
            description=_description(node),
        )
    if kind == "record":
        # Only TID keys get the sortable string key; "literal:self", "any"
        # and missing keys fall back to an auto-incrementing integer.
        primary_key = (
            PrimaryKeyKind.OPAQUE_SORTABLE_ID
            if node.get("key") == "tid"
            else PrimaryKeyKind.SEQUENTIAL_INTEGER
        )
        return SchemaDef(
            key=key,
            primary_key=primary_key,
            fields=build_fields(nsid, node.get("record")),
            description=_description(node),
        )
    if kind == "query":
        return QueryDef(
            key=key,
            nsid=nsid,
            input_fields=build_fields(nsid, node.get("parameters")),
            output_type=parse_output(nsid, node),
            description=_description(node),
        )
    if kind == "procedure":
        body = node.get("input")
        schema = body.get("schema") if isinstance(body, Mapping) else None
        return ProcedureDef(
            key=key,
            nsid=nsid,
            input_fields=build_fields(nsid, schema),
            output_type=parse_output(nsid, node),
            description=_description(node),
        )
    return None


def compile_definitions(nsid: str, defs: Mapping[str, Any]) -> Definitions:
    """Compile and classify every entry of a ``defs`` map."""
    structs: List[StructDef] = []
    singles: Dict[str, Any] = {"schema": None, "query": None, "procedure": None}
    for key, node in defs.items():
        compiled = compile_definition(nsid, key, node)
        if compiled is None:
            logger.debug("Skipping unsupported definition %s#%s", nsid, key)
            continue
        if isinstance(compiled, StructDef):
            structs.append(compiled)
            continue
        slot = {SchemaDef: "schema", QueryDef: "query", ProcedureDef: "procedure"}[type(compiled)]
        if singles[slot] is not None:
            logger.warning(
                "%s declares more than one %s definition; keeping %r",
                nsid,
                slot,
                key,
            )
        singles[slot] = compiled
    return Definitions(structs=tuple(structs), **singles)


def _decode(document: Document) -> Any:
    if isinstance(document, (bytes, bytearray)):
        try:
            document = document.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedDocumentError(f"Lexicon is not valid UTF-8: {exc}") from exc
    if isinstance(document, str):
        try:
            return json.loads(document)
        except json.JSONDecodeError as exc:
            raise MalformedDocumentError(f"Lexicon is not valid JSON: {exc}") from exc
    return document


def load(document: Document) -> Lexicon:
    """
    Parse a Lexicon document into a :class:`Lexicon`.

    Accepts raw bytes, JSON text or an already decoded mapping.

    Raises:
        MalformedDocumentError: If the payload is not a JSON object or has
            no usable ``id``
    """
    data = _decode(document)
    if not isinstance(data, Mapping):
        raise MalformedDocumentError("Lexicon must be a JSON object")
    nsid = data.get("id")
    if not isinstance(nsid, str) or not nsid:
        raise MalformedDocumentError(
            "Lexicon has no 'id' field",
            hint="Every Lexicon needs an NSID such as 'app.bsky.feed.post'.",
        )

    namespace, name = split_nsid(nsid)
    namespace_title = title_nsid(namespace) if namespace else ""
    id_title = titlecase(name)

    defs = data.get("defs")
    if not isinstance(defs, Mapping):
        defs = {}

    return Lexicon(
        nsid=nsid,
        namespace=namespace,
        id=name,
        nsid_title=title_nsid(nsid),
        namespace_title=namespace_title,
        id_title=id_title,
        definitions=compile_definitions(nsid, defs),
        references=tuple(collect_refs(nsid, defs)),
        def_names=tuple(defs.keys()),
    )


parse = load


__all__ = [
    "build_constraints",
    "build_fields",
    "compile_definition",
    "compile_definitions",
    "constraint_keys",
    "load",
    "parse",
    "parse_output",
    "split_nsid",
    "title_nsid",
]
