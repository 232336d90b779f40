"""
Intermediate Representation (IR) for Lexicon code generation.

The loader produces these value objects once per document and the emitter
consumes them read-only.

Example:
    A compiled record definition:
    ```python
    SchemaDef(
        key="main",
        primary_key=PrimaryKeyKind.OPAQUE_SORTABLE_ID,
        fields=(
            FieldSpec(
                name="text",
                native_type="str",
                storage_type="string",
                required=True,
                constraints={"maxLength": 3000},
            ),
        ),
    )
    ```
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional, Tuple, Union

# Default for fields without an explicit or type-derived default.
NO_DEFAULT = "None"


class PrimaryKeyKind(str, Enum):
    """Primary key strategy for persisted records."""

    SEQUENTIAL_INTEGER = "sequential-integer"
    OPAQUE_SORTABLE_ID = "opaque-sortable-id"


@dataclass(frozen=True)
class FieldSpec:
    """A resolved field inside any definition."""

    name: str
    native_type: str
    storage_type: str
    required: bool = False
    constraints: Mapping[str, Any] = field(default_factory=dict)
    default: str = NO_DEFAULT

    def __post_init__(self) -> None:
        object.__setattr__(self, "constraints", MappingProxyType(dict(self.constraints)))

    @property
    def has_default(self) -> bool:
        return self.default != NO_DEFAULT


@dataclass(frozen=True)
class StructDef:
    """Plain object shape with no persistence semantics."""

    key: str
    fields: Tuple[FieldSpec, ...] = ()
    description: Optional[str] = None


@dataclass(frozen=True)
class SchemaDef:
    """A persisted record."""

    key: str
    primary_key: PrimaryKeyKind
    fields: Tuple[FieldSpec, ...] = ()
    description: Optional[str] = None

    @property
    def required_fields(self) -> Tuple[FieldSpec, ...]:
        return tuple(f for f in self.fields if f.required)


@dataclass(frozen=True)
class QueryDef:
    """Read-only XRPC operation; inputs come from ``parameters``."""

    key: str
    nsid: str
    input_fields: Tuple[FieldSpec, ...] = ()
    output_type: str = "Any"
    description: Optional[str] = None


@dataclass(frozen=True)
class ProcedureDef:
    """Mutating XRPC operation; inputs come from ``input.schema``."""

    key: str
    nsid: str
    input_fields: Tuple[FieldSpec, ...] = ()
    output_type: str = "Any"
    description: Optional[str] = None


CompiledDefinition = Union[StructDef, SchemaDef, QueryDef, ProcedureDef]
Operation = Union[QueryDef, ProcedureDef]


@dataclass(frozen=True)
class Definitions:
    """Classified definitions of one document."""

    structs: Tuple[StructDef, ...] = ()
    schema: Optional[SchemaDef] = None
    query: Optional[QueryDef] = None
    procedure: Optional[ProcedureDef] = None

    def is_empty(self) -> bool:
        return not self.structs and self.schema is None and not self.operations

    @property
    def operations(self) -> Tuple[Operation, ...]:
        return tuple(op for op in (self.query, self.procedure) if op is not None)

    def __iter__(self):
        yield from self.structs
        if self.schema is not None:
            yield self.schema
        yield from self.operations


@dataclass(frozen=True)
class Lexicon:
    """One compiled Lexicon document."""

    nsid: str
    namespace: str
    id: str
    nsid_title: str
    namespace_title: str
    id_title: str
    definitions: Definitions = field(default_factory=Definitions)
    references: Tuple[str, ...] = ()
    def_names: Tuple[str, ...] = ()

    @property
    def path_segments(self) -> Tuple[str, ...]:
        return tuple(self.nsid.split("."))


__all__ = [
    "NO_DEFAULT",
    "CompiledDefinition",
    "Definitions",
    "FieldSpec",
    "Lexicon",
    "Operation",
    "PrimaryKeyKind",
    "ProcedureDef",
    "QueryDef",
    "SchemaDef",
    "StructDef",
]
