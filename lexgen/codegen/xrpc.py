"""Snippet builders for ``query`` and ``procedure`` call wrappers."""

from __future__ import annotations

import json
from typing import List

from ..ir import Lexicon, Operation, ProcedureDef
from .names import safe_key, snake_case


def xrpc_target(operation: Operation) -> str:
    """XRPC method name: the NSID itself for ``main``, ``nsid.key`` otherwise."""
    if operation.key == "main":
        return operation.nsid
    return f"{operation.nsid}.{operation.key}"


def function_name(lexicon: Lexicon, operation: Operation) -> str:
    return snake_case(safe_key(lexicon, operation.key))


def method(operation: Operation) -> str:
    return "procedure" if isinstance(operation, ProcedureDef) else "query"


def param_names(operation: Operation) -> List[str]:
    return [json.dumps(param.name) for param in operation.input_fields]


def required_param_names(operation: Operation) -> List[str]:
    return [json.dumps(param.name) for param in operation.input_fields if param.required]


def params_spec(operation: Operation) -> str:
    """
    Structural type for the parameter bag.

    An inline ``TypedDict`` listing every input, or a plain
    ``dict[str, Any]`` when the operation takes none.
    """
    if not operation.input_fields:
        return "dict[str, Any]"
    members = ",\n        ".join(
        f"{json.dumps(param.name)}: {param.native_type}" for param in operation.input_fields
    )
    return "TypedDict[{\n        " + members + ",\n    }]"
