"""Snippet builders used by the code templates."""

from . import names, schema, structs, xrpc

__all__ = ["names", "schema", "structs", "xrpc"]
