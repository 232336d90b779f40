"""
Jinja2 template engine for generated Python sources.

Templates live next to this module (``*.py.j2``) and are addressed by their
file name relative to this directory, e.g. ``structs.py.j2`` or
``common/tid.py.j2``. Rendering is strict: an undefined binding is an error,
never an empty string.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Mapping, Optional

from jinja2 import (
    Environment,
    PackageLoader,
    StrictUndefined,
    TemplateNotFound,
    TemplateSyntaxError,
    UndefinedError,
)

from ..codegen import names, schema, structs, xrpc


class TemplateError(Exception):
    """Base exception for template engine errors."""

    def __init__(
        self,
        message: str,
        *,
        template_name: Optional[str] = None,
        line_number: Optional[int] = None,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.template_name = template_name
        self.line_number = line_number
        self.original_error = original_error


class TemplateCompilationError(TemplateError):
    """Raised when a template cannot be found or parsed."""


class TemplateRenderError(TemplateError):
    """Raised when rendering a template fails."""


def _filter_docstring(value: Any) -> str:
    """Make text safe to place inside a triple-quoted docstring."""
    text = "" if value is None else str(value).strip()
    text = text.replace("\\", "\\\\").replace('"""', '\\"\\"\\"')
    if text.endswith('"'):
        body = text[:-1]
        # An odd run of backslashes means the quote is already escaped.
        if (len(body) - len(body.rstrip("\\"))) % 2 == 0:
            text = body + '\\"'
    return text


def _filter_pystr(value: Any) -> str:
    """Render a value as a double-quoted Python string literal."""
    return json.dumps(str(value), ensure_ascii=False)


class CodeTemplateEngine:
    """
    Renders generated source files from packaged Jinja2 templates.

    The snippet builder modules (``names``, ``schema``, ``structs``,
    ``xrpc``) are exposed as globals so templates can call them directly.
    """

    def __init__(
        self,
        *,
        package: str = "lexgen",
        directory: str = "templates",
        custom_filters: Optional[Dict[str, Any]] = None,
    ):
        self.env = Environment(
            loader=PackageLoader(package, directory),
            autoescape=False,  # We're generating code, not HTML
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self.env.filters["docstring"] = _filter_docstring
        self.env.filters["pystr"] = _filter_pystr
        if custom_filters:
            for name, func in custom_filters.items():
                self.env.filters[name] = func
        self.env.globals.update(
            {
                "names": names,
                "schema": schema,
                "structs": structs,
                "xrpc": xrpc,
            }
        )

    def render(self, template_id: str, bindings: Mapping[str, Any]) -> str:
        """
        Render a template with the given bindings.

        Args:
            template_id: Template file name relative to the template directory
            bindings: Variables made available to the template

        Returns:
            Rendered source text

        Raises:
            TemplateCompilationError: If the template is missing or invalid
            TemplateRenderError: If rendering fails
        """
        try:
            template = self.env.get_template(template_id)
        except TemplateNotFound as e:
            raise TemplateCompilationError(
                f"Template not found: {template_id}",
                template_name=template_id,
                original_error=e,
            ) from e
        except TemplateSyntaxError as e:
            raise TemplateCompilationError(
                f"Template syntax error: {e.message}",
                template_name=template_id,
                line_number=e.lineno,
                original_error=e,
            ) from e

        try:
            return template.render(**bindings)
        except UndefinedError as e:
            raise TemplateRenderError(
                f"Undefined variable in template: {e}",
                template_name=template_id,
                original_error=e,
            ) from e


# Global singleton instance
_default_engine: Optional[CodeTemplateEngine] = None


def get_default_engine() -> CodeTemplateEngine:
    """Get or create the default global template engine instance."""
    global _default_engine
    if _default_engine is None:
        _default_engine = CodeTemplateEngine()
    return _default_engine
