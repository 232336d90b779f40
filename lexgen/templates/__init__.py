"""Jinja2 templates and the engine that renders them."""

from .engine import (
    CodeTemplateEngine,
    TemplateCompilationError,
    TemplateError,
    TemplateRenderError,
    get_default_engine,
)

__all__ = [
    "CodeTemplateEngine",
    "TemplateCompilationError",
    "TemplateError",
    "TemplateRenderError",
    "get_default_engine",
]
