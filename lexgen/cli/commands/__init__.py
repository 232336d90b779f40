"""Subcommand handlers for the lexgen CLI."""

from .generate import cmd_generate
from .tid import cmd_tid

__all__ = ["cmd_generate", "cmd_tid"]
