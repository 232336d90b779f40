"""
Error handling for the lexgen CLI.

Command handlers raise :class:`CLIError` (or let a
:class:`~lexgen.errors.LexgenError` escape); :func:`handle_cli_exception`
formats it for the terminal and exits with a non-zero status.

Environment switches:

- ``LEXGEN_VERBOSE=1`` adds error context and a traceback excerpt.
- ``LEXGEN_RERAISE=1`` re-raises so a debugger sees the original error.
- ``LEXGEN_DEBUG=1`` does both.
"""

import os
import sys
import traceback
from typing import Any, Dict, Optional

from lexgen.errors import LexgenError

_TRACE_LIMIT = 4000
_TRUTHY = frozenset({"1", "true", "yes", "on"})


class CLIError(Exception):
    """
    A failure the CLI reports to the user.

    Attributes:
        message: What went wrong
        code: Stable identifier printed next to the message
        hint: How to fix it, when there is an obvious fix
        context: Extra values printed in verbose mode
    """

    default_code = "CLI_ERROR"

    def __init__(
        self,
        message: str,
        *,
        code: Optional[str] = None,
        hint: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.hint = hint
        self.context = dict(context or {})

    def __str__(self) -> str:
        return self.message


class CLIValidationError(CLIError):
    """Invalid command arguments or options."""

    default_code = "CLI_VALIDATION_ERROR"


class CLIGenerationError(CLIError):
    """Generation finished but its result is not acceptable, e.g. dangling references."""

    default_code = "CLI_GENERATION_ERROR"


class CLIFileError(CLIError):
    """An input could not be read or an output could not be written."""

    default_code = "CLI_FILE_ERROR"


def format_cli_error(
    exc: BaseException,
    *,
    verbose: bool = False,
    include_traceback: bool = False,
) -> str:
    """
    Render an exception as the text printed on stderr.

    Examples:
        >>> print(format_cli_error(CLIValidationError("Bad jobs", hint="Use 1 or more")))
        Error [CLI_VALIDATION_ERROR]: Bad jobs
        Hint: Use 1 or more
    """
    if isinstance(exc, CLIError):
        lines = [f"Error [{exc.code}]: {exc.message}"]
        if exc.hint:
            lines.append(f"Hint: {exc.hint}")
        if verbose and exc.context:
            lines.append("\nContext:")
            lines.extend(f"  {key}: {value}" for key, value in exc.context.items())
    elif isinstance(exc, LexgenError):
        lines = [f"Error: {exc.format()}"]
    else:
        lines = [f"Error: {type(exc).__name__}: {exc}"]

    if include_traceback:
        lines.extend(["\nTraceback:", format_traceback_excerpt()])
    return "\n".join(lines)


def format_traceback_excerpt() -> str:
    trace = traceback.format_exc().strip()
    if len(trace) > _TRACE_LIMIT:
        trace = trace[: _TRACE_LIMIT - 3] + "..."
    return trace


def _env_enabled(*names: str) -> bool:
    return any((os.getenv(name) or "").strip().lower() in _TRUTHY for name in names)


def cli_verbose_enabled(verbose_flag: bool = False) -> bool:
    return verbose_flag or _env_enabled("LEXGEN_VERBOSE", "LEXGEN_DEBUG")


def cli_reraise_enabled() -> bool:
    return _env_enabled("LEXGEN_RERAISE", "LEXGEN_DEBUG")


def handle_cli_exception(
    exc: BaseException,
    *,
    verbose: bool = False,
    exit_code: int = 1,
) -> None:
    """Print ``exc`` to stderr and exit with ``exit_code``; never returns."""
    if cli_reraise_enabled():
        raise exc
    verbose = cli_verbose_enabled(verbose)
    print(format_cli_error(exc, verbose=verbose, include_traceback=verbose), file=sys.stderr)
    sys.exit(exit_code)


__all__ = [
    "CLIError",
    "CLIFileError",
    "CLIGenerationError",
    "CLIValidationError",
    "cli_reraise_enabled",
    "cli_verbose_enabled",
    "format_cli_error",
    "handle_cli_exception",
]
