"""
Output formatting for CLI operations.

Status lines go to stdout with a one-character prefix; the generation
summary is printed by :func:`print_report`.
"""

from pathlib import Path
from typing import Optional, Sequence

from lexgen.generator import GenerationReport
from lexgen.integrity import DanglingReference


def print_success(message: str) -> None:
    """
    Print success message with checkmark prefix.

    Examples:
        >>> print_success("Generated 3 files")
        ✓ Generated 3 files
    """
    print(f"✓ {message}")


def print_error(message: str) -> None:
    """
    Print error message with cross prefix.

    Examples:
        >>> print_error("Generation failed")
        ✗ Generation failed
    """
    print(f"✗ {message}")


def print_warning(message: str) -> None:
    """
    Print warning message with warning prefix.

    Examples:
        >>> print_warning("No lexicons matched")
        ⚠ No lexicons matched
    """
    print(f"⚠ {message}")


def print_info(message: str) -> None:
    """
    Print informational message with info prefix.

    Examples:
        >>> print_info("Generating source code from lexicons...")
        ℹ Generating source code from lexicons...
    """
    print(f"ℹ {message}")


def print_report(
    report: GenerationReport,
    output: Path,
    dangling: Optional[Sequence[DanglingReference]] = None,
) -> None:
    """Summarize a generation run: skipped and failed documents, then totals."""
    for nsid in report.skipped:
        print_warning(f"{nsid}: no recognized definitions, nothing generated")
    for path, message in report.failed:
        print_error(f"{path}: {message}")
    for reference in dangling or ():
        print_warning(f"Dangling reference {reference.format()}")
    if report.written:
        print_success(f"Generated {len(report.written)} files in {output}")
    else:
        print_warning(f"No files generated in {output}")
