"""
Generate command implementation.

Turns Lexicon JSON files into Python modules under the output directory.
"""

import argparse
import shutil
from pathlib import Path

from lexgen.config import apply_cli_overrides, load_config
from lexgen.generator import GenerationReport, build_code, read_lexicons
from lexgen.integrity import check_references

from ..errors import CLIFileError, CLIGenerationError, CLIValidationError, handle_cli_exception
from ..output import print_info, print_report


def cmd_generate(args: argparse.Namespace) -> None:
    """
    Handle the 'generate' subcommand.

    This command:
    1. Merges ``lexgen.toml``/``.lexgenrc``/``[tool.lexgen]`` settings with flags
    2. Optionally deletes the previous output directory
    3. Generates code for every matching Lexicon
    4. Optionally checks cross-document references

    Raises:
        SystemExit: On invalid flags, I/O errors, or dangling references
            found with ``--check-refs``. Malformed documents are reported
            but do not fail the run.
    """
    try:
        config = load_config(
            Path.cwd(),
            Path(args.config) if getattr(args, "config", None) else None,
        )
        config = apply_cli_overrides(
            config,
            inputs=args.paths,
            output=args.output,
            package=args.package,
            delete=True if args.delete else None,
            jobs=args.jobs,
            check_refs=True if args.check_refs else None,
        )
        if not config.inputs:
            raise CLIValidationError(
                "No Lexicon paths given",
                hint="Pass one or more files or glob patterns, e.g. 'lexicons/**/*.json'.",
            )
        if config.jobs < 1:
            raise CLIValidationError(
                f"--jobs must be at least 1, got {config.jobs}",
                hint="Use a positive integer",
            )

        output = config.output
        if config.delete and output.exists():
            print_info(f"Deleting previous files at {output}...")
            shutil.rmtree(output)

        print_info("Generating source code from lexicons...")
        report = GenerationReport()
        lexicons = []
        try:
            for pattern in config.inputs:
                print_info(f"-> {pattern}")
                lexicons.extend(read_lexicons(pattern, report))
            build_code(
                lexicons,
                output,
                package=config.package,
                jobs=config.jobs,
                report=report,
            )
        except OSError as exc:
            raise CLIFileError(
                f"Could not generate code: {exc}",
                context={"output": str(output)},
            ) from exc

        dangling = check_references(lexicons) if config.check_refs else []

        print_report(report, output, dangling)

        if dangling:
            raise CLIGenerationError(
                f"{len(dangling)} dangling reference(s) found",
                hint="Add the referenced Lexicons to the inputs or drop --check-refs.",
            )
        print_info(f"Done. Generated files can be found in {output}.")
    except Exception as exc:
        handle_cli_exception(exc, verbose=getattr(args, "verbose", False))
