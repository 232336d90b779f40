"""
lexgen CLI entry point.

Generates Python source code from AT Protocol Lexicons. Every non-option
argument to ``generate`` is a path to one or more Lexicon files; glob
patterns such as ``lexicons/**/*.json`` are expanded recursively.
"""

import argparse
import sys
from typing import Optional

from lexgen import __version__
from lexgen.observability import configure_logging

from .commands import cmd_generate, cmd_tid


def _cmd_version(args: argparse.Namespace) -> None:
    print(f"lexgen {__version__}")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        description="Generate Python source code from AT Protocol lexicons",
        prog="lexgen",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Print full tracebacks and detailed CLI errors (or set LEXGEN_VERBOSE=1)'
    )
    parser.add_argument(
        '--log-level',
        choices=['debug', 'info', 'warn', 'error'],
        default=None,
        help='Set logging level (or set LEXGEN_LOG_LEVEL)'
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    generate_parser = subparsers.add_parser(
        'generate',
        help='Generate Python modules from Lexicon JSON files',
    )
    generate_parser.add_argument(
        'paths',
        nargs='*',
        help='Lexicon files or glob patterns (e.g. lexicons/**/*.json)',
    )
    generate_parser.add_argument(
        '--output', '-o', default=None,
        help='Destination folder for the generated files (default: lib/atproto)',
    )
    generate_parser.add_argument(
        '--delete', '-d', action='store_true',
        help='Delete all existing files in the destination folder first',
    )
    generate_parser.add_argument(
        '--package', default=None,
        help='Import name of the generated package (default: output folder name)',
    )
    generate_parser.add_argument(
        '--jobs', '-j', type=int, default=None,
        help='Number of lexicons generated concurrently (default: 1)',
    )
    generate_parser.add_argument(
        '--check-refs', action='store_true',
        help='Fail when a reference points at a Lexicon or definition that was not loaded',
    )
    generate_parser.add_argument(
        '--config', default=None,
        help='Path to a lexgen.toml or .lexgenrc configuration file',
    )
    generate_parser.set_defaults(func=cmd_generate)

    tid_parser = subparsers.add_parser(
        'tid',
        help='Mint a new TID or decode an existing one',
    )
    tid_parser.add_argument(
        '--timestamp', type=int, default=None,
        help='Microseconds since the epoch (default: now)',
    )
    tid_parser.add_argument(
        '--clock-id', type=int, default=None,
        help='Clock identifier; only the low 10 bits are used (default: random)',
    )
    tid_parser.add_argument(
        '--decode', metavar='TID', default=None,
        help='Print the timestamp and clock id of an existing TID',
    )
    tid_parser.set_defaults(func=cmd_tid)

    version_parser = subparsers.add_parser('version', help='Print the lexgen version')
    version_parser.set_defaults(func=_cmd_version)

    return parser


def main(argv: Optional[list] = None) -> None:
    """
    Main CLI entrypoint with subcommand support.

    Args:
        argv: Command-line arguments (None uses sys.argv[1:])

    Examples:
        >>> main(['generate', 'lexicons/**/*.json', '-o', 'lib/atproto'])  # doctest: +SKIP
        >>> main(['tid', '--decode', '3jzfcijpj2z2a'])  # doctest: +SKIP
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    args = parser.parse_args(argv)

    if not getattr(args, 'func', None):
        parser.print_help()
        sys.exit(1)

    configure_logging(args.log_level)
    args.func(args)


__all__ = ["build_parser", "main"]
