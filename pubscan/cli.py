"""
CLI -- Public surface inventory of a Rust source tree

Walks a directory, parses every Rust file, and lists the declarations
each file exposes publicly.

    pubscan --path src --query fn,struct
    pubscan --path . --format json --jobs 4

Files that fail to parse are reported on stderr and skipped; the scan
still completes. An unreadable directory aborts the scan.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .config import ConfigManager, apply_overrides
from .core.errors import DirectoryReadError, FileReadError
from .core.parsing import create_default_registry
from .output import VALID_FORMATS, render
from .presentation.symbols import get_symbols, safe_print
from .services.scanner import Scanner


EXIT_OK = 0
EXIT_FAILURE = 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pubscan",
        description="pubscan -- List the public declarations of Rust source files",
        epilog="Query tokens are kind prefixes: fn, struct, enum, trait, mod, const, "
               "static, type, union, extern, foreign, use, macro, opaque, or 'all'."
    )

    parser.add_argument(
        '--path', '-p',
        required=True,
        help='Directory (or single file) to scan'
    )
    parser.add_argument(
        '--query', '-q',
        default=None,
        help="Comma-separated kind prefixes (default: display.query or 'all')"
    )
    parser.add_argument(
        '--format', '-f',
        choices=VALID_FORMATS,
        default=None,
        help='Output format (default: display.format or text)'
    )
    parser.add_argument(
        '--symbols',
        choices=('auto', 'unicode', 'ascii'),
        default=None,
        help='Symbol set for output (default: auto-detect)'
    )
    parser.add_argument(
        '--jobs', '-j',
        type=int,
        default=None,
        help='Worker processes used for parsing (default: 1)'
    )
    parser.add_argument(
        '--exclude', '-x',
        action='append',
        default=None,
        metavar='GLOB',
        help="Extra exclude glob, repeatable (e.g. '**/generated/*')"
    )
    parser.add_argument(
        '--strict-reads',
        action='store_true',
        help='Abort when a file cannot be read instead of skipping it'
    )
    parser.add_argument(
        '--full',
        action='store_true',
        help="Don't truncate long type text (implied when stdout is not a terminal)"
    )
    parser.add_argument(
        '--summary',
        action='store_true',
        help='Append file and declaration counts to text output'
    )
    parser.add_argument(
        '--show-config',
        action='store_true',
        help='Print the effective configuration and exit'
    )
    parser.add_argument(
        '--version', '-V',
        action='version',
        version=f'pubscan {__version__}'
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the pubscan CLI.

    Returns:
        Process exit code (0 when the scan completed, 1 otherwise)
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    root = Path(args.path)
    if not root.exists():
        safe_print(f"Error: path not found: {root}", file=sys.stderr)
        return EXIT_FAILURE

    manager = ConfigManager(root if root.is_dir() else root.parent)
    if args.show_config:
        safe_print(manager.display())
        return EXIT_OK

    config = apply_overrides(
        manager.load(),
        jobs=args.jobs,
        strict_reads=args.strict_reads,
        exclude=args.exclude,
        symbols=args.symbols,
        format=args.format,
        query=args.query,
    )
    error = config.validate()
    if error:
        safe_print(f"Error: {error}", file=sys.stderr)
        return EXIT_FAILURE

    symbols = get_symbols(config.display.symbols)
    scanner = Scanner(
        registry=create_default_registry(config.scan.extensions),
        exclude=config.scan.exclude,
        jobs=config.scan.jobs,
        strict_reads=config.scan.strict_reads,
    )

    try:
        result = scanner.scan(root)
    except (DirectoryReadError, FileReadError) as e:
        safe_print(f"{symbols.check_fail} {e}", file=sys.stderr)
        return EXIT_FAILURE

    for diagnostic in result.diagnostics:
        safe_print(f"{symbols.check_warn} {diagnostic.format()}", file=sys.stderr)

    as_json = config.display.format == "json"
    output = render(
        result.inventory,
        query=config.display.query,
        format=config.display.format,
        symbols=symbols,
        full=args.full or not sys.stdout.isatty(),
        summary=result.to_dict() if (as_json or args.summary) else None,
    )
    safe_print(output)
    return EXIT_OK


if __name__ == '__main__':
    sys.exit(main())
