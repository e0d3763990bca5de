"""
Structprint CLI Tools

Pretty print a JSON document from a file or stdin:

    structprint data.json --width 80
    curl -s https://example.org/api | python -m structprint --skip-none
"""

# Standard library -----------------------------------------------------------------------------------------------------
import argparse
import json
import sys
from typing import Sequence

# Local ----------------------------------------------------------------------------------------------------------------
from .options import PrintOptions, get_options
from .printer import PrettyPrinter


# Methods --------------------------------------------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="structprint", description="Pretty print a JSON document.")
    parser.add_argument("file", nargs="?", default="-", help="JSON file to read, '-' for stdin (default).")
    parser.add_argument("--width", type=int, default=None, help="Column wrap width.")
    parser.add_argument("--indent", type=int, default=None, help="Spaces per indent level.")
    parser.add_argument("--max-items", type=int, default=None, help="Max items shown per collection.")
    parser.add_argument("--no-rails", action="store_true", help="Do not draw | continuation rails.")
    parser.add_argument("--one-per-line", action="store_true", help="Never pack several items on one line.")
    parser.add_argument("--skip-none", action="store_true", help="Skip record fields set to null.")
    return parser


def cli_options(args: argparse.Namespace, base: PrintOptions | None = None) -> PrintOptions:
    """Merge parsed command line arguments onto base options (module default if None)."""
    overrides = {}
    if args.width is not None:
        overrides["width"] = args.width
    if args.indent is not None:
        overrides["indent"] = " " * args.indent
    if args.max_items is not None:
        overrides["max_items"] = args.max_items
    if args.no_rails:
        overrides["with_rails"] = False
    if args.one_per_line:
        overrides["multiple_per_line"] = False
    if args.skip_none:
        overrides["skip_none"] = True
    base = base if base is not None else get_options()
    return base.merge(**overrides)


def main(argv: Sequence[str] | None = None) -> int:
    """
    Run the CLI.

    Returns:
        Process exit status: 0 on success, 1 on unreadable input or invalid options.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = cli_options(args)
    except (TypeError, ValueError) as e:
        print(f"structprint: {e}", file=sys.stderr)
        return 1

    try:
        if args.file == "-":
            data = json.load(sys.stdin)
        else:
            with open(args.file, encoding="utf-8") as f:
                data = json.load(f)
    except OSError as e:
        print(f"structprint: cannot read {args.file}: {e.strerror or e}", file=sys.stderr)
        return 1
    except json.JSONDecodeError as e:
        print(f"structprint: invalid JSON in {args.file}: {e}", file=sys.stderr)
        return 1
    except UnicodeDecodeError as e:
        print(f"structprint: {args.file} is not UTF-8: {e}", file=sys.stderr)
        return 1

    PrettyPrinter(options).pprint(data)
    return 0
