#!/usr/bin/env python3
"""
jdisc: discover the schema of a JSON file.

Usage:
    jdisc discover --input data.json --output schema.json
"""

import argparse
import json
import sys
from typing import List, Optional

from discover_schema import discover_schema, load_json


__version__ = "0.1.0"


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(
        prog="jdisc",
        description="Discover the structural schema of a JSON document.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    discover = subparsers.add_parser("discover", help="Discover the schema of a JSON file")
    discover.add_argument(
        "-i", "--input", required=True, metavar="INPUT_FILE",
        help="Path to the input JSON file ('-' for stdin)",
    )
    discover.add_argument(
        "-o", "--output", required=True, metavar="OUTPUT_FILE",
        help="Path to the output schema file ('-' for stdout)",
    )
    discover.add_argument(
        "--indent", type=int, default=2,
        help="Indentation of the written schema (default: 2)",
    )
    discover.add_argument(
        "--keep-duplicate-keys", action="store_true",
        help="Record every value of a repeated object key instead of the last one",
    )
    discover.add_argument(
        "-v", "--verbose", action="store_true",
        help="Print progress to stderr",
    )
    discover.set_defaults(handler=run_discover)

    return parser


def _log(args: argparse.Namespace, message: str):
    if args.verbose:
        print(message, file=sys.stderr)


def run_discover(args: argparse.Namespace) -> int:
    """Read the input document, discover its schema and write it out."""
    _log(args, f"Reading {args.input}...")
    if args.input == "-":
        document = load_json(sys.stdin, keep_duplicate_keys=args.keep_duplicate_keys)
    else:
        with open(args.input, encoding="utf-8") as f:
            document = load_json(f, keep_duplicate_keys=args.keep_duplicate_keys)

    schema = discover_schema(document)

    # Fully rendered before the output file is opened
    text = json.dumps(schema.to_dict(), indent=args.indent) + "\n"

    if args.output == "-":
        sys.stdout.write(text)
    else:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(text)
        _log(args, f"✓ Schema written to {args.output}")

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Run the command line; returns the process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)

    source = "stdin" if args.input == "-" else args.input
    try:
        return args.handler(args)
    except json.JSONDecodeError as e:
        print(f"Error: {source} is not valid JSON: {e}", file=sys.stderr)
    except UnicodeDecodeError as e:
        print(f"Error: {source} is not UTF-8 text: {e}", file=sys.stderr)
    except OSError as e:
        detail = f"{e.strerror}: {e.filename}" if e.filename else str(e)
        print(f"Error: {detail}", file=sys.stderr)
    except RecursionError:
        print(f"Error: {source} is nested too deeply to process", file=sys.stderr)

    return 1


if __name__ == "__main__":
    sys.exit(main())
