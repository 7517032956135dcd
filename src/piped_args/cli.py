"""Command-line interface for piped-args.

Enables execution via ``uvx piped-args``, ``python -m piped_args``,
or a plain ``piped-args`` command after install.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

# ── Human-readable help strings ──────────────────────────────────────────────

_TOP_DESCRIPTION = """\
Expand command-argument templates from piped JSON or plain text.

Reads piped data, splits it into records (one per JSON object, array, or
plain word), and expands $N markers in each template against every record.
The result is one row of arguments per record, ready to hand to a command
runner.
"""

_TOP_EPILOG = """\
For a machine-readable JSON description of this CLI:

  piped-args schema

Quick examples:
  echo '{"id": 7}' | piped-args expand '/users/${1.id}'
  echo 'a b c' | piped-args expand 'delete $1' --format lines
  curl -s .../users | piped-args expand --explode '/users/${1.id}/keys'
"""

_EXPAND_DESCRIPTION = """\
Expand templates against every record of the piped input and print the rows.

Records:
  - each top-level JSON object is one record
  - a top-level JSON array is one record, or one record per element
    with --explode (every element must then be an object)
  - text that is not JSON is split on whitespace, one record per word

With no piped input at all the templates are printed unchanged as one row.
"""

_EXPAND_EPILOG = """\
Markers:
  $1, ${1}          the whole first field of the record
  $1.user.id        a JSON path into the field; ${...} when text follows
  ${1.items.0.sku}  integer segments index arrays
  ${user.id}        no numeric prefix: path into the first field

Anything that cannot be resolved expands to <nil>.

Output formats:
  json   the whole matrix as an indented JSON array of rows (default)
  jsonl  one JSON array per row
  lines  each row's arguments joined by a space

Exit codes:
  0 -- rows printed
  1 -- the piped data could not be split into records
"""

_SCHEMA_DESCRIPTION = """\
Print a machine-readable JSON description of this CLI to stdout.
"""


# ── Structured JSON schema (for `piped-args schema`) ─────────────────────────

def _cli_schema() -> dict[str, Any]:
    """Return a structured JSON description of the entire CLI."""
    return {
        "tool": "piped-args",
        "description": (
            "Expands $N argument templates against piped JSON or plain-text "
            "records, producing one argument row per record."
        ),
        "commands": [
            {
                "name": "expand",
                "arguments": {
                    "templates": {
                        "type": "string",
                        "required": True,
                        "repeatable": True,
                        "description": "Argument templates containing $N markers.",
                    },
                    "--explode": {
                        "type": "boolean",
                        "required": False,
                        "description": "One record per object of a top-level JSON array.",
                    },
                    "--input": {
                        "type": "string",
                        "format": "file path",
                        "required": False,
                        "description": "Read piped data from FILE instead of stdin.",
                    },
                    "--format": {
                        "type": "string",
                        "enum": ["json", "jsonl", "lines"],
                        "required": False,
                        "description": "Output format (default json).",
                    },
                    "--truncation-length": {
                        "type": "integer",
                        "required": False,
                        "description": "Characters of an offending value shown in errors.",
                    },
                    "--log-dir": {
                        "type": "string",
                        "format": "directory path",
                        "required": False,
                        "description": "Write JSONL logs to DIR/piped_args.log.",
                    },
                },
                "exit_codes": {
                    "0": "rows printed",
                    "1": "piped data could not be split into records",
                },
            },
            {
                "name": "schema",
                "arguments": {},
                "exit_codes": {"0": "always succeeds"},
            },
        ],
    }


# ── Argument parser ───────────────────────────────────────────────────────────

def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="piped-args",
        description=_TOP_DESCRIPTION,
        epilog=_TOP_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    sub = parser.add_subparsers(dest="command")

    # ── expand ───────────────────────────────────────────────────────────────
    exp_p = sub.add_parser(
        "expand",
        help="Expand templates against piped input and print the rows",
        description=_EXPAND_DESCRIPTION,
        epilog=_EXPAND_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    exp_p.add_argument(
        "templates",
        nargs="+",
        metavar="TEMPLATE",
        help="Argument template containing $N markers",
    )
    exp_p.add_argument(
        "--explode", "-x",
        action="store_true",
        help="Treat each object of a top-level JSON array as its own record.",
    )
    exp_p.add_argument(
        "--input", "-i",
        type=Path,
        metavar="FILE",
        help="Read piped data from FILE instead of stdin.",
    )
    exp_p.add_argument(
        "--format", "-f",
        choices=("json", "jsonl", "lines"),
        default="json",
        help="Output format (default: json).",
    )
    exp_p.add_argument(
        "--truncation-length",
        type=int,
        default=512,
        metavar="N",
        help="Characters of an offending value kept in error messages.",
    )
    exp_p.add_argument(
        "--log-dir",
        type=Path,
        metavar="DIR",
        help="Write JSONL logs to DIR/piped_args.log.",
    )

    # ── schema ───────────────────────────────────────────────────────────────
    sub.add_parser(
        "schema",
        help="Print a machine-readable JSON schema of this CLI to stdout",
        description=_SCHEMA_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    return parser


# ── Command handlers ──────────────────────────────────────────────────────────

def _format_rows(rows: list[list[str]], fmt: str) -> str:
    if fmt == "jsonl":
        return "\n".join(json.dumps(row, ensure_ascii=False) for row in rows)
    if fmt == "lines":
        return "\n".join(" ".join(row) for row in rows)
    return json.dumps(rows, indent=2, ensure_ascii=False)


def _cmd_expand(args: argparse.Namespace) -> int:
    from piped_args import EngineConfig, PipedArgsError, build_matrix, configure_logging

    if args.log_dir:
        configure_logging(args.log_dir)

    try:
        config = EngineConfig(truncation_length=args.truncation_length)
    except PydanticValidationError as e:
        print(f"Error: invalid settings: {e}", file=sys.stderr)
        return 1

    try:
        if args.input is not None:
            with open(args.input, "rb") as f:
                rows = build_matrix(f, args.templates, args.explode, config=config)
        else:
            rows = build_matrix(
                sys.stdin.buffer, args.templates, args.explode, config=config
            )
    except (OSError, PipedArgsError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(_format_rows(rows, args.format))
    return 0


def _cmd_schema() -> int:
    print(json.dumps(_cli_schema(), indent=2))
    return 0


# ── Entry point ───────────────────────────────────────────────────────────────

def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "expand":
        sys.exit(_cmd_expand(args))
    elif args.command == "schema":
        sys.exit(_cmd_schema())


if __name__ == "__main__":
    main()
