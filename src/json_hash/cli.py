"""Command-line utilities for json_hash."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .config import ApplyConfig
from .config_loader import load_config
from .errors import JsonHashError
from .hasher import JsonHash
from .logging_pipeline import configure_logging, reset_logging
from .schemas import HashReport
from .types import HASH_KEY

LOGGER = logging.getLogger(__name__)


def _read_stdin() -> str | None:
    """Read the JSON payload from stdin if available."""
    try:
        if sys.stdin and not sys.stdin.isatty():
            return sys.stdin.read()
    except OSError as e:
        print(f"Error reading stdin: {e}", file=sys.stderr)
    return None


def _load_text(path: str | None) -> str:
    """Load input text from a file or stdin."""
    if path:
        return Path(path).read_text(encoding="utf-8")
    stdin_payload = _read_stdin()
    if stdin_payload:
        return stdin_payload
    raise ValueError("No input provided. Use --input or pipe JSON via stdin.")


def _parse_json_dict(payload: str) -> dict[str, object]:
    """Parse a JSON string and ensure the result is an object."""

    data = json.loads(payload)
    if not isinstance(data, dict):
        raise ValueError("Input JSON must be an object at the top level.")
    return data


def _emit(payload: object, output: str | None = None, indent: int | None = None) -> None:
    text = json.dumps(
        payload,
        indent=indent,
        separators=None if indent is not None else (",", ":"),
        ensure_ascii=False,
    )
    if output:
        Path(output).write_text(text + "\n", encoding="utf-8")
    else:
        print(text)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="json-hash",
        description="Add and verify content-addressed hashes in JSON documents.",
    )
    parser.add_argument(
        "--config",
        "-c",
        help="Path to a YAML or JSON configuration file.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging threshold for diagnostics written to stderr.",
    )
    parser.add_argument(
        "--log-json",
        action="store_true",
        help="Write diagnostics as JSON lines.",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    apply_parser = commands.add_parser("apply", help="Write hashes into a document.")
    apply_parser.add_argument(
        "--input", "-i", help="Path to a JSON file. If omitted, reads from stdin."
    )
    apply_parser.add_argument(
        "--output", "-o", help="Write the hashed document to this file."
    )
    apply_parser.add_argument(
        "--indent", type=int, default=None, help="Pretty-print with this indent."
    )
    apply_parser.add_argument(
        "--keep-existing",
        action="store_true",
        help="Keep hashes that are already present instead of recomputing them.",
    )
    apply_parser.add_argument(
        "--no-throw-on-mismatch",
        action="store_true",
        help="Overwrite outdated hashes instead of failing.",
    )
    apply_parser.add_argument(
        "--no-recursive",
        action="store_true",
        help="Do not descend into children that already carry a hash.",
    )

    validate_parser = commands.add_parser(
        "validate", help="Verify the hashes of a document."
    )
    validate_parser.add_argument(
        "--input", "-i", help="Path to a JSON file. If omitted, reads from stdin."
    )
    validate_parser.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Quiet mode: suppress output, just return exit code.",
    )

    hash_parser = commands.add_parser(
        "hash", help="Print the hash of a JSON value or a raw string."
    )
    hash_parser.add_argument(
        "--input", "-i", help="Path to a JSON file. If omitted, reads from stdin."
    )
    hash_parser.add_argument(
        "--text", "-t", help="Hash this raw string instead of a JSON value."
    )
    return parser


def _run_apply(hasher: JsonHash, args: argparse.Namespace) -> int:
    document = _parse_json_dict(_load_text(args.input))
    apply_config = ApplyConfig(
        in_place=True,
        update_existing_hashes=not args.keep_existing,
        throw_on_hash_mismatch=not args.no_throw_on_mismatch,
        recursive=not args.no_recursive,
    )
    hashed = hasher.apply(document, apply_config)
    _emit(hashed, args.output, args.indent)
    return 0


def _run_validate(hasher: JsonHash, args: argparse.Namespace) -> int:
    document = _parse_json_dict(_load_text(args.input))
    try:
        hasher.validate(document)
    except JsonHashError as exc:
        report = HashReport.from_error("validate", exc)
    else:
        report = HashReport(
            operation="validate", valid=True, hash_value=str(document[HASH_KEY])
        )

    if not args.quiet:
        _emit(report.model_dump_json_ready())
    return 0 if report.valid else 1


def _run_hash(hasher: JsonHash, args: argparse.Namespace) -> int:
    if args.text is not None:
        print(hasher.calc_hash(args.text))
        return 0
    value = json.loads(_load_text(args.input))
    print(hasher.calc_hash(value))
    return 0


_COMMANDS = {
    "apply": _run_apply,
    "validate": _run_validate,
    "hash": _run_hash,
}


def main(argv: list[str] | None = None) -> int:
    """Run the json-hash command line tool."""
    parser = _build_parser()

    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:  # pragma: no cover - controlled via tests
        exit_code = int(exc.code) if isinstance(exc.code, int) else 1
        return 0 if exit_code == 0 else 1

    handler = configure_logging(
        getattr(logging, args.log_level), json_output=args.log_json
    )
    try:
        hasher = JsonHash(load_config(args.config))
        return _COMMANDS[args.command](hasher, args)
    except (JsonHashError, ValueError, OSError) as exc:
        LOGGER.debug("Command failed", exc_info=exc)
        print(str(exc), file=sys.stderr)
        return 1
    finally:
        reset_logging(handler)


if __name__ == "__main__":
    raise SystemExit(main())
