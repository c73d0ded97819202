"""Convert between APL Array Notation and JSON, or reformat notation text."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import IO, Iterable

from .errors import AplanError
from .json_interop import aplan_to_json, json_to_aplan
from .parser import parse
from .serializer import SerializeOptions, serialize

logger = logging.getLogger(__name__)

_MODES = ("a2j", "j2a")
_EXIT_COMMANDS = {".exit", ".quit"}


def _convert(mode: str, text: str) -> str:
    if mode == "a2j":
        return aplan_to_json(text)
    return json_to_aplan(text)


def _autodetect(text: str) -> str:
    if text.startswith("{"):
        return json_to_aplan(text)
    if text.startswith("["):
        # brackets open both JSON arrays and notation matrices
        try:
            return json_to_aplan(text)
        except json.JSONDecodeError:
            logger.debug("Input is not JSON; reading it as Array Notation")
    return aplan_to_json(text)


def run_repl(lines: Iterable[str], out: IO[str], err: IO[str], *, mode: str = "a2j") -> int:
    print("aplan REPL", file=out)
    print(".j2a / .a2j to switch mode, .exit to quit\n", file=out)
    out.write(f"{mode}> ")
    out.flush()
    for line in lines:
        text = line.strip()
        if text in _EXIT_COMMANDS:
            break
        if text in {".a2j", ".j2a"}:
            mode = text[1:]
        elif text:
            try:
                print(_convert(mode, text), file=out)
            except (AplanError, ValueError, TypeError) as exc:
                print(f"Error: {exc}", file=err)
        out.write(f"{mode}> ")
        out.flush()
    return 0


def _read_input(value: str | None) -> str:
    if value is not None:
        return value
    return sys.stdin.read().strip()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="aplan", description=__doc__)
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    sub = parser.add_subparsers(dest="command")

    a2j = sub.add_parser("a2j", help="parse Array Notation and print JSON")
    a2j.add_argument("input", nargs="?", help="notation text (default: stdin)")

    j2a = sub.add_parser("j2a", help="parse JSON and print Array Notation")
    j2a.add_argument("input", nargs="?", help="JSON text (default: stdin)")

    fmt = sub.add_parser("fmt", help="re-serialize Array Notation canonically")
    fmt.add_argument("input", nargs="?", help="notation text (default: stdin)")
    fmt.add_argument("--diamond", action="store_true", help="use the ⋄ separator instead of line breaks")
    fmt.add_argument("--indent", type=int, default=1, help="indent width for the multi-line layout")

    repl = sub.add_parser("repl", help="start an interactive session")
    repl.add_argument("--mode", choices=_MODES, default="a2j", help="initial conversion direction")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "repl" or (args.command is None and sys.stdin.isatty()):
        return run_repl(sys.stdin, sys.stdout, sys.stderr, mode=getattr(args, "mode", "a2j"))

    try:
        text = _read_input(getattr(args, "input", None))
        if args.command == "a2j":
            result = aplan_to_json(text)
        elif args.command == "j2a":
            result = json_to_aplan(text)
        elif args.command == "fmt":
            options = SerializeOptions(use_separator_glyph=args.diamond, indent_width=args.indent)
            result = serialize(parse(text), options)
        else:
            result = _autodetect(text)
    except (AplanError, ValueError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(result)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
