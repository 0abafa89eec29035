from __future__ import annotations

from pathlib import Path
import argparse
import logging
import sys

from .config import ParserSettings
from .errors import ParseError
from .ir import ParseResult
from .parser import SwhkdParser


def compile_config(path: str | Path, *, settings_path: str | Path | None = None) -> ParseResult:
    """End-to-end compilation: config file (and its includes) -> ParseResult."""

    settings = ParserSettings.from_toml(settings_path) if settings_path else ParserSettings()
    return SwhkdParser(settings=settings).from_path(path)


def render(result: ParseResult) -> str:
    lines = [str(binding) for binding in result.bindings]
    lines.extend(f"unbind: {definition}" for definition in result.unbinds)
    for mode in result.modes:
        flags = [name for name, on in (("oneoff", mode.oneoff), ("swallow", mode.swallow)) if on]
        lines.append(f"mode {mode.name}" + (f" ({', '.join(flags)})" if flags else ""))
        lines.extend(f"    {binding}" for binding in mode.bindings)
        lines.extend(f"    unbind: {definition}" for definition in mode.unbinds)
    lines.extend(f"include: {path}" for path in result.imports)
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Expand a hotkey config into concrete trigger -> command bindings."
    )
    parser.add_argument("config", help="Hotkey config path (e.g. swhkdrc)")
    parser.add_argument("--settings", help="TOML file with a [parser] table")
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    parser.add_argument("--indent", type=int, default=2, help="JSON indent (default: 2)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        result = compile_config(args.config, settings_path=args.settings)
    except ParseError as err:
        print(err, file=sys.stderr)
        return 1

    if args.json:
        print(result.model_dump_json(indent=args.indent))
    else:
        print(render(result))
    return 0
