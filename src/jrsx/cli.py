"""Command-line interface for jrsx."""

from __future__ import annotations

import argparse
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from jrsx.errors import TranspileError
from jrsx.options import TranspileOptions


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path
    output_file: Path | None
    transpile: TranspileOptions
    wrap: bool
    entry: bool
    debug: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="jrsx",
        description="Rewrite JSX-style component tags into template directives",
    )
    p.add_argument("input", help="Input template file")
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover jrsx.toml)",
    )
    p.add_argument(
        "--ext",
        metavar="EXT",
        help="Extension of imported component templates (default: html)",
    )
    p.add_argument(
        "--scope-suffix",
        metavar="SUFFIX",
        help="Suffix appended to scope aliases (default: _scope)",
    )
    p.add_argument(
        "--close-self-closing",
        action="store_true",
        default=None,
        help="Emit {% endcall %} after self-closing tags",
    )
    mode = p.add_mutually_exclusive_group()
    mode.add_argument(
        "--wrap",
        action="store_true",
        help="Wrap the template body in a macro named after the file",
    )
    mode.add_argument(
        "--entry",
        action="store_true",
        help="Print an entry stub that imports and calls the file's macro",
    )
    p.add_argument("--debug", action="store_true", help="Dump scanned tags to stderr")
    return p


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / "jrsx.toml"

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def _config_value(table: dict[str, Any], key: str, kind: type, default: Any) -> Any:
    if key not in table:
        return default
    value = table[key]
    if not isinstance(value, kind):
        raise argparse.ArgumentTypeError(
            f"invalid config value for transpile.{key}: expected {kind.__name__}"
        )
    return value


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: defaults < config file < CLI flags.
    """
    input_file = Path(args.input)
    input_dir = input_file.parent
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, input_dir)

    defaults = TranspileOptions()
    table = config.get("transpile")
    if not isinstance(table, dict):
        table = {}

    extension = _config_value(table, "extension", str, defaults.extension).lstrip(".")
    scope_suffix = _config_value(table, "scope_suffix", str, defaults.scope_suffix)
    close_self_closing = _config_value(
        table, "close_self_closing", bool, defaults.close_self_closing
    )

    if args.ext is not None:
        extension = args.ext.lstrip(".")
    if args.scope_suffix is not None:
        scope_suffix = args.scope_suffix
    if args.close_self_closing is not None:
        close_self_closing = args.close_self_closing

    output_file = Path(args.output) if args.output else None

    return CliOptions(
        input_file=input_file,
        output_file=output_file,
        transpile=TranspileOptions(extension, scope_suffix, close_self_closing),
        wrap=args.wrap,
        entry=args.entry,
        debug=args.debug,
    )


def transpile_file(options: CliOptions) -> str:
    """Read and transpile a template file (or build its entry stub)."""
    from jrsx.debug import dump_segments
    from jrsx.transpiler import Transpiler
    from jrsx.wrap import rewrite_path, rewrite_source

    if options.entry:
        return rewrite_path(options.input_file, options.transpile)

    source = options.input_file.read_text(encoding="utf-8")

    if options.debug:
        dump_segments(source)

    if options.wrap:
        return rewrite_source(options.input_file, source, options.transpile)
    return Transpiler(source, options.transpile).transpile()


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except argparse.ArgumentTypeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except tomllib.TOMLDecodeError as exc:
        print(f"error: invalid config file: {exc}", file=sys.stderr)
        return 2

    try:
        output = transpile_file(options)
    except TranspileError as exc:
        print(exc.format(str(options.input_file)), file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if options.output_file:
        options.output_file.write_text(output, encoding="utf-8")
    else:
        sys.stdout.write(output)

    return 0
