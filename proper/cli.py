"""CLI entrypoints for proper commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ProperConfig, load_config, parse_indent
from .errors import ConfigError, ProperError
from .generator import Generator
from .logging import configure_logging, get_logger
from .proptypes import DEFAULT_OPTIONS, FormatOptions
from .render import DEFAULT_IMPORT_SOURCE, render_module, render_units
from .scanner import SourceScanner

_logger = get_logger("cli")


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="proper",
        description="Generate React prop types from Go type declarations.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Only report warnings and errors.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write log records to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Infer prop types for the types declared in Go sources.",
    )
    _add_verbose_option(generate_parser, suppress_default=True)
    generate_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Go file or package directory (defaults to current directory).",
    )
    generate_parser.add_argument(
        "-r",
        "--recursive",
        action="store_true",
        default=None,
        help="Also inspect packages in subdirectories.",
    )
    generate_parser.add_argument(
        "--import-name",
        default=None,
        help="Variable the prop-types library is imported as (default: PropTypes).",
    )
    generate_parser.add_argument(
        "--indent",
        default=None,
        help="Indentation as a number of spaces or a literal string such as '\\t'.",
    )
    generate_parser.add_argument(
        "--module",
        action="store_true",
        default=None,
        help="Emit a standalone ES module with an import and exports.",
    )
    generate_parser.add_argument(
        "--import-source",
        default=None,
        help=f"Module prop-types is imported from (default: {DEFAULT_IMPORT_SOURCE}).",
    )
    generate_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Write generated code to this file instead of stdout.",
    )
    generate_parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on Go files with syntax errors instead of skipping them.",
    )
    generate_parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a .proper.yml file (defaults to the one in PATH).",
    )

    return parser


def _format_options(args: argparse.Namespace, config: ProperConfig) -> FormatOptions:
    import_name = args.import_name or config.output.import_name or DEFAULT_OPTIONS.import_name
    if not import_name.isidentifier():
        raise ConfigError(f"--import-name is not a valid identifier: {import_name!r}")
    indent = config.output.indent
    if args.indent is not None:
        indent = parse_indent(args.indent)
    if indent is None:
        indent = DEFAULT_OPTIONS.indent
    return FormatOptions(import_name=import_name, indent=indent)


def _run_generate(args: argparse.Namespace) -> str:
    path = Path(args.path)
    config = load_config(args.config if args.config is not None else path)
    options = _format_options(args, config)
    recursive = config.scan.recursive if args.recursive is None else args.recursive
    module = config.output.module if args.module is None else args.module

    generator = Generator(scanner=SourceScanner(config.scan.exclude_paths))
    units = generator.inspect(path, recursive=recursive, strict=bool(args.strict))
    _logger.info(
        "Inferred %d declarations from %d files",
        sum(len(unit.declarations) for unit in units),
        len(units),
    )

    declarations = [unit.declarations for unit in units]
    if module:
        import_source = args.import_source or config.output.import_source or DEFAULT_IMPORT_SOURCE
        return render_module(declarations, options, import_source=import_source)
    return render_units(declarations, options)


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for proper commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(args.verbose), quiet=bool(args.quiet), log_file=args.log_file
    )

    if args.command == "generate":
        try:
            output = _run_generate(args)
            if args.output is not None:
                args.output.write_text(output, encoding="utf-8")
                _logger.info("Wrote %s", args.output)
            else:
                sys.stdout.write(output)
        except ConfigError as exc:
            parser.exit(1, f"Invalid configuration: {exc}\n")
        except (ProperError, OSError) as exc:
            parser.exit(1, f"proper generate failed: {exc}\nRun with --verbose for more details.\n")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


if __name__ == "__main__":
    main(sys.argv[1:])
