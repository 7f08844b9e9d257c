"""
Command-line interface for jsonshape.
"""

import argparse
import sys
from pathlib import Path
from typing import Any, List, Optional

from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

from .errors import JsonShapeError
from .log import configure_logging, get_logger
from .options import DECLARATION_ORDERS, QUOTE_STYLES, GenerateOptions, load_options

console = Console()
err_console = Console(stderr=True)
logger = get_logger(__name__)

DEFAULT_CONFIG_FILE = ".jsonshape.yml"


def _non_negative_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {text!r}") from None
    if value < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {value}")
    return value


def _add_input_arguments(parser: argparse.ArgumentParser):
    parser.add_argument("files", nargs="+", help="JSON files to read ('-' for stdin)")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help=f"YAML options file (default: {DEFAULT_CONFIG_FILE} if present)",
    )
    parser.add_argument(
        "--lenient",
        action="store_true",
        help="Accept JavaScript-like input (comments, trailing commas, bare keys, `const x = ...`);"
             " cannot be combined with --stream",
    )
    parser.add_argument(
        "--stream",
        action="store_true",
        help="Stream the items of each file's top-level array instead of loading whole documents",
    )
    parser.add_argument(
        "--sample-size",
        type=_non_negative_int,
        default=None,
        help="With --stream, read at most this many items",
    )
    parser.add_argument("-r", "--root-name", help="Name of the root type (default: rootType)")
    parser.add_argument(
        "--no-singularize",
        dest="singularize",
        action="store_false",
        default=None,
        help="Do not derive singular type names from plural field names",
    )
    parser.add_argument(
        "--literal-threshold",
        type=int,
        help="Emit literal unions for up to N distinct values (0 disables)",
    )
    parser.add_argument(
        "--null-as-optional",
        action="store_true",
        default=None,
        help="Render `T | null` fields as optional `T`",
    )
    parser.add_argument("--indent", type=int, help="Indentation width of declaration bodies")
    parser.add_argument("--quote", choices=QUOTE_STYLES, help="Quote style for strings and keys")
    parser.add_argument(
        "--inline-objects",
        dest="extract_objects",
        action="store_false",
        default=None,
        help="Inline small objects (up to two primitive fields) instead of naming them",
    )
    parser.add_argument(
        "--order",
        dest="declaration_order",
        choices=DECLARATION_ORDERS,
        help="Order of the declarations after the root",
    )
    parser.add_argument("--max-depth", type=int, help="Maximum nesting depth of the input")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jsonshape",
        description="jsonshape - Infer TypeScript type declarations from JSON data",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show version and exit",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Generate command
    generate_parser = subparsers.add_parser("generate", help="Print type declarations for JSON data")
    _add_input_arguments(generate_parser)
    generate_parser.add_argument("-o", "--output", type=Path, help="Write declarations to this file")
    generate_parser.add_argument(
        "--plain",
        action="store_true",
        help="Print without syntax highlighting",
    )

    # Schema command
    schema_parser = subparsers.add_parser("schema", help="Summarize the inferred declarations as a table")
    _add_input_arguments(schema_parser)

    return parser


OPTION_ARGUMENTS = (
    "root_name",
    "singularize",
    "literal_threshold",
    "null_as_optional",
    "indent",
    "quote",
    "extract_objects",
    "declaration_order",
    "max_depth",
)


def options_from_args(args: argparse.Namespace) -> GenerateOptions:
    """Options from the config file, overridden by any flags given on the command line."""
    config_path = args.config if args.config is not None else Path(DEFAULT_CONFIG_FILE)
    if args.config is not None and not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")
    options = load_options(config_path)

    overrides = {
        name: getattr(args, name)
        for name in OPTION_ARGUMENTS
        if getattr(args, name, None) is not None
    }
    return options.replace(**overrides) if overrides else options


def read_value(args: argparse.Namespace) -> Any:
    # Import here to avoid slow startup for --help
    from .reader import JsonSource

    source = JsonSource(args.files, lenient=args.lenient)
    if args.stream:
        return source.sample(args.sample_size, progress=err_console.is_terminal)
    return source.load()


def run_generate(args: argparse.Namespace) -> int:
    from .generator import generate

    options = options_from_args(args)
    value = read_value(args)
    text = generate(value, options)

    if args.output:
        args.output.write_text(text + "\n", encoding="utf-8")
        err_console.print(f"[bold green]Wrote type declarations to {args.output}[/bold green]")
    elif args.plain or not console.is_terminal:
        console.print(text, markup=False, highlight=False, emoji=False, soft_wrap=True)
    else:
        console.print(Syntax(text, "typescript", theme="monokai", word_wrap=True))
    return 0


def run_schema(args: argparse.Namespace) -> int:
    from .analyzer import ShapeAnalyzer
    from .emitter import TypeEmitter
    from .generator import resolve_root_name

    options = options_from_args(args)
    value = read_value(args)
    root_name = resolve_root_name(options.root_name)
    shape = ShapeAnalyzer(options).analyze(value)
    root_text, registry = TypeEmitter(options).emit(shape, root_name)

    table = Table(title="Inferred Types")
    table.add_column("Type", style="cyan")
    table.add_column("Fields", style="magenta")
    table.add_column("References", style="green")

    if root_name not in registry.declarations:
        table.add_row(Text(root_name), Text(root_text), Text(""))
    for declaration in registry.ordered(options.declaration_order):
        table.add_row(
            Text(declaration.name),
            Text(", ".join(declaration.fields) or "-"),
            Text(", ".join(dict.fromkeys(declaration.dependencies))),
        )

    console.print(table)
    return 0


COMMANDS = {
    "generate": run_generate,
    "schema": run_schema,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=args.verbose, console=err_console)

    if args.version:
        from jsonshape import __version__
        console.print(f"jsonshape version {__version__}")
        return 0

    if not args.command:
        parser.print_help()
        return 0

    if args.lenient and args.stream:
        parser.error("--lenient cannot be combined with --stream: streamed items are read as strict JSON")

    try:
        return COMMANDS[args.command](args)
    except FileNotFoundError as e:
        err_console.print(f"[bold red]Error: {escape(str(e))}[/bold red]")
        return 1
    except JsonShapeError as e:
        logger.debug("Generation failed", exc_info=True)
        err_console.print(f"[bold red]Error: {escape(str(e))}[/bold red]")
        return 1
    except KeyboardInterrupt:
        err_console.print("\n[yellow]Interrupted.[/yellow]")
        return 130


if __name__ == "__main__":
    sys.exit(main())
