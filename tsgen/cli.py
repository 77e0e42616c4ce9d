"""
Command-line interface for tsgen.

Usage:
  tsgen myapp.models:Person myapp.models:Color -o frontend/models.ts
"""

from __future__ import annotations

import argparse
import enum
import importlib
import os
import sys
from typing import Any

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .codegen import (
    ConfigError,
    GenerationResult,
    GeneratorError,
    TypeScriptify,
    generate_code,
    load_config,
)
from .logging_config import get_logger, setup_logging

logger = get_logger(__name__)


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


# Status output goes to stderr so generated code can be piped
console = Console(stderr=True)


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="tsgen",
        description="Generate TypeScript definitions from Python dataclasses",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  tsgen myapp.models:Person
  tsgen myapp.models:Person myapp.models:Color --output models.ts
  tsgen myapp.models:Person --interface --prefix Api
        """.strip(),
    )

    parser.add_argument(
        "targets",
        nargs="+",
        metavar="MODULE:NAME",
        help="Dataclass or Enum class to convert (Enum classes are registered as enums)",
    )

    parser.add_argument(
        "--output", "-o", help="Output file (default: stdout); keeps custom code blocks"
    )
    parser.add_argument("--config", help="Configuration file path (JSON)")

    style_group = parser.add_argument_group("output style")
    style_group.add_argument("--prefix", help="Prefix for generated entity names")
    style_group.add_argument("--suffix", help="Suffix for generated entity names")
    style_group.add_argument("--indent", help="Indentation unit (default: 4 spaces)")
    style_group.add_argument(
        "--interface", action="store_true", help="Generate interfaces instead of classes"
    )
    style_group.add_argument(
        "--no-export", action="store_true", help="Don't export generated entities"
    )
    style_group.add_argument(
        "--no-create-from",
        action="store_true",
        help="Don't generate the static createFrom() method",
    )
    style_group.add_argument(
        "--no-constructor",
        action="store_true",
        help="Don't generate constructors",
    )
    style_group.add_argument(
        "--import",
        dest="imports",
        action="append",
        metavar="STATEMENT",
        help="Import line to place at the top of the output (repeatable)",
    )

    file_group = parser.add_argument_group("file output")
    file_group.add_argument(
        "--backup-dir",
        help="Directory for backups of the previous output ('' disables backups)",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Show generation metadata and debug logging",
    )

    return parser


def _build_config_overrides(args: argparse.Namespace) -> dict[str, Any]:
    """Collect configuration overrides given on the command line."""
    overrides: dict[str, Any] = {}

    for option in ("prefix", "suffix", "indent", "backup_dir"):
        value = getattr(args, option)
        if value is not None:
            overrides[option] = value

    if args.interface:
        overrides["create_interface"] = True
    if args.no_export:
        overrides["export"] = False
    if args.no_create_from:
        overrides["create_from_method"] = False
    if args.no_constructor:
        overrides["create_constructor"] = False
        overrides["create_from_method"] = False
    if args.imports:
        overrides["imports"] = list(args.imports)

    return overrides


def resolve_target(target: str) -> Any:
    """Import ``module:Name`` (dotted names allowed after the colon)."""
    module_name, sep, attr_path = target.partition(":")
    if not sep or not module_name or not attr_path:
        raise CLIError(f"Target must look like module:Name, got {target!r}")

    # Make modules in the working directory importable
    cwd = os.getcwd()
    if cwd not in sys.path:
        sys.path.insert(0, cwd)

    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise CLIError(f"Cannot import module {module_name!r}: {e}") from e

    for attr in attr_path.split("."):
        try:
            obj = getattr(obj, attr)
        except AttributeError as e:
            raise CLIError(f"{module_name!r} has no attribute {attr_path!r}") from e

    return obj


def build_generator(args: argparse.Namespace) -> TypeScriptify:
    """Create a generator and register every target."""
    config = load_config(_build_config_overrides(args) or None, args.config)
    generator = TypeScriptify(config)

    for target in args.targets:
        obj = resolve_target(target)
        if isinstance(obj, type) and issubclass(obj, enum.Enum):
            generator.add_enum(list(obj))
        else:
            generator.add(obj)
        logger.debug("Registered target %s", target)

    return generator


def _show_metadata(result: GenerationResult) -> None:
    table = Table(title="Generation Result", box=box.ROUNDED)
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")
    for key, value in result.metadata.items():
        table.add_row(str(key), str(value))
    console.print(table)


def run(args: argparse.Namespace) -> int:
    """Run a generation from parsed arguments."""
    generator = build_generator(args)

    if args.output:
        generator.convert_to_file(args.output)
        console.print(f"[green]✓[/green] Generated code saved to: {args.output}")
        if args.verbose:
            _show_metadata(GenerationResult("", metadata=generator.metadata()))
        return 0

    result = generate_code(generator)
    if not result.success:
        raise result.exception

    for warning in result.warnings:
        console.print(f"[yellow]⚠[/yellow] {escape(warning)}")
    if args.verbose:
        _show_metadata(result)

    sys.stdout.write(result.code + "\n")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``tsgen`` console script."""
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging("DEBUG" if args.verbose else "WARNING")

    try:
        return run(args)
    except (CLIError, ConfigError, GeneratorError) as e:
        console.print(f"[red]✗ Error:[/red] {escape(str(e))}")
        logger.debug("Generation failed", exc_info=True)
        return 1
    except OSError as e:
        console.print(f"[red]✗ File error:[/red] {escape(str(e))}")
        logger.error("File operation failed: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
