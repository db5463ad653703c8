"""
CLI for building trading strategies from natural language.

Usage:
    python -m src.cli catalog [--search PATTERN] [--registry]
    python -m src.cli validate strategy_ir.json
    python -m src.cli compile strategy_ir.json
    python -m src.cli build "Buy AAPL daily when Close crosses above the 200 SMA"
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from pydantic import ValidationError as PydanticValidationError

from src.env import load_environment
from src.service.strategy_builder_service import (
    StrategyBuilderService,
    StrategyBuildResult,
    create_strategy_builder_service,
)
from src.translator.ir import IntermediateRepresentation
from src.translator.registries import get_default_catalog

logger = logging.getLogger(__name__)


def _load_ir(path: str) -> IntermediateRepresentation | None:
    """Read an IR JSON file, reporting problems instead of raising."""
    ir_file = Path(path)
    if not ir_file.exists():
        logger.error(f"IR file not found: {ir_file}")
        return None
    try:
        content = ir_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Could not read IR file {ir_file}: {e}")
        return None
    try:
        return IntermediateRepresentation.from_json(content)
    except PydanticValidationError as e:
        logger.error(f"Could not parse IR file {ir_file}: {e}")
        return None


def _print_result(result: StrategyBuildResult) -> int:
    print(result.to_json())
    if result.clarification_request:
        print(f"\n❓ {result.clarification_request}", file=sys.stderr)
    elif not result.success and result.error_message:
        print(f"\n❌ {result.error_message}", file=sys.stderr)
    return 0 if result.success else 1


def cmd_catalog(args) -> int:
    """List catalog signals."""
    catalog = get_default_catalog()

    if args.registry:
        print(catalog.compact_registry())
        return 0

    capabilities = catalog.search_by_name(args.search) if args.search else catalog.list_all()
    if not capabilities:
        print(f"No signals match '{args.search}'")
        return 1

    print(f"\n{'ID':<15} {'Name':<15} {'Category':<10} {'Args':<25} {'Children':<8}")
    print("-" * 78)
    for c in capabilities:
        arg_keys = ", ".join(a.key for a in c.required_args) or "-"
        print(
            f"{c.id:<15} "
            f"{c.name:<15} "
            f"{c.category:<10} "
            f"{arg_keys:<25} "
            f"{c.required_children:<8}"
        )
    return 0


def cmd_validate(args) -> int:
    """Validate an IR file."""
    ir = _load_ir(args.file)
    if ir is None:
        return 2

    service = StrategyBuilderService(get_default_catalog())
    result = service.validator.validate(ir)
    print(result.error_message())
    return 0 if result.is_valid else 1


def cmd_compile(args) -> int:
    """Validate and compile an IR file."""
    ir = _load_ir(args.file)
    if ir is None:
        return 2

    service = StrategyBuilderService(get_default_catalog())
    return _print_result(service.build_from_ir(ir))


def cmd_build(args) -> int:
    """Run the full pipeline on a natural-language description."""
    service = create_strategy_builder_service()
    result = asyncio.run(service.build_strategy(args.text))
    return _print_result(result)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(description="Build trading signals from natural language")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Catalog command
    catalog_parser = subparsers.add_parser("catalog", help="List available signals")
    catalog_parser.add_argument("--search", help="Filter by name or alias substring")
    catalog_parser.add_argument(
        "--registry", action="store_true", help="Print the compact registry used in prompts"
    )

    # Validate command
    validate_parser = subparsers.add_parser("validate", help="Validate an IR JSON file")
    validate_parser.add_argument("file", help="Path to IR JSON")

    # Compile command
    compile_parser = subparsers.add_parser("compile", help="Compile an IR JSON file")
    compile_parser.add_argument("file", help="Path to IR JSON")

    # Build command
    build_parser = subparsers.add_parser("build", help="Build a strategy from a description")
    build_parser.add_argument("text", help="Natural-language strategy description")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING, format="%(message)s"
    )
    load_environment()

    if not args.command:
        parser.print_help()
        return 0

    commands = {
        "catalog": cmd_catalog,
        "validate": cmd_validate,
        "compile": cmd_compile,
        "build": cmd_build,
    }

    return commands[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
