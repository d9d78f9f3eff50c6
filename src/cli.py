"""Command-line interface for civic-console."""

import argparse
import sys
from dataclasses import replace
from pathlib import Path

from config import ConfigValidationError, ConsoleConfig, load_config, validate_config
from constants import APP_NAME, APP_VERSION, PAGE_SIZES
from model.resources import REGISTRY


def print_error_box(title: str, *lines: str) -> None:
    """Print a formatted error box to stderr.

    Args:
        title: The error title (will be prefixed with "Error: ")
        *lines: Additional lines to print in the box
    """
    print("=" * 60, file=sys.stderr)
    print(f"Error: {title}", file=sys.stderr)
    print("", file=sys.stderr)
    for line in lines:
        print(line, file=sys.stderr)
    print("=" * 60, file=sys.stderr)


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for the civic-console CLI."""
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Terminal console for managing a municipal office's public records.",
    )
    parser.add_argument("--base-url", metavar="URL", help="Backend base URL (overrides config)")
    parser.add_argument("--config", metavar="PATH", type=Path, help="Path to config.json")
    parser.add_argument(
        "--resource", metavar="NAME", help="Tab to open first (see --list-resources)"
    )
    parser.add_argument("--timeout", type=float, metavar="SECONDS", help="Request timeout")
    parser.add_argument(
        "--page-size", type=int, choices=PAGE_SIZES, metavar="N", help="Rows per page"
    )
    parser.add_argument(
        "--list-resources", action="store_true", help="List manageable resources and exit"
    )
    parser.add_argument("--version", action="version", version=f"{APP_NAME} {APP_VERSION}")
    return parser


def list_resources() -> None:
    """Print the registered resources."""
    width = max(len(name) for name in REGISTRY)
    for name, schema in REGISTRY.items():
        print(f"  {name:<{width}}  {schema.title}  ({schema.endpoint})")


def build_config(args: argparse.Namespace) -> ConsoleConfig:
    """Load config and apply command-line overrides.

    Raises:
        ConfigValidationError: if the resulting config is unusable
    """
    config = load_config(args.config)
    if args.base_url:
        config = replace(config, base_url=args.base_url)
    if args.timeout is not None:
        config = replace(config, timeout=args.timeout)
    if args.page_size is not None:
        config = replace(config, page_size=args.page_size)
    for warning in validate_config(config):
        print(f"Warning: {warning}", file=sys.stderr)
    return config


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    args = create_parser().parse_args(argv)

    if args.list_resources:
        list_resources()
        sys.exit(0)

    if args.resource and args.resource not in REGISTRY:
        print_error_box(
            f"Unknown resource '{args.resource}'",
            f"Known resources: {', '.join(REGISTRY)}",
        )
        sys.exit(1)

    try:
        config = build_config(args)
    except ConfigValidationError as e:
        print_error_box("Invalid configuration", str(e))
        sys.exit(1)

    # Imported late: importing the app configures logging
    from app import CivicConsole

    app = CivicConsole(config, initial_resource=args.resource)
    app.run()


if __name__ == "__main__":
    main()
