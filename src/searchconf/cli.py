"""Command-line interface for searchconf.

Inspects the effective configuration and writes settings into the
configuration store.
"""

from __future__ import annotations

import argparse
import copy
import logging
import sys
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

MASK = "********"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="searchconf",
        description="Inspect and update the search service configuration",
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=None,
        help="Path to the YAML configuration store (default: config.yaml)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    show_parser = subparsers.add_parser("show", help="Print the effective configuration")
    show_parser.add_argument(
        "--base", action="store_true",
        help="Print the stored configuration without environment overrides",
    )
    show_parser.add_argument(
        "--reveal", action="store_true",
        help="Print API keys instead of masking them",
    )

    get_parser = subparsers.add_parser("get", help="Print one effective setting")
    get_parser.add_argument("path", help="Dotted setting path, e.g. MODELS.OPENAI.API_KEY")

    set_parser = subparsers.add_parser("set", help="Write settings into the store")
    set_parser.add_argument(
        "assignments", nargs="+", metavar="PATH=VALUE",
        help="Dotted setting path and its new value",
    )

    subparsers.add_parser("env", help="List settings, their env variables and sources")

    return parser.parse_args(argv)


def mask_secrets(data: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of store-layout data with non-empty secret settings masked."""
    from searchconf.config.schema import iter_leaves

    masked = copy.deepcopy(data)
    for spec in iter_leaves():
        if not spec.secret:
            continue
        section = masked
        for key in spec.path[:-1]:
            section = section.get(key, {})
        if section.get(spec.path[-1]):
            section[spec.path[-1]] = MASK
    return masked


def parse_assignments(assignments: list[str]) -> dict[str, Any]:
    """Turn ``PATH=VALUE`` arguments into a partial configuration.

    Raises:
        ValueError: If an argument has no '=' or names an unknown setting.
    """
    from searchconf.config.schema import leaf_for_path

    update: dict[str, Any] = {}
    for assignment in assignments:
        dotted, sep, value = assignment.partition("=")
        if not sep:
            raise ValueError(f"Expected PATH=VALUE, got: {assignment}")
        try:
            spec = leaf_for_path(dotted.strip())
        except KeyError as e:
            raise ValueError(e.args[0]) from e
        section = update
        for key in spec.path[:-1]:
            section = section.setdefault(key, {})
        section[spec.path[-1]] = value
    return update


def _show(resolver, base: bool, reveal: bool) -> None:
    from searchconf.config.resolver import dump_config_yaml

    config = resolver.load_base() if base else resolver.resolve_effective()
    data = config.model_dump(by_alias=True)
    if not reveal:
        data = mask_secrets(data)
    print(dump_config_yaml(data), end="")


def _env(resolver) -> None:
    from searchconf.config.schema import iter_leaves

    sources = resolver.env_sources()
    for spec in iter_leaves():
        print(f"{spec.dotted:<32} {spec.env:<28} {sources[spec.dotted]}")


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the searchconf CLI."""
    args = parse_args(argv)

    if args.command is None:
        parse_args(["--help"])
        return

    from searchconf.config.resolver import ConfigResolver
    from searchconf.config.settings import load_resolver_settings
    from searchconf.config.store import ConfigStoreError, FileConfigStore
    from searchconf.utils.logging import setup_logging

    dotenv_path = Path(".env")
    if dotenv_path.exists():
        load_dotenv(dotenv_path=dotenv_path, override=False)

    settings = load_resolver_settings(args.config)

    if args.verbose:
        settings.logging.level = "DEBUG"

    setup_logging(settings.logging)

    resolver = ConfigResolver(FileConfigStore(settings.config_path))

    if args.command == "show":
        _show(resolver, base=args.base, reveal=args.reveal)

    elif args.command == "get":
        try:
            print(resolver.get(args.path))
        except KeyError as e:
            print(f"Error: {e.args[0]}", file=sys.stderr)
            sys.exit(1)

    elif args.command == "set":
        try:
            update = parse_assignments(args.assignments)
            resolver.persist_update(update)
        except (ValueError, ConfigStoreError) as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        print(f"Updated {len(args.assignments)} setting(s) in {settings.config_path}")

    elif args.command == "env":
        _env(resolver)


if __name__ == "__main__":
    main()
