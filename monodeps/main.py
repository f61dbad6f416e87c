"""Main CLI entry point for monodeps.

Provides commands: list, deps, version, pack-name, cycles, order, check
"""

import argparse
import logging
import sys
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler

from monodeps.cli.check import check_command
from monodeps.cli.graph import cycles_command, order_command
from monodeps.cli.packages import (
    deps_command,
    list_command,
    pack_name_command,
    version_command,
)

logger = logging.getLogger("monodeps.cli")

CONFIG_HELP = (
    "Optional configuration. Can be a path to a TOML/JSON file or an "
    "inline TOML/JSON string. When omitted, <root>/monodeps.toml is "
    "used if present, else built-in defaults."
)


def setup_logging(verbose: bool = False, console: Optional[Console] = None) -> None:
    """Setup logging configuration with Rich integration.

    Args:
        verbose: Enable verbose logging.
        console: Rich Console instance for log output (defaults to stderr).
    """
    level = logging.DEBUG if verbose else logging.WARNING

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        log_time_format="[%H:%M:%S]",
    )

    logging.basicConfig(
        level=level,
        format="[%(name)s] %(message)s",
        handlers=[handler],
    )


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-r",
        "--root",
        default=".",
        help="Monorepo root directory (default: current directory)",
    )
    parser.add_argument(
        "-c",
        "--config",
        default=argparse.SUPPRESS,
        help=CONFIG_HELP,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="monodeps",
        description="monodeps - monorepo internal dependency graph",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "-c",
        "--config",
        default=None,
        help=CONFIG_HELP,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    list_parser = subparsers.add_parser("list", help="List internal packages")
    _add_common_arguments(list_parser)
    list_parser.add_argument("--json", action="store_true", help="Print JSON")

    deps_parser = subparsers.add_parser(
        "deps",
        help="Show the internal dependencies of a package",
    )
    _add_common_arguments(deps_parser)
    deps_parser.add_argument("package", help="Package name")
    deps_parser.add_argument(
        "-t",
        "--transitive",
        action="store_true",
        help="Include transitive internal dependencies",
    )
    deps_parser.add_argument("--json", action="store_true", help="Print JSON")

    version_parser = subparsers.add_parser(
        "version",
        help="Show the version a package declares for one of its dependencies",
    )
    _add_common_arguments(version_parser)
    version_parser.add_argument("package", help="Package name")
    version_parser.add_argument("dependency", help="Dependency name")

    pack_parser = subparsers.add_parser(
        "pack-name",
        help="Show the archive name `npm pack` produces for a package",
    )
    _add_common_arguments(pack_parser)
    pack_parser.add_argument("package", help="Package name")

    cycles_parser = subparsers.add_parser(
        "cycles",
        help="Report dependency cycles between internal packages",
    )
    _add_common_arguments(cycles_parser)
    cycles_parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help=(
            "Maximum number of cycles to report. Use <=0 for no limit "
            "(default: graph.cycle_limit from configuration)."
        ),
    )
    cycles_parser.add_argument(
        "--fail-on-cycle",
        action="store_true",
        help=(
            "Exit with non-zero status when dependency cycles are found. "
            "Useful for CI validation."
        ),
    )

    order_parser = subparsers.add_parser(
        "order",
        help="Print packages in dependency-first build order",
    )
    _add_common_arguments(order_parser)
    order_parser.add_argument("--json", action="store_true", help="Print JSON")

    check_parser = subparsers.add_parser(
        "check",
        help="Verify the root tsconfig.json references every TypeScript package",
    )
    _add_common_arguments(check_parser)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point.

    Returns:
        int: Exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    try:
        if args.command == "list":
            return list_command(args)
        elif args.command == "deps":
            return deps_command(args)
        elif args.command == "version":
            return version_command(args)
        elif args.command == "pack-name":
            return pack_name_command(args)
        elif args.command == "cycles":
            return cycles_command(args)
        elif args.command == "order":
            return order_command(args)
        elif args.command == "check":
            return check_command(args)
        else:
            parser.print_help()
            return 1
    except Exception as e:  # pylint: disable=broad-exception-caught
        logger.error("%s command failed: %s", args.command, e, exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
