"""Command line interface for singlebuild."""
from __future__ import annotations

from argparse import ArgumentParser, Namespace
from pathlib import Path
from typing import Iterable, Mapping
import os
import sys

from .build_tool import build_command, resolve_build_tool, run_build
from .command_runner import CommandRunner, DryRunCommandRunner, SubprocessCommandRunner
from .config_loader import ConfigError, load_settings, locate_config_file
from .console import Console
from .errors import BuildFailed, SingleBuildError
from .locator import find_descriptor, resolve_search_context
from .report import report_build


def _parse_arguments(argv: Iterable[str]) -> Namespace:
    parser = ArgumentParser(
        prog="singlebuild",
        description="Find the nearest project file above PATH and build it",
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=None,
        help="File or directory to start from (default: the executable's directory)",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="Path to a TOML/JSON/YAML configuration file",
    )
    parser.add_argument(
        "--dry-run",
        "-n",
        action="store_true",
        help="Show the build command without running it",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output (maps to debug)",
    )
    parser.add_argument(
        "--log",
        "-l",
        choices=sorted(Console.LEVELS, key=Console.LEVELS.get),
        default="none",
        help="Set log level (default: none)",
    )
    return parser.parse_args(list(argv))


def run(
    args: Namespace,
    console: Console,
    *,
    runner: CommandRunner | None = None,
    env: Mapping[str, str] | None = None,
) -> int:
    """Execute one search-and-build cycle, raising on any failure.

    The argument is validated before the configuration is read, so an
    invalid directory is reported ahead of any configuration problem.
    """

    context = resolve_search_context(args.path)
    console.debug(f"Start directory: {context.directory}")
    if context.file_name_hint:
        console.debug(f"File name hint: {context.file_name_hint}")

    environ = os.environ if env is None else env
    config_path = locate_config_file(args.config, environ)
    if config_path is not None:
        console.info(f"Using configuration from {config_path}")
    settings = load_settings(config_path)

    descriptor = find_descriptor(context, settings.pattern, console)
    console.info(f"Selected project file: {descriptor}")

    tool = resolve_build_tool(settings.build_tool, environ)
    console.debug(f"Build tool: {tool}")

    if args.dry_run:
        console.dry(f"Would build {descriptor}")
        (runner or DryRunCommandRunner()).run(
            build_command(tool, descriptor, settings.build_tool.arguments)
        )
        return 0

    outcome = run_build(
        descriptor,
        tool,
        runner or SubprocessCommandRunner(),
        settings=settings.build_tool,
    )
    report_build(outcome, console)
    if not outcome.succeeded:
        raise BuildFailed()
    return 0


def main(argv: Iterable[str] | None = None) -> int:
    args = _parse_arguments(sys.argv[1:] if argv is None else argv)
    log_level = "debug" if args.verbose else args.log
    console = Console(level=log_level, dry_run=args.dry_run)

    try:
        return run(args, console)
    except BuildFailed as exc:
        # report_build already printed the failure line
        return exc.exit_code
    except SingleBuildError as exc:
        if exc.__cause__ is not None:
            console.error(f"{type(exc.__cause__).__name__}: {exc.__cause__}")
        console.status(exc.message)
        return exc.exit_code
    except ConfigError as exc:
        console.status(str(exc))
        return exc.exit_code


__all__ = ["main", "run"]
