"""Locate the external build tool and run it against a project file."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Mapping, Sequence
import os
import time

from .command_runner import CommandRunner
from .errors import BuildToolNotFound, SubprocessLaunchFailure


DEFAULT_ENV_VAR = "SystemRoot"
DEFAULT_RELATIVE_PATH = Path("Microsoft.NET", "Framework", "v4.0.30319", "MSBuild.exe")
DEFAULT_BUILD_ARGUMENTS: tuple[str, ...] = (
    "/t:Build",
    "/nologo",
    "/clp:NoSummary;ErrorsOnly;",
    "/target:Compile",
    "/verbosity:quiet",
)


@dataclass(frozen=True, slots=True)
class BuildToolSettings:
    env_var: str = DEFAULT_ENV_VAR
    relative_path: Path = DEFAULT_RELATIVE_PATH
    path: Path | None = None
    arguments: tuple[str, ...] = field(default=DEFAULT_BUILD_ARGUMENTS)


@dataclass(slots=True)
class BuildOutcome:
    """Result of one build-tool invocation."""

    descriptor: Path
    command: Sequence[str]
    returncode: int
    stderr: str
    elapsed: float

    @property
    def succeeded(self) -> bool:
        return self.returncode == 0


def resolve_build_tool(settings: BuildToolSettings, env: Mapping[str, str] | None = None) -> Path:
    """Return the build tool executable, raising :class:`BuildToolNotFound` otherwise.

    An explicit ``settings.path`` wins; otherwise the tool lives at
    ``$<env_var>/<relative_path>``.
    """

    if settings.path is not None:
        tool = settings.path
    else:
        environ = os.environ if env is None else env
        root = environ.get(settings.env_var)
        if not root:
            raise BuildToolNotFound.missing_variable(settings.env_var)
        tool = Path(root) / settings.relative_path

    if not tool.is_file():
        raise BuildToolNotFound()
    return tool


def build_command(tool: Path, descriptor: Path, arguments: Sequence[str] = DEFAULT_BUILD_ARGUMENTS) -> List[str]:
    return [str(tool), *arguments, str(descriptor)]


def run_build(
    descriptor: Path,
    tool: Path,
    runner: CommandRunner,
    *,
    settings: BuildToolSettings | None = None,
    clock: Callable[[], float] = time.perf_counter,
) -> BuildOutcome:
    """Run the build tool synchronously and time it.

    Blocks until the tool exits; there is no timeout.
    """

    arguments = (settings or BuildToolSettings()).arguments
    command = build_command(tool, descriptor, arguments)

    started = clock()
    try:
        result = runner.run(command)
    except OSError as exc:
        raise SubprocessLaunchFailure.from_exception(exc) from exc
    elapsed = clock() - started

    return BuildOutcome(
        descriptor=descriptor,
        command=command,
        returncode=result.returncode,
        stderr=result.stderr,
        elapsed=elapsed,
    )


__all__ = [
    "BuildOutcome",
    "BuildToolSettings",
    "DEFAULT_BUILD_ARGUMENTS",
    "DEFAULT_ENV_VAR",
    "DEFAULT_RELATIVE_PATH",
    "build_command",
    "resolve_build_tool",
    "run_build",
]
