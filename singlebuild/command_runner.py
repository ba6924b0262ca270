"""Utilities for executing the build tool with optional dry-run support."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence
import shlex
import subprocess


@dataclass
class CommandResult:
    """Represents the outcome of an executed command."""

    command: Sequence[str]
    returncode: int
    stderr: str


class CommandRunner:
    """Abstract command runner interface."""

    def run(self, command: Sequence[str]) -> CommandResult:
        raise NotImplementedError

    def format_command(self, command: Sequence[str]) -> str:
        return " ".join(shlex.quote(str(part)) for part in command)


class SubprocessCommandRunner(CommandRunner):
    """Command runner that executes commands via :mod:`subprocess`.

    Standard output is inherited from the parent so the build tool writes
    straight to the console; only the error stream is captured.
    """

    @staticmethod
    def _creation_flags() -> int:
        # Only defined on Windows.
        return getattr(subprocess, "CREATE_NO_WINDOW", 0)

    def run(self, command: Sequence[str]) -> CommandResult:
        process = subprocess.run(
            [str(part) for part in command],
            stderr=subprocess.PIPE,
            text=True,
            errors="replace",
            check=False,
            creationflags=self._creation_flags(),
        )
        return CommandResult(
            command=command,
            returncode=process.returncode,
            stderr=process.stderr or "",
        )


class RecordingCommandRunner(CommandRunner):
    """Command runner that records commands instead of executing them.

    ``returncode`` and ``stderr`` are handed back for every recorded command,
    which lets callers simulate a failing build tool.
    """

    def __init__(self, *, returncode: int = 0, stderr: str = "") -> None:
        self.commands: List[List[str]] = []
        self.returncode = returncode
        self.stderr = stderr

    def run(self, command: Sequence[str]) -> CommandResult:
        self.commands.append([str(part) for part in command])
        return CommandResult(command=command, returncode=self.returncode, stderr=self.stderr)


class DryRunCommandRunner(CommandRunner):
    """Command runner that prints commands instead of executing them."""

    def run(self, command: Sequence[str]) -> CommandResult:
        print(f"[DRY] {self.format_command(command)}")
        return CommandResult(command=command, returncode=0, stderr="")


__all__ = [
    "CommandResult",
    "CommandRunner",
    "DryRunCommandRunner",
    "RecordingCommandRunner",
    "SubprocessCommandRunner",
]
