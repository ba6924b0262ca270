"""Console output handler with a configurable log level."""
from __future__ import annotations

import sys


class Console:
    """Simple console output handler.

    Levels: none < error < info < debug
    Default: 'none' (no diagnostics). Status lines written through
    :meth:`status` are always shown.
    """

    LEVELS = {
        "none": 0,
        "error": 1,
        "info": 2,
        "debug": 3,
    }

    def __init__(self, level: str = "none", dry_run: bool = False):
        self.level = self.LEVELS.get(level, 0)
        self.dry_run = dry_run

    def status(self, message: str) -> None:
        print(message)

    def info(self, message: str) -> None:
        if self.level >= self.LEVELS["info"]:
            print(f"[INFO] {message}")

    def error(self, message: str) -> None:
        if self.level >= self.LEVELS["error"]:
            print(f"[ERROR] {message}", file=sys.stderr)

    def dry(self, message: str) -> None:
        if self.dry_run:
            print(f"[DRY] {message}")

    def debug(self, message: str) -> None:
        if self.level >= self.LEVELS["debug"]:
            print(f"[DEBUG] {message}")
