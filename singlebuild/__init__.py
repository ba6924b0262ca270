"""Build the nearest project file found above a path."""
from __future__ import annotations

from .cli import main

__all__ = ["main"]
