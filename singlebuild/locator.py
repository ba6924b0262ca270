"""Resolve the starting directory and walk upward to the nearest project file."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence
import fnmatch
import os
import sys

from .console import Console
from .errors import DescriptorNotFound, InvalidArgument, InvalidDirectory


DEFAULT_PATTERN = "*.csproj"


@dataclass(slots=True)
class SearchContext:
    """Directory currently being scanned plus the optional file-name hint."""

    directory: Path
    file_name_hint: str = ""


def default_directory() -> Path:
    """Directory holding the running executable."""
    return Path(os.path.abspath(sys.argv[0])).parent


def resolve_search_context(path: str | None) -> SearchContext:
    """Turn the command-line argument into a :class:`SearchContext`.

    A file argument contributes its name as the hint; anything else is
    treated as a directory and must exist. Symlinks are kept as given.
    """

    if path is None:
        candidate = default_directory()
    elif path == "":
        raise InvalidArgument()
    else:
        candidate = Path(os.path.abspath(os.path.expanduser(path)))

    if candidate.is_file():
        return SearchContext(directory=candidate.parent, file_name_hint=candidate.name)
    if not candidate.is_dir():
        raise InvalidDirectory()
    return SearchContext(directory=candidate)


def list_descriptors(directory: Path, pattern: str = DEFAULT_PATTERN) -> List[Path]:
    """Regular files in ``directory`` matching ``pattern``, ignoring case."""
    folded = pattern.lower()
    return sorted(
        path
        for path in directory.iterdir()
        if fnmatch.fnmatchcase(path.name.lower(), folded) and path.is_file()
    )


def file_contains(path: Path, text: str) -> bool:
    with path.open("r", encoding="utf-8-sig", errors="replace") as handle:
        return any(text in line for line in handle)


def select_descriptor(candidates: Sequence[Path], hint: str, console: Console | None = None) -> Path | None:
    """Pick the candidate to build; ``None`` when the hint matches nothing.

    A candidate that cannot be read counts as not mentioning the hint.
    """

    if not candidates:
        return None
    if not hint:
        return candidates[0]
    for candidate in candidates:
        try:
            if file_contains(candidate, hint):
                return candidate
        except OSError as exc:
            if console:
                console.debug(f"Skipping unreadable {candidate.name}: {exc}")
            continue
        if console:
            console.debug(f"{candidate.name} does not reference {hint}")
    return None


def find_descriptor(
    context: SearchContext,
    pattern: str = DEFAULT_PATTERN,
    console: Console | None = None,
) -> Path:
    """Walk from ``context.directory`` towards the root until a project file is found.

    The walk stops in the first directory holding any candidate. When a hint
    is set and none of those candidates mention it, the search fails there
    instead of continuing upward.
    """

    while True:
        if console:
            console.debug(f"Searching {context.directory} for {pattern}")
        try:
            candidates = list_descriptors(context.directory, pattern)
        except OSError as exc:
            if console:
                console.debug(f"Cannot list {context.directory}: {exc}")
            candidates = []
        if candidates:
            selected = select_descriptor(candidates, context.file_name_hint, console)
            if selected is None:
                raise DescriptorNotFound.for_pattern(pattern)
            return selected

        parent = context.directory.parent
        if parent == context.directory:
            raise DescriptorNotFound.for_pattern(pattern)
        context.directory = parent


__all__ = [
    "DEFAULT_PATTERN",
    "SearchContext",
    "default_directory",
    "file_contains",
    "find_descriptor",
    "list_descriptors",
    "resolve_search_context",
    "select_descriptor",
]
