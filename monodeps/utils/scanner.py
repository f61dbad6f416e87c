"""Directory scanning helpers used by package discovery."""

import fnmatch
import logging
import os
from pathlib import Path
from typing import Generator, List, Optional

logger = logging.getLogger("monodeps.utils.scanner")

ALWAYS_IGNORED = [".git", ".svn", ".hg", "node_modules"]


def load_gitignore_patterns(root_path: Path) -> List[str]:
    """Load patterns from .gitignore in the root path."""
    gitignore = root_path / ".gitignore"
    patterns: List[str] = []
    if not gitignore.is_file():
        return patterns
    try:
        with open(gitignore, "r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith(("#", "!")):
                    patterns.append(line.lstrip("/"))
    except OSError as exc:
        logger.debug("Failed to read .gitignore at %s: %s", gitignore, exc)
    return patterns


def is_ignored(relative_path: str, ignore_patterns: List[str]) -> bool:
    """Check a root-relative POSIX path against glob ignore patterns.

    A simplified gitignore match: a pattern matches the path itself, or any
    directory component of it (``node_modules`` ignores
    ``a/node_modules/b``). ``**/x/**`` patterns also match ``x`` at the root.
    """
    if relative_path in ("", "."):
        return False
    anchored = f"./{relative_path}/"
    parts = relative_path.split("/")

    for pattern in ignore_patterns:
        bare = pattern.rstrip("/")
        if fnmatch.fnmatch(relative_path, bare) or fnmatch.fnmatch(anchored, pattern):
            return True
        if "/" not in bare and any(fnmatch.fnmatch(part, bare) for part in parts):
            return True
    return False


def scan_files(
    root_path: Path,
    filename: str,
    ignore_patterns: Optional[List[str]] = None,
) -> Generator[Path, None, None]:
    """Recursively yield files named ``filename`` under ``root_path``.

    Ignored directories are not descended into. Entries are visited in
    sorted order so results are deterministic.

    Args:
        root_path: Root directory to scan.
        filename: Exact basename to look for, e.g. ``package.json``.
        ignore_patterns: Glob patterns to ignore.

    Yields:
        Path objects for matching files.
    """
    root_path = root_path.resolve()
    ignores = (ignore_patterns or []) + ALWAYS_IGNORED

    stack = [root_path]

    while stack:
        current_dir = stack.pop()

        try:
            entries = sorted(os.scandir(current_dir), key=lambda e: e.name)
        except PermissionError:
            logger.debug("Permission denied while scanning %s", current_dir)
            continue

        dirs = []
        for entry in entries:
            path = Path(entry.path)
            rel_path = path.relative_to(root_path).as_posix()
            if is_ignored(rel_path, ignores):
                continue

            if entry.is_dir(follow_symlinks=False):
                dirs.append(path)
            elif entry.name == filename:
                yield path

        # Reversed so popping keeps sorted order
        stack.extend(reversed(dirs))
