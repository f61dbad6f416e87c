"""Directory value type."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Union

PathLike = Union[str, "os.PathLike[str]"]


@dataclass(frozen=True, order=True)
class Directory:
    """A non-empty path terminating in a directory.

    Package directories are stored relative to the monorepo root; the root
    itself is a ``Directory`` holding an absolute path. No validation is
    performed against the filesystem.
    """

    path: Path

    @classmethod
    def unchecked_from_path(cls, path: PathLike) -> "Directory":
        return cls(Path(path))

    def join(self, *parts: Union[PathLike, "Directory"]) -> Path:
        """Join path segments (or other directories) onto this directory."""
        return self.path.joinpath(*(Path(part) for part in parts))

    def __fspath__(self) -> str:
        return os.fspath(self.path)

    def __str__(self) -> str:
        return self.path.as_posix()
