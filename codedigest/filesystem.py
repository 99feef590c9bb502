"""Filesystem access used by the walker and the emitter."""

from __future__ import annotations

import os
from pathlib import Path
from typing import List, Literal, Protocol

from .models import DirEntry

WriteMode = Literal["truncate", "append"]


class FileSystem(Protocol):
    """Minimal filesystem surface the digest pipeline depends on."""

    def list_entries(self, directory: Path) -> List[DirEntry]:
        """Return the entries of ``directory``; raises ``OSError`` on failure."""
        ...

    def read_text(self, path: Path) -> str:
        """Return the decoded contents of ``path``."""
        ...

    def write_text(self, path: Path, content: str, mode: WriteMode = "truncate") -> None:
        """Write ``content`` to ``path``, truncating or appending."""
        ...


class LocalFileSystem:
    """UTF-8 text access to the local disk."""

    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    def list_entries(self, directory: Path) -> List[DirEntry]:
        entries: List[DirEntry] = []
        with os.scandir(directory) as iterator:
            for entry in iterator:
                try:
                    # Symlinked directories are not followed, so link cycles cannot recurse.
                    is_directory = entry.is_dir(follow_symlinks=False)
                except OSError:
                    is_directory = False
                entries.append(DirEntry(name=entry.name, is_directory=is_directory))
        return entries

    def read_text(self, path: Path) -> str:
        return Path(path).read_text(encoding=self.encoding)

    def write_text(self, path: Path, content: str, mode: WriteMode = "truncate") -> None:
        target = Path(path)
        if mode == "truncate":
            target.parent.mkdir(parents=True, exist_ok=True)
            open_mode = "w"
        elif mode == "append":
            open_mode = "a"
        else:
            raise ValueError(f"Unsupported write mode: {mode}")
        with target.open(open_mode, encoding=self.encoding, newline="") as handle:
            handle.write(content)


__all__ = ["FileSystem", "LocalFileSystem", "WriteMode"]
