"""Depth-first traversal of a source tree."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator, List, Optional

from .filesystem import FileSystem
from .logging import get_logger
from .models import DigestError
from .path_filter import PathFilter

LOGGER = get_logger("walker")


class TreeWalker:
    """Yields the files under a root that the path filter accepts.

    Traversal is depth-first and pre-order. Siblings are visited in
    lexicographic name order so that repeated runs produce identical output.
    A directory that cannot be listed is recorded in ``errors`` and its
    subtree skipped.
    """

    def __init__(
        self,
        filesystem: FileSystem,
        path_filter: PathFilter,
        extension: str = ".java",
        errors: Optional[List[DigestError]] = None,
    ) -> None:
        self.filesystem = filesystem
        self.path_filter = path_filter
        self.extension = extension.lower()
        self.errors: List[DigestError] = errors if errors is not None else []

    def walk(self, root: Path) -> Iterator[Path]:
        yield from self._walk(root, "")

    def _walk(self, directory: Path, rel_dir: str) -> Iterator[Path]:
        try:
            entries = self.filesystem.list_entries(directory)
        except OSError as exc:
            LOGGER.error("Failed to list directory %s: %s", directory, exc)
            self.errors.append(DigestError(path=str(directory), kind="traversal", message=str(exc)))
            return

        for entry in sorted(entries, key=lambda item: item.name):
            rel_path = f"{rel_dir}/{entry.name}" if rel_dir else entry.name
            full_path = directory / entry.name

            if entry.is_directory:
                if not self.path_filter.should_descend(rel_path):
                    LOGGER.debug("Skipping directory %s", full_path)
                    continue
                yield from self._walk(full_path, rel_path)
                continue

            if not entry.name.lower().endswith(self.extension):
                continue
            if not self.path_filter.should_emit(rel_path, entry.name):
                LOGGER.debug("Skipping file %s", full_path)
                continue
            yield full_path


__all__ = ["TreeWalker"]
