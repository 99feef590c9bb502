"""Wires the walker, reducers and emitter together for one digest run."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from .config import DigestConfig
from .emitter import Emitter
from .filesystem import FileSystem, LocalFileSystem
from .logging import get_logger
from .models import DigestError, DigestReport, SourceFile
from .path_filter import PathFilter
from .walker import TreeWalker

LOGGER = get_logger("runner")


class DigestRunner:
    """Produces a single digest file from a source tree."""

    def __init__(self, config: DigestConfig, filesystem: Optional[FileSystem] = None) -> None:
        self.config = config
        self.filesystem = filesystem or LocalFileSystem()

    def run(self) -> DigestReport:
        """Walk the configured root and write the digest.

        Per-file and per-directory failures are logged and collected in the
        report. Failing to create or truncate the output aborts the run.
        """
        root = self.config.root
        if not root.exists():
            raise FileNotFoundError(f"Source path not found: {root}")
        if not root.is_dir():
            raise NotADirectoryError(f"Source path is not a directory: {root}")

        output_path = self.config.output
        report = DigestReport(root=str(root), output_path=str(output_path))
        walker = TreeWalker(
            self.filesystem,
            PathFilter(self.config.policy),
            extension=self.config.extension,
            errors=report.errors,
        )

        LOGGER.debug("Writing digest of %s to %s", root, output_path)
        with Emitter(
            self.filesystem,
            output_path,
            marker=self.config.marker,
            elide_bodies=self.config.elide_bodies,
        ) as emitter:
            for path in walker.walk(root):
                if _same_file(path, output_path):
                    LOGGER.debug("Skipping digest output %s", path)
                    continue
                try:
                    text = self.filesystem.read_text(path)
                    emitter.emit(SourceFile(path=str(path), text=text))
                except (OSError, UnicodeDecodeError) as exc:
                    LOGGER.error("Failed to merge %s: %s", path, exc)
                    report.errors.append(DigestError(path=str(path), kind="file", message=str(exc)))
                    continue
                report.merged.append(str(path))

        LOGGER.info(
            "Merged %d file(s) into %s (%d error(s))",
            len(report.merged),
            output_path,
            len(report.errors),
        )
        return report


def _same_file(path: Path, other: Path) -> bool:
    try:
        return path.resolve() == other.resolve()
    except OSError:
        return False


__all__ = ["DigestRunner"]
