"""Append reduced source files to the digest output."""

from __future__ import annotations

from pathlib import Path

from .filesystem import FileSystem
from .logging import get_logger
from .models import OutputArtifact, SourceFile, TransformedFile
from .reducers import reduce_source

LOGGER = get_logger("emitter")


class Emitter:
    """Owns the output artifact for a single run.

    Entering the context truncates the output file once; every ``emit`` call
    appends one provenance block. Earlier blocks are never rewritten.
    """

    def __init__(
        self,
        filesystem: FileSystem,
        output_path: Path,
        *,
        marker: str = "===",
        elide_bodies: bool = False,
    ) -> None:
        self.filesystem = filesystem
        self.output_path = output_path
        self.elide_bodies = elide_bodies
        self.artifact = OutputArtifact(marker=marker)
        self._open = False

    def __enter__(self) -> "Emitter":
        self.filesystem.write_text(self.output_path, "", mode="truncate")
        self._open = True
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._open = False

    def transform(self, source: SourceFile) -> TransformedFile:
        return TransformedFile(path=source.path, text=reduce_source(source.text, elide=self.elide_bodies))

    def emit(self, source: SourceFile) -> TransformedFile:
        """Reduce ``source`` and append it to the output."""
        if not self._open:
            raise RuntimeError("Emitter must be entered before emitting files")
        transformed = self.transform(source)
        block = self.artifact.render_block(transformed)
        self.filesystem.write_text(self.output_path, block, mode="append")
        self.artifact.append(transformed)
        LOGGER.info("Merged file: %s", transformed.path)
        return transformed


__all__ = ["Emitter"]
