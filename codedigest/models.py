"""Core data models shared across codedigest components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, List, Tuple

DEFAULT_EXCLUDED_DIRS: FrozenSet[str] = frozenset(
    {
        ".git",
        ".hg",
        ".svn",
        ".idea",
        "node_modules",
    }
)


class SelectionMode(str, Enum):
    """How files that survive the directory filters are selected."""

    ALL = "all"
    BY_NAME = "by_name"


@dataclass(frozen=True)
class SelectionPolicy:
    """Declarative rules deciding which directories and files feed the digest."""

    mode: SelectionMode = SelectionMode.ALL
    excluded_dir_names: FrozenSet[str] = DEFAULT_EXCLUDED_DIRS
    included_dir_names: FrozenSet[str] = frozenset()
    name_tokens: FrozenSet[str] = frozenset()
    test_dir_name: str = "test"
    test_suffix: str = "Test.java"
    test_prefix: str = "Test"

    def __post_init__(self) -> None:
        # Accept any iterable of names from callers; store them frozen.
        object.__setattr__(self, "excluded_dir_names", frozenset(self.excluded_dir_names))
        object.__setattr__(self, "included_dir_names", frozenset(self.included_dir_names))
        object.__setattr__(self, "name_tokens", frozenset(self.name_tokens))


@dataclass(frozen=True)
class DirEntry:
    """A single directory listing entry."""

    name: str
    is_directory: bool


@dataclass(frozen=True)
class SourceFile:
    """Raw contents of a selected file."""

    path: str
    text: str


@dataclass(frozen=True)
class TransformedFile:
    """Reduced contents of a source file, ready to be appended."""

    path: str
    text: str


@dataclass
class OutputArtifact:
    """Append-only log of transformed files in the order they were emitted."""

    marker: str = "==="
    _entries: List[TransformedFile] = field(default_factory=list)

    def append(self, entry: TransformedFile) -> None:
        self._entries.append(entry)

    def render_block(self, entry: TransformedFile) -> str:
        return f"\n\n{self.marker} {entry.path} {self.marker}\n\n{entry.text}"

    def render(self) -> str:
        return "".join(self.render_block(entry) for entry in self._entries)

    @property
    def entries(self) -> Tuple[TransformedFile, ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


@dataclass(frozen=True)
class DigestError:
    """A non-fatal failure recorded during a run."""

    path: str
    kind: str
    message: str


@dataclass
class DigestReport:
    """Outcome of a digest run."""

    root: str
    output_path: str
    merged: List[str] = field(default_factory=list)
    errors: List[DigestError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors
