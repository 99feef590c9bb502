"""Configuration loading for codedigest (.codedigest.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .models import DEFAULT_EXCLUDED_DIRS, SelectionMode, SelectionPolicy

CONFIG_FILENAME = ".codedigest.yml"
DEFAULT_OUTPUT = "output.txt"
DEFAULT_EXTENSION = ".java"
DEFAULT_MARKER = "==="


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class SelectionConfig:
    """File selection settings from the ``selection`` mapping."""

    mode: SelectionMode = SelectionMode.ALL
    names: List[str] = field(default_factory=list)
    exclude_dirs: List[str] = field(default_factory=list)
    include_dirs: List[str] = field(default_factory=list)
    test_suffix: Optional[str] = None
    test_prefix: Optional[str] = None

    def to_policy(self) -> SelectionPolicy:
        """Build the immutable policy for a run; configured exclusions extend the defaults."""
        defaults = SelectionPolicy()
        return SelectionPolicy(
            mode=self.mode,
            excluded_dir_names=DEFAULT_EXCLUDED_DIRS | frozenset(self.exclude_dirs),
            included_dir_names=frozenset(self.include_dirs),
            name_tokens=frozenset(self.names),
            test_suffix=defaults.test_suffix if self.test_suffix is None else self.test_suffix,
            test_prefix=defaults.test_prefix if self.test_prefix is None else self.test_prefix,
        )


@dataclass
class DigestConfig:
    """Represents the settings of one digest run."""

    root: Path
    output: Path
    extension: str = DEFAULT_EXTENSION
    elide_bodies: bool = False
    marker: str = DEFAULT_MARKER
    selection: SelectionConfig = field(default_factory=SelectionConfig)

    @property
    def policy(self) -> SelectionPolicy:
        return self.selection.to_policy()

    def with_overrides(
        self,
        *,
        output: Optional[str] = None,
        extension: Optional[str] = None,
        elide_bodies: Optional[bool] = None,
        marker: Optional[str] = None,
        mode: Optional[str] = None,
        names: Sequence[str] = (),
        exclude_dirs: Sequence[str] = (),
        include_dirs: Sequence[str] = (),
    ) -> "DigestConfig":
        """Return a copy with command-line values applied on top of the file settings."""
        selection = replace(
            self.selection,
            mode=parse_mode(mode) if mode is not None else self.selection.mode,
            names=self.selection.names + list(names),
            exclude_dirs=self.selection.exclude_dirs + list(exclude_dirs),
            include_dirs=self.selection.include_dirs + list(include_dirs),
        )
        return replace(
            self,
            output=_resolve_output(self.root, output) if output is not None else self.output,
            extension=normalise_extension(extension) if extension is not None else self.extension,
            elide_bodies=self.elide_bodies if elide_bodies is None else elide_bodies,
            marker=marker if marker is not None else self.marker,
            selection=selection,
        )


def load_config(config_path: Path, root: Optional[Path] = None) -> DigestConfig:
    """Load configuration from disk.

    ``config_path`` may be the repository root or the configuration file
    itself. Missing files yield the defaults. ``root`` names the tree to
    digest when the file lives elsewhere; a relative ``output`` is resolved
    against it.
    """
    config_file = _resolve_config_path(config_path)
    root = root.expanduser().resolve() if root is not None else config_file.parent.resolve()

    if not config_file.exists():
        return DigestConfig(root=root, output=root / DEFAULT_OUTPUT)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    selection_data = _as_dict(data.get("selection"))
    selection = SelectionConfig()
    if selection_data:
        mode_value = _as_str(selection_data.get("mode"))
        if mode_value is not None:
            selection.mode = parse_mode(mode_value)
        selection.names = _as_str_list(selection_data.get("names"))
        selection.exclude_dirs = _as_str_list(selection_data.get("exclude_dirs"))
        selection.include_dirs = _as_str_list(selection_data.get("include_dirs"))
        selection.test_suffix = _as_str(selection_data.get("test_suffix"))
        selection.test_prefix = _as_str(selection_data.get("test_prefix"))

    extension = _as_str(data.get("extension"))
    marker = _as_str(data.get("marker"))

    return DigestConfig(
        root=root,
        output=_resolve_output(root, _as_str(data.get("output"))),
        extension=normalise_extension(extension) if extension else DEFAULT_EXTENSION,
        elide_bodies=_as_bool(data.get("elide_bodies")) or False,
        marker=marker or DEFAULT_MARKER,
        selection=selection,
    )


def parse_mode(value: str) -> SelectionMode:
    """Parse ``all`` / ``by_name`` (``by-name`` accepted) into a selection mode."""
    normalised = value.strip().lower().replace("-", "_")
    try:
        return SelectionMode(normalised)
    except ValueError:
        choices = ", ".join(mode.value for mode in SelectionMode)
        raise ConfigError(f"Unknown selection mode '{value}' (expected one of: {choices})") from None


def normalise_extension(value: str) -> str:
    value = value.strip().lower()
    if value and not value.startswith("."):
        value = f".{value}"
    return value


def _resolve_output(root: Path, value: Optional[str]) -> Path:
    if not value:
        return root / DEFAULT_OUTPUT
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = root / path
    return path.resolve()


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_file() or config_path.suffix in {".yml", ".yaml"}:
        return config_path.resolve()
    return (config_path / CONFIG_FILENAME).resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "DigestConfig",
    "SelectionConfig",
    "load_config",
    "normalise_extension",
    "parse_mode",
]
