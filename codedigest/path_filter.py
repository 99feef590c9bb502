"""Directory and file selection predicates."""

from __future__ import annotations

from typing import Iterable

from .models import SelectionMode, SelectionPolicy


def _normalise(path: str) -> str:
    return "/" + path.replace("\\", "/").strip("/") + "/"


def contains_segment(path: str, name: str) -> bool:
    """Return True when ``name`` occurs in ``path`` as whole segment(s) or as its suffix."""
    name = name.replace("\\", "/").strip("/")
    if not name:
        return False
    return f"/{name}/" in _normalise(path)


def _contains_any(path: str, names: Iterable[str]) -> bool:
    return any(contains_segment(path, name) for name in names)


class PathFilter:
    """Pure accept/reject decisions for the tree walker.

    Paths are POSIX-style and relative to the walk root, so the location of
    the root itself never affects selection.
    """

    def __init__(self, policy: SelectionPolicy) -> None:
        self.policy = policy

    def is_included(self, path: str) -> bool:
        if not self.policy.included_dir_names:
            return True
        return _contains_any(path, self.policy.included_dir_names)

    def is_excluded_dir(self, path: str) -> bool:
        if not self.is_included(path):
            return True
        return _contains_any(path, self.policy.excluded_dir_names)

    def is_test_artifact(self, path: str, filename: str) -> bool:
        policy = self.policy
        if policy.test_dir_name and contains_segment(path, policy.test_dir_name):
            return True
        if policy.test_suffix and filename.endswith(policy.test_suffix):
            return True
        if policy.test_prefix and filename.startswith(policy.test_prefix):
            return True
        return False

    def should_descend(self, dir_path: str) -> bool:
        return not self.is_excluded_dir(dir_path)

    def should_emit(self, file_path: str, filename: str) -> bool:
        if self.is_excluded_dir(file_path) or self.is_test_artifact(file_path, filename):
            return False
        if self.policy.mode is SelectionMode.ALL:
            return True
        return any(token in filename for token in self.policy.name_tokens)


__all__ = ["PathFilter", "contains_segment"]
