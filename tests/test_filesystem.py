"""Tests for codedigest.filesystem and codedigest.logging."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from codedigest.filesystem import LocalFileSystem
from codedigest.logging import configure_logging, get_logger
from codedigest.models import DirEntry


def test_list_entries_reports_directories(tmp_path: Path) -> None:
    (tmp_path / "pkg").mkdir()
    (tmp_path / "Main.java").write_text("class Main {}\n", encoding="utf-8")

    entries = sorted(LocalFileSystem().list_entries(tmp_path), key=lambda entry: entry.name)

    assert entries == [DirEntry("Main.java", False), DirEntry("pkg", True)]


def test_list_entries_raises_for_missing_directory(tmp_path: Path) -> None:
    with pytest.raises(OSError):
        LocalFileSystem().list_entries(tmp_path / "missing")


def test_write_text_truncates_then_appends(tmp_path: Path) -> None:
    filesystem = LocalFileSystem()
    target = tmp_path / "out" / "digest.txt"

    filesystem.write_text(target, "first")
    filesystem.write_text(target, "second")
    filesystem.write_text(target, "\nthird", mode="append")

    assert filesystem.read_text(target) == "second\nthird"


def test_write_text_rejects_unknown_mode(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        LocalFileSystem().write_text(tmp_path / "x.txt", "", mode="overwrite")  # type: ignore[arg-type]


def test_configure_logging_writes_to_log_file(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "run.log"
    logger = configure_logging(verbose=True, log_file=log_file)
    try:
        get_logger("walker").debug("Skipping directory %s", "build")
        for handler in logger.handlers:
            handler.flush()

        assert logger.level == logging.DEBUG
        assert get_logger("walker").name == "codedigest.walker"
        assert "codedigest.walker: Skipping directory build" in log_file.read_text(encoding="utf-8")
    finally:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        logger.setLevel(logging.NOTSET)
        logger.propagate = True


def test_list_entries_does_not_report_directory_symlinks_as_directories(tmp_path: Path) -> None:
    (tmp_path / "pkg").mkdir()
    (tmp_path / "pkg" / "loop").symlink_to(tmp_path / "pkg", target_is_directory=True)

    entries = LocalFileSystem().list_entries(tmp_path / "pkg")

    assert entries == [DirEntry("loop", False)]
