"""CLI behaviour tests."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from codedigest.cli import _build_parser, main


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    logger = logging.getLogger("codedigest")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


def test_cli_defaults() -> None:
    args = _build_parser().parse_args([])

    assert args.path == "."
    assert args.output is None
    assert args.mode is None
    assert args.names == []
    assert args.elide_bodies is None
    assert args.verbose is False


def test_cli_collects_repeated_options() -> None:
    args = _build_parser().parse_args(
        [
            "src",
            "--mode",
            "by-name",
            "--name",
            "BeanFactory",
            "--name",
            "BeanDefinition",
            "--exclude-dir",
            "test",
            "--include-dir",
            "core",
            "--elide-bodies",
            "-v",
        ]
    )

    assert args.path == "src"
    assert args.mode == "by-name"
    assert args.names == ["BeanFactory", "BeanDefinition"]
    assert args.exclude_dirs == ["test"]
    assert args.include_dirs == ["core"]
    assert args.elide_bodies is True
    assert args.verbose is True


def test_cli_rejects_unknown_mode() -> None:
    with pytest.raises(SystemExit):
        _build_parser().parse_args(["--mode", "everything"])


def test_main_writes_digest(tmp_path: Path, capsys) -> None:
    root = tmp_path / "repo"
    (root / "core").mkdir(parents=True)
    (root / "core" / "BeanFactory.java").write_text(
        "public class BeanFactory {\n    // lookup\n    public Object getBean(String name) {\n        return null;\n    }\n}\n",
        encoding="utf-8",
    )
    (root / "core" / "Other.java").write_text("class Other {\n}\n", encoding="utf-8")
    output = tmp_path / "out" / "digest.txt"

    main([str(root), "-o", str(output), "--mode", "by-name", "--name", "BeanFactory", "--elide-bodies"])

    captured = capsys.readouterr()
    assert "Merged 1 file(s)" in captured.out
    text = output.read_text(encoding="utf-8")
    assert f"=== {root.resolve() / 'core' / 'BeanFactory.java'} ===" in text
    assert "public Object getBean(String name) {\n}\n" in text
    assert "lookup" not in text
    assert "Other" not in text


def test_main_uses_config_file(tmp_path: Path, capsys) -> None:
    root = tmp_path / "repo"
    root.mkdir()
    (root / "App.java").write_text("class App {\n}\n", encoding="utf-8")
    (root / ".codedigest.yml").write_text("output: merged.txt\nmarker: '---'\n", encoding="utf-8")

    main([str(root)])

    text = (root / "merged.txt").read_text(encoding="utf-8")
    assert text.startswith(f"\n\n--- {root.resolve() / 'App.java'} ---\n\n")


def test_main_exits_for_missing_path(tmp_path: Path, capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main([str(tmp_path / "missing"), "-o", str(tmp_path / "out.txt")])

    assert excinfo.value.code == 1
    assert "not found" in capsys.readouterr().err


def test_main_exits_for_invalid_config(tmp_path: Path, capsys) -> None:
    (tmp_path / ".codedigest.yml").write_text("selection:\n  mode: nope\n", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        main([str(tmp_path)])

    assert excinfo.value.code == 1
    assert "Invalid configuration" in capsys.readouterr().err


def test_main_resolves_config_output_against_digested_root(tmp_path: Path, capsys) -> None:
    root = tmp_path / "repo"
    root.mkdir()
    (root / "App.java").write_text("class App {\n}\n", encoding="utf-8")
    config_file = tmp_path / "other" / ".codedigest.yml"
    config_file.parent.mkdir()
    config_file.write_text("output: merged.txt\n", encoding="utf-8")

    main([str(root), "--config", str(config_file)])

    assert (root / "merged.txt").exists()
    assert not (config_file.parent / "merged.txt").exists()
