"""CLI entrypoint for codedigest."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError, load_config
from .logging import configure_logging
from .runner import DigestRunner


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="codedigest",
        description="Merge the comment-free skeleton of a source tree into one digest file.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Root of the source tree (defaults to current directory).",
    )
    parser.add_argument(
        "-o",
        "--output",
        help="Digest file to write (defaults to output.txt under the root).",
    )
    parser.add_argument(
        "-c",
        "--config",
        help="Path to a .codedigest.yml file (defaults to the one under the root). Its relative output path is resolved against the root.",
    )
    parser.add_argument(
        "--mode",
        choices=["all", "by-name"],
        help="Merge every file, or only files whose name contains a --name token.",
    )
    parser.add_argument(
        "--name",
        dest="names",
        action="append",
        default=[],
        metavar="TOKEN",
        help="Filename substring to select in by-name mode (repeatable).",
    )
    parser.add_argument(
        "--exclude-dir",
        dest="exclude_dirs",
        action="append",
        default=[],
        metavar="NAME",
        help="Directory name to skip anywhere in the tree (repeatable).",
    )
    parser.add_argument(
        "--include-dir",
        dest="include_dirs",
        action="append",
        default=[],
        metavar="NAME",
        help="Only merge paths containing this directory name (repeatable).",
    )
    parser.add_argument(
        "--extension",
        help="Source file extension to merge (default: .java).",
    )
    parser.add_argument(
        "--elide-bodies",
        action="store_true",
        default=None,
        help="Collapse method bodies to empty blocks.",
    )
    parser.add_argument(
        "--marker",
        help="Text framing each file path in the digest (default: ===).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        help="Also write logs to this file.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for codedigest."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    root = Path(args.path).expanduser().resolve()
    try:
        config = load_config(Path(args.config) if args.config else root, root=root)
        config = config.with_overrides(
            output=str(Path(args.output).expanduser().resolve()) if args.output else None,
            extension=args.extension,
            elide_bodies=args.elide_bodies,
            marker=args.marker,
            mode=args.mode,
            names=args.names,
            exclude_dirs=args.exclude_dirs,
            include_dirs=args.include_dirs,
        )
    except ConfigError as exc:
        parser.exit(1, f"Invalid configuration: {exc}\n")

    try:
        report = DigestRunner(config).run()
    except (FileNotFoundError, NotADirectoryError) as exc:
        parser.exit(1, f"{exc}\n")
    except OSError as exc:
        parser.exit(1, f"codedigest failed: {exc}\nRun with --verbose for more details.\n")

    print(f"Merged {len(report.merged)} file(s) into {_relativize(Path(report.output_path))}")
    if report.errors:
        print(f"{len(report.errors)} file(s) or director(ies) could not be processed; see log for details")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
