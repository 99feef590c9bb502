"""Logging utilities for codedigest runs."""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "codedigest"
_CONSOLE_PREFIX = "[codedigest]"


class ConsoleFormatter(logging.Formatter):
    """Compact console lines for per-file progress.

    INFO records (``Merged file: ...``) print as ``[codedigest] message``;
    other levels keep their level name so skips (DEBUG) and failures
    (WARNING/ERROR) stand out among the merge lines.
    """

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if record.levelno == logging.INFO:
            line = f"{_CONSOLE_PREFIX} {message}"
        else:
            line = f"{_CONSOLE_PREFIX} {record.levelname} {message}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the codedigest hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Configure the codedigest logger with console output and optional file sink.

    The file sink always records DEBUG so skipped directories and files can be
    audited after a quiet console run.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(logging.DEBUG if log_file is not None else level)
    logger.propagate = False

    # Reset handlers so repeated CLI invocations do not duplicate output.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(ConsoleFormatter())
    logger.addHandler(stream_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


__all__ = ["ConsoleFormatter", "configure_logging", "get_logger"]
