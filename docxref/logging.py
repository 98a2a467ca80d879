"""Logging utilities for docxref runs."""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

_LOGGER_NAME = "docxref"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the docxref hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, quiet: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Configure the docxref logger with console output and an optional file sink.

    ``quiet`` limits console output to warnings so that reports written to
    stdout stay readable; the file sink always records at the run level.
    """
    level = logging.DEBUG if verbose else logging.INFO
    console_level = logging.WARNING if quiet and not verbose else level
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Reset handlers so repeated invocations in one process do not duplicate output.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(console_level)
    stream_handler.setFormatter(logging.Formatter("[docxref] %(levelname)s %(message)s"))
    logger.addHandler(stream_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


@contextmanager
def log_stage(logger: logging.Logger, stage: str) -> Iterator[None]:
    """Log the wall-clock duration of a pipeline stage at DEBUG level."""
    started = time.perf_counter()
    logger.debug("Stage %s started", stage)
    try:
        yield
    finally:
        elapsed = (time.perf_counter() - started) * 1000
        logger.debug("Stage %s finished in %.1f ms", stage, elapsed)


__all__ = ["configure_logging", "get_logger", "log_stage"]
