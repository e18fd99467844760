"""Logger setup shared by the CLI, the HTTP service and library callers."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Mapping

ROOT_LOGGER = "codeshift"
ENV_LOG_FILE = "CODESHIFT_LOG_FILE"

CONSOLE_FORMAT = "[codeshift] %(levelname)s %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``codeshift`` or a child such as ``codeshift.session``."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}" if name else ROOT_LOGGER)


def resolve_level(*, verbose: bool = False, quiet: bool = False) -> int:
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return logging.INFO


def configure_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    log_file: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> logging.Logger:
    """Attach console (and optionally file) handlers to the codeshift logger.

    ``verbose`` wins over ``quiet``. When ``log_file`` is not given,
    ``CODESHIFT_LOG_FILE`` is consulted. Existing handlers are replaced so the
    call is idempotent.
    """
    level = resolve_level(verbose=verbose, quiet=quiet)
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console)

    env = os.environ if environ is None else environ
    if log_file is None and env.get(ENV_LOG_FILE):
        log_file = Path(env[ENV_LOG_FILE]).expanduser()
    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        # The file always records debug detail, whatever the console shows.
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        logger.addHandler(file_handler)
        logger.setLevel(logging.DEBUG)

    return logger


__all__ = ["ENV_LOG_FILE", "configure_logging", "get_logger", "resolve_level"]
