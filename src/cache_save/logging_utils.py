"""Logging setup shared by the save entry points."""

from __future__ import annotations

import logging
import threading

logger = logging.getLogger("cache_save")

WARNING_PREFIX = "[warning]"
LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"


def log_warning(message: str) -> None:
    logger.warning(f"{WARNING_PREFIX}{message}")


def configure_logging(level: str = "INFO") -> None:
    resolved = logging.getLevelName(level)
    logging.basicConfig(
        format=LOG_FORMAT,
        level=resolved if isinstance(resolved, int) else logging.INFO,
    )
    if not isinstance(resolved, int):
        log_warning(f"Unknown log level {level!r}, using INFO")


def install_thread_excepthook() -> None:
    """Downgrade exceptions leaking out of background upload threads to warnings.

    A failed chunk upload can close the archive while other worker threads are
    still reading it; those errors must not fail the surrounding job.
    """

    def _hook(args: threading.ExceptHookArgs) -> None:
        if args.exc_type is SystemExit:
            return
        log_warning(str(args.exc_value))

    threading.excepthook = _hook
