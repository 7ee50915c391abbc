"""Logging helpers shared across the application."""

from __future__ import annotations

import logging
import sys

from loguru import logger as _loguru_logger
from tqdm.auto import tqdm


LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)

logger = logging.getLogger("uas_map")

_configured = False


class ProgressReporter:
    """Thin wrapper around tqdm for the build stages."""

    def __init__(self, total_steps: int, label: str = "Progress", *, disable: bool = False) -> None:
        self.total_steps = max(int(total_steps) if total_steps else 1, 1)
        self.label = label
        self.disable = disable
        self._tqdm = None
        self._finished = False

    def __enter__(self) -> "ProgressReporter":
        self._tqdm = tqdm(
            total=self.total_steps,
            desc=self.label,
            unit="step",
            leave=False,
            dynamic_ncols=True,
            disable=self.disable,
        )
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is not None:
            logger.error("%s failed: %s", self.label, exc)
            self._tqdm.close()
            return False
        if not self._finished:
            self.finish()
        return False

    def step(self, message: str) -> None:
        self._tqdm.update(1)
        if message:
            self._tqdm.set_postfix_str(message, refresh=False)
        logger.debug("%s: %s", self.label, message)

    def finish(self, message: str = "Done") -> None:
        if self._finished:
            return
        remaining = self.total_steps - self._tqdm.n
        if remaining > 0:
            self._tqdm.update(remaining)
        if message:
            self._tqdm.set_postfix_str(message, refresh=False)
        self._tqdm.close()
        self._finished = True


class InterceptHandler(logging.Handler):
    """Forward stdlib log records to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = _loguru_logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1
        _loguru_logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def _add_sink(verbose: bool) -> None:
    _loguru_logger.remove()
    _loguru_logger.add(
        sys.stderr,
        level="DEBUG" if verbose else "INFO",
        format=LOG_FORMAT,
        colorize=sys.stderr.isatty(),
    )


def configure_logging(verbose: bool = False) -> None:
    """Route the project logger through loguru; safe to call repeatedly."""
    global _configured
    _add_sink(verbose)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    if _configured:
        return
    logging.basicConfig(handlers=[InterceptHandler()], level=logging.DEBUG)
    _configured = True
