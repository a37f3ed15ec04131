"""
Logging for the prompt playground.

Every module logger hangs off the ``promptplayground`` package logger.
Console output goes to stderr; stdout carries the CLI's JSON.
"""

import json
import logging
import sys
import time
from pathlib import Path
from typing import Any, Optional


DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

ROOT_LOGGER_NAME = "promptplayground"
PACKAGE_NAME = "prompt_playground"

_configured = False


def setup_logging(
    level: str = "INFO",
    format_string: Optional[str] = None,
    log_file: Optional[Path | str] = None,
    console: bool = True,
) -> logging.Logger:
    """
    Configure the package logger.

    Calling it again replaces the handlers installed by the previous call,
    so the CLI can reconfigure once the config file has been read.

    Args:
        level: Log level name (unknown names fall back to INFO)
        format_string: Custom format string (uses DEFAULT_FORMAT if None)
        log_file: Optional path to a log file; parent dirs are created
        console: Whether to log to stderr

    Returns:
        The package logger
    """
    global _configured

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    formatter = logging.Formatter(format_string or DEFAULT_FORMAT, datefmt=DEFAULT_DATE_FORMAT)

    package_logger = logging.getLogger(ROOT_LOGGER_NAME)
    package_logger.setLevel(numeric_level)
    package_logger.handlers.clear()

    handlers = []
    if console:
        handlers.append(logging.StreamHandler(sys.stderr))
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding='utf-8'))

    for handler in handlers:
        handler.setLevel(numeric_level)
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)

    _configured = True
    return package_logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a module logger under the package logger.

    ``prompt_playground.engine.orchestrator`` becomes
    ``promptplayground.engine.orchestrator``.
    """
    if not _configured:
        setup_logging()

    if name.startswith(PACKAGE_NAME + "."):
        name = name[len(PACKAGE_NAME) + 1:]
    if not name.startswith(ROOT_LOGGER_NAME):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def _format_fields(fields: dict) -> str:
    return ", ".join(f"{k}={v}" for k, v in fields.items() if v is not None)


class LogContext:
    """
    Logs the start and end of a run or comparison.

    The mode and any extra fields are logged on entry. Outcome fields
    added with ``note()`` are logged on exit together with the duration.
    A failure is logged at ERROR and re-raised.

    Example:
        with LogContext(logger, "Run", mode="batched", samples=4) as run_log:
            ...
            run_log.note(results=4, failed=1)
    """

    def __init__(self, logger: logging.Logger, operation: str, mode: Optional[str] = None, **fields):
        self.logger = logger
        self.operation = operation
        self.fields = {"mode": mode, **fields}
        self.outcome: dict = {}
        self._started = 0.0

    def note(self, **outcome) -> None:
        """Record outcome fields for the exit message."""
        self.outcome.update(outcome)

    def __enter__(self) -> 'LogContext':
        self._started = time.perf_counter()
        self.logger.info(f"{self.operation} started ({_format_fields(self.fields)})")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        elapsed = time.perf_counter() - self._started

        if exc_type is None:
            summary = _format_fields(self.outcome)
            suffix = f": {summary}" if summary else ""
            self.logger.info(f"{self.operation} finished in {elapsed:.2f}s{suffix}")
        else:
            self.logger.error(
                f"{self.operation} failed after {elapsed:.2f}s - {exc_type.__name__}: {exc_val}"
            )
        return False


class SampleProgress:
    """
    Reports batched sampling one variant at a time.

    Example:
        progress = SampleProgress(logger, total=6)
        for variant in variants:
            ...
            progress.advance(temperature=variant.temperature, failed=False)
        progress.finish()
    """

    def __init__(self, logger: logging.Logger, total: int):
        self.logger = logger
        self.total = total
        self.done = 0
        self.failed = 0

    def advance(self, failed: bool = False, **params) -> None:
        """Log one finished sample with the parameters it was drawn with."""
        self.done += 1
        if failed:
            self.failed += 1
        status = " [failed]" if failed else ""
        self.logger.info(f"Sample {self.done}/{self.total} ({_format_fields(params)}){status}")

    def finish(self) -> None:
        level = logging.WARNING if self.failed else logging.INFO
        self.logger.log(level, f"Sampled {self.done}/{self.total} variants, {self.failed} failed")


def log_exception(logger: logging.Logger, message: str, exc: Exception) -> None:
    """Log an exception with its traceback at ERROR level."""
    logger.error(f"{message}: {type(exc).__name__}: {exc}", exc_info=True)


def log_json(logger: logging.Logger, message: str, data: Any, level: int = logging.DEBUG) -> None:
    """
    Log a JSON payload, pretty-printed.

    Serialization is skipped when the level is disabled.
    """
    if not logger.isEnabledFor(level):
        return
    formatted = json.dumps(data, indent=2, default=str, ensure_ascii=False)
    logger.log(level, f"{message}:\n{formatted}")
