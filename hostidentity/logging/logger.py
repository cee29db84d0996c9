"""
logger.py - Custom logging utilities for hostidentity with emoji support and Unix-style stream separation.

This module provides the logging system used by the strategies, the fallback
normalizer and the CLI, designed to:

- Separate console output by stream:
    - DEBUG and INFO messages: `stdout`
    - WARNING, ERROR, and CRITICAL messages: `stderr`
- Provide optional emoji prefixes for log levels to improve readability
- Include millisecond-precision timestamps in all messages
- Optionally log to files with full tracebacks when a log directory is configured:
    - `{log_name}-stdout.log`: DEBUG and INFO messages
    - `{log_name}-stderr.log`: WARNING, ERROR, and CRITICAL messages
- Keep console output clean by suppressing tracebacks unless verbose mode is enabled
- Isolate logger instances by `log_name` so strategies do not share handlers

Thread-safety note: Handlers themselves are thread-safe, but the logger does not
synchronize access across multiple threads writing to the same files.
"""

import logging
import sys
import uuid

from logging import StreamHandler, FileHandler
from pathlib import Path
from datetime import datetime
from typing import Optional, Union


from hostidentity import __package_name__
from hostidentity.config import config
from hostidentity.exceptions.exceptions import ConfigurationError


class EmojiFormatter(logging.Formatter):
    """Formatter that prepends emoji and uses millisecond timestamps."""

    EMOJI_MAP = {
        logging.ERROR: "❌",
        logging.WARNING: "⚠️",
        logging.INFO: "ℹ️",
        logging.DEBUG: "🔍",
    }

    def __init__(self, include_exc_info=True):
        super().__init__()
        self.include_exc_info = include_exc_info

    def formatTime(self, record, datefmt=None):
        ct = self.converter(record.created)
        return (
            f"{ct.tm_year:04d}-{ct.tm_mon:02d}-{ct.tm_mday:02d} "
            f"{ct.tm_hour:02d}:{ct.tm_min:02d}:{ct.tm_sec:02d},{int(record.msecs):03d}"
        )

    def format(self, record):
        emoji = getattr(record, "emoji", None)
        if emoji is None:
            emoji = self.EMOJI_MAP.get(record.levelno, "")
        level = record.levelname.upper()
        msg = record.getMessage()

        formatted = f"{self.formatTime(record)} - {level} - {emoji} {msg}"
        if self.include_exc_info and record.exc_info:
            formatted += "\n" + self.formatException(record.exc_info)

        return formatted


class IdentityLogger:
    """Logger with emoji support, console streams and optional per-instance log files."""

    def __init__(
        self, log_name: str, log_dir: Optional[Path] = None, verbose: bool = False
    ):
        short_uuid = uuid.uuid4().hex[:4]
        log_name_with_uuid = f"{log_name}-{short_uuid}"
        self.logger = logging.getLogger(f"{__package_name__}-{log_name_with_uuid}")

        if self.logger.hasHandlers():
            self.logger.handlers.clear()

        self.logger.setLevel(logging.DEBUG)
        self.logger.propagate = False  # prevent duplication to root

        console_formatter = EmojiFormatter(include_exc_info=verbose)

        sh_out = StreamHandler(sys.stdout)
        sh_out.setLevel(logging.DEBUG if verbose else logging.INFO)
        sh_out.addFilter(lambda r: r.levelno <= logging.INFO)
        sh_out.setFormatter(console_formatter)

        sh_err = StreamHandler(sys.stderr)
        sh_err.setLevel(logging.WARNING)
        sh_err.setFormatter(console_formatter)

        self.logger.addHandler(sh_out)
        self.logger.addHandler(sh_err)

        if log_dir is None:
            return

        log_path = log_dir / f"{log_name_with_uuid}-stdout.log"
        error_path = log_dir / f"{log_name_with_uuid}-stderr.log"

        file_formatter = EmojiFormatter(include_exc_info=True)

        try:
            fh = FileHandler(log_path, mode="a", encoding="utf-8")
            fh.setLevel(logging.DEBUG)
            fh.addFilter(lambda r: r.levelno <= logging.INFO)
            fh.setFormatter(file_formatter)

            eh = FileHandler(error_path, mode="a", encoding="utf-8")
            eh.setLevel(logging.WARNING)
            eh.setFormatter(file_formatter)

        except OSError as e:
            raise ConfigurationError(
                message="Failed to initialize per-instance file logging.",
                step="logging",
                context={"log_dir": str(log_dir), "error": str(e)},
            ) from e

        self.logger.addHandler(fh)
        self.logger.addHandler(eh)

    def log_debug(self, msg, emoji=None):
        """
        Log a debug message.

        Args:
            msg: The message to log.
            emoji: Optional custom emoji to override the default 🔍.
        """
        self.logger.debug(msg, extra={"emoji": emoji} if emoji else {})

    def log_info(self, msg, emoji=None):
        """
        Log an info message.

        Args:
            msg: The message to log.
            emoji: Optional custom emoji to override the default ℹ️.
        """
        self.logger.info(msg, extra={"emoji": emoji} if emoji else {})

    def log_warning(self, msg, emoji=None):
        """
        Log a warning message.

        Args:
            msg: The message to log.
            emoji: Optional custom emoji to override the default ⚠️.
        """
        self.logger.warning(msg, extra={"emoji": emoji} if emoji else {})

    def log_error(self, msg, emoji=None, exc_info=False):
        """
        Log an error message.

        Args:
            msg: The message to log.
            emoji: Optional custom emoji to override the default ❌.
            exc_info: If True, include exception traceback in file logs
                      (not console to make logs clean).
        """
        self.logger.error(
            msg, extra={"emoji": emoji} if emoji else {}, exc_info=exc_info
        )


def get_logger(
    log_dir: Optional[Union[str, Path]] = None,
    verbose: Optional[bool] = False,
    log_name: Optional[str] = None,
) -> IdentityLogger:
    """
    Create a configured IdentityLogger instance.

    A unique `log_name` is generated when none is provided so that multiple
    logger instances remain isolated.

    Args:
        log_dir (Optional[str, Path]): Directory where log files will be stored.
            When None, only console handlers are attached. When given, the
            directory must exist.
        verbose (Optional[bool]): If True, debug messages reach the console and
            console output includes full tracebacks.
        log_name (Optional[str]): Optional name for the logger and its log files.
            If not provided, a timestamped name is generated
            (format: hostidentity-YYYYMMDD-HHMMSS-fff).

    Returns:
        IdentityLogger: A configured logger instance.
    """
    if not log_name:
        suffix = datetime.now().strftime("%Y%m%d-%H%M%S-%f")[:-3]
        log_name = f"{__package_name__}-{suffix}"

    if log_dir is None:
        return IdentityLogger(log_name, None, bool(verbose))

    p = Path(log_dir)
    if not p.is_dir():
        raise ConfigurationError(
            message="log_dir must be an existing directory",
            step="logging",
            invalid_key="log_dir",
            context={"log_dir": str(p)},
        )
    return IdentityLogger(log_name, p, bool(verbose))


_configured = {}


def configured_logger(log_name: str) -> IdentityLogger:
    """
    Return the logger for `log_name` built from the package-wide ``config``.

    The instance is cached and rebuilt whenever ``config.log_dir`` or
    ``config.verbose`` change, so settings applied after import (by the CLI or
    by callers) take effect on the next message. The replaced instance has
    its handlers closed.

    Args:
        log_name (str): Name for the logger and its log files.

    Returns:
        IdentityLogger: Logger matching the current configuration.
    """
    key = (config.log_dir, bool(config.verbose))
    cached = _configured.get(log_name)
    if cached is not None and cached[0] == key:
        return cached[1]

    logger = get_logger(config.log_dir, verbose=config.verbose, log_name=log_name)
    if cached is not None:
        for handler in list(cached[1].logger.handlers):
            handler.close()
            cached[1].logger.removeHandler(handler)
    _configured[log_name] = (key, logger)
    return logger
