"""
config.py

Singleton-style resolver configuration using only a dataclass.
Provides a single package-wide instance that can be imported and used
across all modules to choose the platform strategy, the browser host used by
the web strategy, the optional log directory and the verbose flag.
"""

import os

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from hostidentity.exceptions.exceptions import ConfigurationError

STRATEGY_ENVID = "HOSTIDENTITY_STRATEGY"
VERBOSE_ENVID = "HOSTIDENTITY_VERBOSE"
LOG_DIR_ENVID = "HOSTIDENTITY_LOG_DIR"

STRATEGY_NAMES = ("unix", "windows", "apple", "web", "wasi", "redox", "fake")


@dataclass
class IdentityConfig:
    """
    Stores strategy selection, browser host, log directory and verbose flag.

    Attributes:
        strategy (Optional[str]): Strategy name override, ``None`` selects by platform.
        browser_host (Optional[Any]): Object exposing ``user_agent()``,
            ``languages()`` and ``platform()`` for the web strategy.
        log_dir (Optional[Path]): Directory for log files; console only when unset.
        verbose (bool): Enable debug logging to console.
    """

    strategy: Optional[str] = None
    browser_host: Optional[Any] = None
    log_dir: Optional[Path] = None
    verbose: bool = False


def _truthy(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def validate_strategy(name: Optional[str], source: str = "argument") -> Optional[str]:
    """
    Normalize a strategy name, raising ConfigurationError when unknown.

    Args:
        name (Optional[str]): Strategy name or ``None``/empty for automatic.
        source (str): Where the value came from, reported in the error.

    Returns:
        Optional[str]: Lowercase strategy name, or ``None`` for automatic.
    """
    if name is None or not name.strip():
        return None
    normalized = name.strip().lower()
    if normalized not in STRATEGY_NAMES:
        raise ConfigurationError(
            message=f'Unknown strategy "{name}", expected one of {", ".join(STRATEGY_NAMES)}.',
            step="config",
            config_source=source,
            invalid_key="strategy",
        )
    return normalized


def _log_dir_from(value: str) -> Path:
    log_dir = Path(value)
    if not log_dir.is_dir():
        raise ConfigurationError(
            message=f"Log directory {log_dir} does not exist.",
            step="config",
            config_source=LOG_DIR_ENVID,
            invalid_key="log_dir",
        )
    return log_dir


def load_from_environ(environ=None) -> IdentityConfig:
    """
    Populate the package-wide ``config`` from environment variables.

    Reads ``HOSTIDENTITY_STRATEGY``, ``HOSTIDENTITY_VERBOSE`` and
    ``HOSTIDENTITY_LOG_DIR``. Unset variables leave the current values alone.
    Each variable is checked on its own: an invalid one keeps its current
    value while the valid ones are still applied.

    Returns:
        IdentityConfig: The updated package-wide instance.

    Raises:
        ConfigurationError: Unknown strategy name or missing log directory,
            raised after every valid variable has been applied.
    """
    environ = os.environ if environ is None else environ
    errors = []

    if STRATEGY_ENVID in environ:
        try:
            config.strategy = validate_strategy(environ[STRATEGY_ENVID], STRATEGY_ENVID)
        except ConfigurationError as e:
            errors.append(e)
    if VERBOSE_ENVID in environ:
        config.verbose = _truthy(environ[VERBOSE_ENVID])
    if environ.get(LOG_DIR_ENVID):
        try:
            config.log_dir = _log_dir_from(environ[LOG_DIR_ENVID])
        except ConfigurationError as e:
            errors.append(e)

    if len(errors) == 1:
        raise errors[0]
    if errors:
        raise ConfigurationError(
            message=" ".join(e.message for e in errors),
            step="config",
            config_source="environment",
            invalid_key=", ".join(e.context["invalid_key"] for e in errors),
        )
    return config


# Create a SINGLE package-wide instance.
# This instance is populated from the environment on import of
# hostidentity.fallible and may be adjusted by hostidentity.cli.
config = IdentityConfig()
