"""Mini README: Application-wide logging helpers for the courier ledger.

Structure:
    * level_for_environment - map the settings environment label to a level.
    * configure_root_logger - attach one formatted stream handler, then only adjust levels.
    * get_logger - factory returning module loggers with the baseline configuration.

Usage:
    Modules call ``get_logger(__name__)`` at import time, which installs the
    handler at INFO. Entry points then call
    ``configure_root_logger(level_for_environment(settings.environment))`` to
    switch development runs to DEBUG without adding a second handler.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

_HANDLER: Optional[logging.Handler] = None

_ENVIRONMENT_LEVELS = {
    "development": logging.DEBUG,
    "test": logging.WARNING,
    "production": logging.INFO,
}


def level_for_environment(environment: str) -> int:
    """Return the log level for an environment label, INFO when unknown."""

    return _ENVIRONMENT_LEVELS.get(environment.strip().lower(), logging.INFO)


def configure_root_logger(level: Union[int, str] = logging.INFO) -> None:
    """Install the ledger's stream handler once and apply ``level`` to the root logger."""

    global _HANDLER
    root_logger = logging.getLogger()
    root_logger.setLevel(level if isinstance(level, int) else level.upper())
    if _HANDLER is not None:
        return

    _HANDLER = logging.StreamHandler()
    _HANDLER.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root_logger.addHandler(_HANDLER)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-specific logger, installing the handler on first use."""

    if _HANDLER is None:
        configure_root_logger()
    return logging.getLogger(name)
