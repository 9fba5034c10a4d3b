"""Logging setup driven by ObservabilityConfig.

Modules log through ``logging.getLogger(__name__)`` and attach context
with ``extra={...}``. This module installs the root handler once: the
configured text format by default, or JSON lines (python-json-logger)
when ``structured`` is enabled so the ``extra`` fields are kept.
"""

from __future__ import annotations

import logging
from typing import Optional

from pythonjsonlogger import jsonlogger

from .config import ObservabilityConfig, get_config

_HANDLER_NAME = "safe_travel"


def _parse_level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(config: Optional[ObservabilityConfig] = None) -> logging.Logger:
    """Install the project log handler on the root logger.

    Calling it again replaces the previously installed handler instead
    of stacking a second one.

    Args:
        config: Observability settings (defaults to the global config).

    Returns:
        The configured root logger.
    """
    config = config or get_config().observability
    root = logging.getLogger()

    for handler in list(root.handlers):
        if handler.get_name() == _HANDLER_NAME:
            root.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    if config.structured:
        handler.setFormatter(jsonlogger.JsonFormatter(config.format))
    else:
        handler.setFormatter(logging.Formatter(config.format))

    root.addHandler(handler)
    root.setLevel(_parse_level(config.level))
    return root
