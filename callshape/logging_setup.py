"""Apply LoggingConfig to the package logger."""

import logging
from typing import Optional

from .config import LoggingConfig, get_config

_HANDLER_NAME = 'callshape'


def configure_logging(config: Optional[LoggingConfig] = None) -> logging.Logger:
    """
    Configure the ``callshape`` logger from ``config`` (global config if None).

    A single stream handler is installed; calling again updates its level and
    format instead of adding another handler.
    """
    if config is None:
        config = get_config().logging

    package_logger = logging.getLogger('callshape')
    package_logger.setLevel(config.level.to_logging_level())

    handler = next(
        (h for h in package_logger.handlers if h.get_name() == _HANDLER_NAME),
        None,
    )
    if handler is None:
        handler = logging.StreamHandler()
        handler.set_name(_HANDLER_NAME)
        package_logger.addHandler(handler)
    handler.setFormatter(logging.Formatter(config.format))
    return package_logger
