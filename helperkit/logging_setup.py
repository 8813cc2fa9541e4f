import logging
import sys
from typing import Optional

import structlog

from .config import Config, default_config


def configure_logging(level: Optional[str] = None, fmt: Optional[str] = None, config: Config = None):
    """Configure stdlib logging and structlog.

    Explicit arguments win over the logging section of the config.
    """
    if level is None or fmt is None:
        log_config = (config or default_config).logging
        level = level or log_config.get('level', 'INFO')
        fmt = fmt or log_config.get('format', 'json')

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, str(level).upper(), logging.INFO),
        force=True,
    )

    if fmt == 'console':
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
