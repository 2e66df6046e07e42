"""Logging infrastructure for bref-deploy.

Example:
    >>> from bref_deploy.logging import get_logger
    >>>
    >>> logger = get_logger(__name__)
    >>> logger.info("Deployment started")

Note:
    Modules of this package obtain their logger through get_logger() so
    logging is configured before the first message is emitted.
"""

from .logging_config import LoggingConfig, get_logger, setup_logging

__all__ = [
    "LoggingConfig",
    "get_logger",
    "setup_logging",
]
