"""Root logger setup from LoggingConfig (config.yaml logging.* or env LOGGING_*).

Only DEBUG, INFO, WARNING and ERROR are accepted; anything else means INFO.
The default format carries the thread name so per-reviewer notifications
("notify_0", "notify_1", ...) can be told apart from the request thread.
"""

import logging

from poke_reviewer.config import LoggingConfig

LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


def _resolve_level(level: str) -> int:
    return LEVELS.get(level.upper().strip(), logging.INFO)


def setup_logging(config: LoggingConfig) -> None:
    """Apply level and format to the root logger, replacing earlier handlers."""
    fmt = config.format or LoggingConfig.model_fields["format"].default
    logging.basicConfig(level=_resolve_level(config.level), format=fmt, force=True)
