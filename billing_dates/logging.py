import logging
from typing import Any, Optional

logger = logging.getLogger(__name__)

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def log_action(
    action_type: str,
    message: str,
    level: str = "info",
    log: Optional[logging.Logger] = None,
    **kwargs: Any
) -> None:
    """Log a structured action record.

    Args:
        action_type: Dotted action name, e.g. "dates.compute.inverted_boundary"
        message: Human readable description
        level: One of debug, info, warning or error; anything else logs at info
        log: Logger the record is attributed to; defaults to this module's
        **kwargs: Extra context merged into the record
    """
    log_data = {
        "action": action_type,
        "message": message,
        **kwargs
    }
    (log or logger).log(LOG_LEVELS.get(level, logging.INFO), log_data)
