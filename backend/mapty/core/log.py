import sys

from loguru import logger

_handler_id = None


def configure_logging(level: str = "INFO") -> None:
    """Route loguru to stderr at `level`, replacing the default handler.

    Only touches the stderr handler this function owns, so sinks added
    elsewhere (tests, scripts) are left alone.
    """
    global _handler_id
    if _handler_id is None:
        try:
            logger.remove(0)
        except ValueError:
            pass
    else:
        logger.remove(_handler_id)
    _handler_id = logger.add(sys.stderr, level=level.upper())
