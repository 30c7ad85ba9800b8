# utils/log.py - shared logger setup for the phpList client
import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


def get_logger(name: str = "phplist-client", level=logging.INFO):
    logger = logging.getLogger(name)
    # a library NullHandler does not count as configured
    if not any(not isinstance(h, logging.NullHandler) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.setLevel(level)
    return logger


def redact(params, keys=("password", "secret")):
    """Copy of a parameter mapping that is safe to put in a log line."""
    safe = dict(params)
    for k in keys:
        if safe.get(k):
            safe[k] = "[REDACTED]"
    return safe
