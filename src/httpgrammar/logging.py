"""Logging helpers."""
import logging
import sys


class _StderrStream:
    """Resolve ``sys.stderr`` at write time so redirection is honoured."""

    def write(self, data):
        return sys.stderr.write(data)

    def flush(self):
        return sys.stderr.flush()


stderr_stream = _StderrStream()

default_handler = logging.StreamHandler(stderr_stream)
default_handler.setFormatter(
    logging.Formatter("[%(asctime)s] %(levelname)s in %(module)s: %(message)s")
)


def has_level_handler(logger):
    level = logger.getEffectiveLevel()
    current = logger
    while current:
        if any(handler.level <= level for handler in current.handlers):
            return True
        if not current.propagate:
            break
        current = current.parent
    return False


def create_logger(parser):
    """Return the logger for *parser*, configured from its config.

    The level is set to DEBUG when ``DEBUG`` is enabled and no level was
    set explicitly.  :data:`default_handler` is attached only when nothing
    on the logger's chain already handles its effective level.
    """
    logger = logging.getLogger(parser.config.get("LOGGER_NAME") or __name__)
    if parser.config.get("DEBUG") and not logger.level:
        logger.setLevel(logging.DEBUG)
    if not has_level_handler(logger):
        logger.addHandler(default_handler)
    return logger
