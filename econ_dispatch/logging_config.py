import logging

LOG_FORMAT = "[%(asctime)s] %(name)s: %(message)s"
ROOT_LOGGER_NAME = "econ_dispatch"


def configure_logging(level: str | int = logging.WARNING) -> logging.Logger:
    """ Attaches a stream handler to the package logger. Calling it again only updates the level. """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)
    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    return logger
