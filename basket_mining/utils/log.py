import logging

LOG_FORMAT = "%(asctime)s  %(levelname)-8s  %(name)s: %(message)s"


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Attach a stream handler to the package logger; safe to call more than once."""
    logger = logging.getLogger('basket_mining')
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))
        logger.addHandler(handler)
    return logger
