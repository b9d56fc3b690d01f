# storefront/logger.py
import logging


def setup_logging(level: str = "INFO") -> logging.Logger:
    """
    Configure the "storefront" logger with a single console handler.

    Safe to call more than once: the handler is only attached the first time,
    later calls just update the level.
    """
    logger = logging.getLogger("storefront")
    logger.setLevel(level)

    if logger.handlers:
        return logger

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)
    return logger
