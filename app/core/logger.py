import logging
import sys

def setup_logging(name: str = "stockology", level: int = logging.INFO):
    """
    Configure the application logger.

    Every module logs through a child of this logger
    (``stockology.accounts``, ``stockology.http``...).
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    ))

    if not logger.handlers:
        logger.addHandler(handler)

    return logger

logger = setup_logging()

def get_logger(suffix: str) -> logging.Logger:
    return logger.getChild(suffix)
