"""Loguru sink configuration for the lis CLI."""
import sys

from loguru import logger

_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:{line} - <level>{message}</level>"


def configure_logging(verbose: bool = False):
    """Route package logs to stderr; DEBUG when verbose, INFO otherwise."""
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "INFO", format=_FORMAT)
    return logger
