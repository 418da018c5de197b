"""
Common logging configuration for the family tree project
"""

import logging
import os
import sys


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logger(name: str, level: str = "INFO", log_file: str = None) -> logging.Logger:
    """
    Setup a logger with consistent formatting across the project

    Args:
        name: Logger name (typically __name__)
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path to write logs to

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Already configured by an earlier call
    if logger.handlers:
        return logger

    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_project_logger(module_name: str, verbose: bool = False) -> logging.Logger:
    """
    Get a logger configured for the family tree project

    The level comes from LOG_LEVEL unless verbose forces DEBUG.
    """
    level = "DEBUG" if verbose else os.environ.get('LOG_LEVEL', 'INFO')
    return setup_logger(module_name, level, log_file=None)


def setup_module_logger(module_name: str, verbose: bool = False) -> logging.Logger:
    """
    Convenience function for modules to get a configured logger

    Usage:
        from family_tree.shared.logging_config import setup_module_logger
        logger = setup_module_logger(__name__)
    """
    return get_project_logger(module_name, verbose)
