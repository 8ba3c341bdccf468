"""Logging utility for CSS Validator."""

import logging
import os
from typing import Optional, Union
from .config import LOG_LEVEL

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

def setup_logging(log_level: Union[int, str] = LOG_LEVEL,
                  log_file: Optional[str] = None) -> None:
    """Set up logging configuration.

    Args:
        log_level: Level name or number
        log_file: Optional file that receives a copy of every record
    """
    handlers = [logging.StreamHandler()]
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir)
        handlers.append(logging.FileHandler(log_file))

    if isinstance(log_level, str):
        log_level = getattr(logging, log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        datefmt='%Y-%m-%d %H:%M:%S',
        handlers=handlers
    )

def get_logger(name):
    """Get a logger instance for the specified module.
    
    Args:
        name: Name of the module
        
    Returns:
        Logger instance
    """
    return logging.getLogger(name)

# Exported functions
__all__ = ['setup_logging', 'get_logger']
