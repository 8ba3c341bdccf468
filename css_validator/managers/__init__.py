"""Resource managers for CSS Validator."""

from .base import BaseManager
from .pool import ValidationPool

# Exported classes
__all__ = [
    'BaseManager',
    'ValidationPool',
]
