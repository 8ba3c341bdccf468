"""Validate CSS stylesheets with the W3C CSS validation engine."""

from typing import Any, Optional

from .core.result import ErrorRecord, WarningRecord, ValidationResult
from .core.validator import Validator
from .utils.config import VERSION, VALID_PROFILES, VALID_FORMATS
from .utils.error import (
    CSSValidatorError,
    ConfigurationError,
    InvalidArgumentError,
    FileOperationError,
)

__version__ = VERSION

def new(jar_path: Optional[str] = None) -> Validator:
    """Create a validator, optionally for a specific engine jar."""
    return Validator(jar_path=jar_path)

def validate(css_text: str, **options: Any) -> ValidationResult:
    """Validate CSS text with a default validator.

    Args:
        css_text: Stylesheet source
        **options: ``profile`` and ``output_format``

    Returns:
        ValidationResult
    """
    return Validator().validate(css_text, **options)

def validate_file(file_path: str, **options: Any) -> ValidationResult:
    """Validate a stylesheet file with a default validator."""
    return Validator().validate_file(file_path, **options)

__all__ = [
    '__version__',
    'new',
    'validate',
    'validate_file',
    'Validator',
    'ValidationResult',
    'ErrorRecord',
    'WarningRecord',
    'VALID_PROFILES',
    'VALID_FORMATS',
    'CSSValidatorError',
    'ConfigurationError',
    'InvalidArgumentError',
    'FileOperationError',
]
