"""Error utility for CSS Validator."""

class CSSValidatorError(Exception):
    """Base exception for CSS Validator."""
    pass

class ConfigurationError(CSSValidatorError):
    """Raised when the validation engine cannot be located or started."""
    pass

class InvalidArgumentError(CSSValidatorError, ValueError):
    """Raised when a validation request is rejected before launching the engine."""
    pass

class FileOperationError(CSSValidatorError):
    """Raised when file operations fail."""
    pass

# Exported exceptions
__all__ = [
    'CSSValidatorError',
    'ConfigurationError',
    'InvalidArgumentError',
    'FileOperationError',
]
