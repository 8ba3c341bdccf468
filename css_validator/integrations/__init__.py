"""Optional adapters built on the public ValidationResult interface."""

from .records import ErrorCollection, CssAttributeValidator, validates_css, run_css_validations

__all__ = [
    'ErrorCollection',
    'CssAttributeValidator',
    'validates_css',
    'run_css_validations',
]
