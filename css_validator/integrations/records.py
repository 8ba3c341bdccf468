"""Attribute validation for model objects.

Attach CSS validation to any object exposing ``errors.add(attribute, message)``:

    @validates_css('custom_css')
    @validates_css('theme_styles', profile='css3', allow_blank=True)
    class Theme:
        def __init__(self, custom_css, theme_styles=None):
            self.custom_css = custom_css
            self.theme_styles = theme_styles
            self.errors = ErrorCollection()

    theme = Theme("body { colr: red; }")
    run_css_validations(theme)
    theme.errors.full_messages()
"""

import logging
from collections import OrderedDict
from typing import Any, Callable, Dict, List, Optional, Union

from typing_extensions import Protocol

from ..core.validator import Validator
from ..utils.config import DEFAULT_PROFILE
from ..utils.error import CSSValidatorError

logger = logging.getLogger(__name__)

INVALID_CSS_MESSAGE = "is invalid CSS"
GENERIC_RECORD_MESSAGE = "contains invalid CSS"

Condition = Union[str, Callable[[Any], bool], None]


class SupportsAddError(Protocol):
    def add(self, attribute: str, message: str) -> Any:
        ...


class ErrorCollection:
    """Ordered attribute -> messages mapping for plain objects."""

    def __init__(self):
        self._messages: Dict[str, List[str]] = OrderedDict()

    def add(self, attribute: str, message: str) -> None:
        self._messages.setdefault(attribute, []).append(message)

    def __getitem__(self, attribute: str) -> List[str]:
        return list(self._messages.get(attribute, []))

    def __len__(self) -> int:
        return sum(len(messages) for messages in self._messages.values())

    def __bool__(self) -> bool:
        return len(self) > 0

    def clear(self) -> None:
        self._messages.clear()

    def full_messages(self) -> List[str]:
        return [
            f"{attribute} {message}"
            for attribute, messages in self._messages.items()
            for message in messages
        ]


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def _check_condition(record: Any, condition: Condition) -> bool:
    if condition is None:
        return True
    if callable(condition):
        return bool(condition(record))
    target = getattr(record, condition)
    return bool(target() if callable(target) else target)


class CssAttributeValidator:
    """Validate one attribute's CSS and report failures on the record."""

    def __init__(self, profile: str = DEFAULT_PROFILE,
                 allow_blank: bool = False,
                 allow_nil: bool = False,
                 message: Optional[str] = None,
                 full_messages: bool = True,
                 if_: Condition = None,
                 unless: Condition = None,
                 validator: Optional[Validator] = None):
        """Initialize attribute validator.

        Args:
            profile: CSS profile name
            allow_blank: Skip empty or whitespace-only values
            allow_nil: Skip None values
            message: Custom message replacing the detailed errors
            full_messages: Add one message per engine error when True,
                a single "is invalid CSS" otherwise
            if_: Only validate when this callable or attribute name is truthy
            unless: Skip validation when this callable or attribute name is truthy
            validator: Validator to use, created on first use when omitted
        """
        self.profile = profile
        self.allow_blank = allow_blank
        self.allow_nil = allow_nil
        self.message = message
        self.full_messages = full_messages
        self.if_ = if_
        self.unless = unless
        self._validator = validator

    @property
    def validator(self) -> Validator:
        if self._validator is None:
            self._validator = Validator()
        return self._validator

    def applies_to(self, record: Any) -> bool:
        if not _check_condition(record, self.if_):
            return False
        if self.unless is not None and _check_condition(record, self.unless):
            return False
        return True

    def validate_each(self, record: Any, attribute: str, value: Any) -> int:
        """Validate ``value`` and add any failure to ``record.errors``.

        Args:
            record: Object with an ``errors`` collection
            attribute: Attribute name used for reported errors
            value: CSS text

        Returns:
            Number of messages added
        """
        if self.allow_blank and _is_blank(value):
            return 0
        if self.allow_nil and value is None:
            return 0

        errors: SupportsAddError = record.errors
        try:
            result = self.validator.validate(value, profile=self.profile)
        except CSSValidatorError as e:
            logger.warning(f"CSS validation of {attribute} failed: {e}")
            errors.add(attribute, f"validation failed: {e}")
            return 1

        if result.is_valid:
            return 0

        if self.message:
            messages = [self.message]
        elif not self.full_messages:
            messages = [INVALID_CSS_MESSAGE]
        else:
            messages = [error.to_message() for error in result.errors]
            if not messages:
                messages.append(GENERIC_RECORD_MESSAGE)

        for message in messages:
            errors.add(attribute, message)
        return len(messages)


def validates_css(*attributes: str, **options: Any) -> Callable[[type], type]:
    """Class decorator registering CSS validation for ``attributes``.

    Options are passed to :class:`CssAttributeValidator`.
    """
    def decorator(cls: type) -> type:
        registered = list(getattr(cls, '__css_validators__', []))
        validator = CssAttributeValidator(**options)
        registered.extend((attribute, validator) for attribute in attributes)
        cls.__css_validators__ = registered
        return cls
    return decorator


def run_css_validations(record: Any) -> bool:
    """Run every validator registered on the record's class.

    Args:
        record: Instance of a class decorated with :func:`validates_css`

    Returns:
        True if no error was added
    """
    added = 0
    for attribute, validator in getattr(type(record), '__css_validators__', []):
        if not validator.applies_to(record):
            continue
        added += validator.validate_each(record, attribute, getattr(record, attribute, None))
    return added == 0


# Exported names
__all__ = [
    'ErrorCollection',
    'CssAttributeValidator',
    'validates_css',
    'run_css_validations',
    'INVALID_CSS_MESSAGE',
    'GENERIC_RECORD_MESSAGE',
]
