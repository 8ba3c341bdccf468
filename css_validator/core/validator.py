"""Validation of CSS text and files against a conformance profile."""

import os
import logging
from typing import Optional

from typing_extensions import Literal

from ..utils.config import (
    VALID_PROFILES, VALID_FORMATS, DEFAULT_PROFILE, DEFAULT_OUTPUT_FORMAT, ENGINE_TIMEOUT
)
from ..utils.error import InvalidArgumentError
from ..utils.file import transient_css_file, write_transient_css_async, remove_file
from .invoker import EngineInvoker, Runner, AsyncRunner
from .result import ValidationResult

logger = logging.getLogger(__name__)

Profile = Literal[
    'css1', 'css2', 'css21', 'css3', 'css3svg',
    'svg', 'svgbasic', 'svgtiny', 'mobile', 'tv', 'atsc-tv',
]
OutputFormat = Literal['text', 'json', 'xml', 'html', 'ucn']


def validate_profile(profile: str) -> None:
    if profile not in VALID_PROFILES:
        raise InvalidArgumentError(
            f"Invalid profile: {profile}. Valid profiles are: {', '.join(VALID_PROFILES)}"
        )


def validate_output_format(output_format: str) -> None:
    if output_format not in VALID_FORMATS:
        raise InvalidArgumentError(
            f"Invalid output format: {output_format}. "
            f"Valid formats are: {', '.join(VALID_FORMATS)}"
        )


def validate_css_text(css_text: Optional[str]) -> None:
    if not isinstance(css_text, str) or not css_text:
        raise InvalidArgumentError("CSS text cannot be None or empty")


def validate_file_path(file_path: str) -> None:
    if not file_path or not os.path.exists(file_path):
        raise InvalidArgumentError(f"File does not exist: {file_path}")


class Validator:
    """Validate stylesheets with the external engine.

    Each call launches exactly one engine process and holds no state
    between calls, so one instance may be shared across threads or tasks.

    Example:
        validator = Validator()
        result = validator.validate("body { colr: red; }")
        result.full_messages()
    """

    def __init__(self, jar_path: Optional[str] = None,
                 launcher: Optional[str] = None,
                 timeout: Optional[float] = ENGINE_TIMEOUT,
                 runner: Optional[Runner] = None,
                 async_runner: Optional[AsyncRunner] = None):
        """Initialize validator.

        Args:
            jar_path: Engine jar, defaults to the configured location
            launcher: Java launcher, defaults to the configured launcher
            timeout: Optional deadline per engine run in seconds
            runner: Replacement process runner
            async_runner: Replacement asynchronous process runner

        Raises:
            ConfigurationError: If the engine jar or launcher is missing
        """
        self.invoker = EngineInvoker(
            jar_path=jar_path,
            launcher=launcher,
            timeout=timeout,
            runner=runner,
            async_runner=async_runner
        )
        self.invoker.verify()

    @property
    def jar_path(self) -> str:
        return self.invoker.jar_path

    def validate(self, css_text: str, profile: Profile = DEFAULT_PROFILE,
                 output_format: OutputFormat = DEFAULT_OUTPUT_FORMAT) -> ValidationResult:
        """Validate CSS text.

        The text is written to a temporary file for the engine and the file
        is removed before returning.

        Args:
            css_text: Stylesheet source
            profile: CSS profile name
            output_format: Engine report format

        Returns:
            ValidationResult

        Raises:
            InvalidArgumentError: If the text is empty or an argument is unknown
        """
        validate_css_text(css_text)
        validate_profile(profile)
        validate_output_format(output_format)

        with transient_css_file(css_text) as path:
            report = self.invoker.invoke(path, profile, output_format)

        return ValidationResult.from_report(report)

    def validate_file(self, file_path: str, profile: Profile = DEFAULT_PROFILE,
                      output_format: OutputFormat = DEFAULT_OUTPUT_FORMAT) -> ValidationResult:
        """Validate a stylesheet file.

        Args:
            file_path: Path to the stylesheet
            profile: CSS profile name
            output_format: Engine report format

        Returns:
            ValidationResult

        Raises:
            InvalidArgumentError: If the file is missing or an argument is unknown
        """
        validate_file_path(file_path)
        validate_profile(profile)
        validate_output_format(output_format)

        report = self.invoker.invoke(file_path, profile, output_format)
        return ValidationResult.from_report(report)

    async def validate_async(self, css_text: str, profile: Profile = DEFAULT_PROFILE,
                             output_format: OutputFormat = DEFAULT_OUTPUT_FORMAT) -> ValidationResult:
        """Asynchronous counterpart of :meth:`validate`."""
        validate_css_text(css_text)
        validate_profile(profile)
        validate_output_format(output_format)

        path = await write_transient_css_async(css_text)
        try:
            report = await self.invoker.invoke_async(path, profile, output_format)
        finally:
            remove_file(path)

        return ValidationResult.from_report(report)

    async def validate_file_async(self, file_path: str, profile: Profile = DEFAULT_PROFILE,
                                  output_format: OutputFormat = DEFAULT_OUTPUT_FORMAT) -> ValidationResult:
        """Asynchronous counterpart of :meth:`validate_file`."""
        validate_file_path(file_path)
        validate_profile(profile)
        validate_output_format(output_format)

        report = await self.invoker.invoke_async(file_path, profile, output_format)
        return ValidationResult.from_report(report)


# Exported names
__all__ = [
    'Profile',
    'OutputFormat',
    'Validator',
    'validate_profile',
    'validate_output_format',
    'validate_css_text',
    'validate_file_path',
]
