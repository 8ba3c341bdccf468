"""Parsing of engine reports into structured validation results."""

import re
import enum
import logging
from dataclasses import dataclass, asdict, field
from typing import Dict, Any, Optional, List, Tuple, NamedTuple

import orjson

from ..utils.config import SUCCESS_SENTINEL, GENERIC_INVALID_MESSAGE

logger = logging.getLogger(__name__)

# Record openers
ERROR_OPENER = re.compile(r'^Line\s*:\s*(\d+)\s*(.*)$')
WARNING_OPENER = re.compile(r'^Line\s*:\s*(\d+)\s+(.+)')

# Boundaries
LINE_MARKER = re.compile(r'^Line\s*:')
URI_MARKER = re.compile(r'^URI\s*:')
NO_STYLE_SHEET = 'No style sheet'
WARNINGS_HEADER = re.compile(r'^Warnings \((\d+)\)')
TRAILER = 'Valid CSS information'


@dataclass(frozen=True)
class ErrorRecord:
    """A single error reported by the engine."""

    line: int
    message: str
    selector: Optional[str] = None

    def to_message(self) -> str:
        """Format the error as a human-readable line."""
        if self.selector:
            return f"Line {self.line} ({self.selector}): {self.message}"
        return f"Line {self.line}: {self.message}"


@dataclass(frozen=True)
class WarningRecord:
    """A single warning reported by the engine."""

    line: int
    message: str

    def to_message(self) -> str:
        return f"Line {self.line}: {self.message}"


class RawReport(NamedTuple):
    """Engine output: stdout followed by stderr, plus the exit status."""

    text: str
    exit_code: int


class ParsedReport(NamedTuple):
    is_valid: bool
    errors: Tuple[ErrorRecord, ...]
    warnings: Tuple[WarningRecord, ...]


class ParserState(enum.Enum):
    SEEKING = 'seeking'
    IN_ERROR_BODY = 'in_error_body'
    AWAITING_WARNINGS = 'awaiting_warnings'
    IN_WARNINGS_SECTION = 'in_warnings_section'
    IN_WARNING_BODY = 'in_warning_body'
    DONE = 'done'


class ReportParser:
    """Line scanner for the engine's ``text`` report layout.

    Two tracks read every line of the report, top to bottom, each with
    its own state. A handler returns True when it consumed the line, or
    False to have the line examined again by the handler of the state it
    switched to. That is how a record boundary ends one record and can
    open the next.

    The error track opens a record at every ``Line : <n> <selector>``,
    wherever it appears, and absorbs following lines until another
    ``Line :``, ``URI :``, ``No style sheet`` or a blank line. Entries in
    the warnings section are therefore reported as errors too.

    The warning track waits for the first ``Warnings (<n>)`` header. After
    it, ``Line : <n> <text>`` lines open warning records, each taking at
    most one continuation line, until ``Valid CSS information``.
    """

    def __init__(self):
        self._handlers = {
            ParserState.SEEKING: self._seek,
            ParserState.IN_ERROR_BODY: self._error_body,
            ParserState.AWAITING_WARNINGS: self._await_warnings,
            ParserState.IN_WARNINGS_SECTION: self._warnings_section,
            ParserState.IN_WARNING_BODY: self._warning_body,
            ParserState.DONE: self._done,
        }
        self._reset()

    def _reset(self) -> None:
        self.error_state = ParserState.SEEKING
        self.warning_state = ParserState.AWAITING_WARNINGS
        self.errors: List[ErrorRecord] = []
        self.warnings: List[WarningRecord] = []
        self._error_line = 0
        self._selector: Optional[str] = None
        self._error_parts: List[str] = []
        self._warning_line = 0
        self._warning_parts: List[str] = []

    def parse(self, text: str) -> Tuple[List[ErrorRecord], List[WarningRecord]]:
        """Scan ``text`` and return the error and warning records in order.

        Args:
            text: Engine report

        Returns:
            Tuple of (errors, warnings)
        """
        self._reset()
        for line in text.split('\n'):
            self._feed_errors(line)
            self._feed_warnings(line)
        self._finish()
        return self.errors, self.warnings

    def _feed_errors(self, line: str) -> None:
        consumed = False
        while not consumed:
            consumed = self._handlers[self.error_state](line)

    def _feed_warnings(self, line: str) -> None:
        consumed = False
        while not consumed:
            consumed = self._handlers[self.warning_state](line)

    def _finish(self) -> None:
        if self.error_state is ParserState.IN_ERROR_BODY:
            self._close_error()
        if self.warning_state is ParserState.IN_WARNING_BODY:
            self._close_warning()

    # Error track

    def _seek(self, line: str) -> bool:
        match = ERROR_OPENER.match(line)
        if match:
            self._error_line = int(match.group(1))
            self._selector = match.group(2).strip() or None
            self._error_parts = []
            self.error_state = ParserState.IN_ERROR_BODY
        return True

    def _error_body(self, line: str) -> bool:
        if self._is_error_boundary(line):
            self._close_error()
            self.error_state = ParserState.SEEKING
            return False

        self._error_parts.append(line.strip())
        return True

    # Warning track

    def _await_warnings(self, line: str) -> bool:
        if WARNINGS_HEADER.match(line):
            self.warning_state = ParserState.IN_WARNINGS_SECTION
        return True

    def _warnings_section(self, line: str) -> bool:
        match = WARNING_OPENER.match(line)
        if match:
            self._warning_line = int(match.group(1))
            self._warning_parts = [match.group(2).strip()]
            self.warning_state = ParserState.IN_WARNING_BODY
        elif line.startswith(TRAILER):
            self.warning_state = ParserState.DONE
        return True

    def _warning_body(self, line: str) -> bool:
        # At most one continuation line per warning
        if line.strip() and not LINE_MARKER.match(line):
            self._warning_parts.append(line.strip())
            self._close_warning()
            self.warning_state = (ParserState.DONE if line.startswith(TRAILER)
                                  else ParserState.IN_WARNINGS_SECTION)
            return True

        self._close_warning()
        self.warning_state = ParserState.IN_WARNINGS_SECTION
        return False

    def _done(self, line: str) -> bool:
        return True

    @staticmethod
    def _is_error_boundary(line: str) -> bool:
        return (
            not line.strip()
            or LINE_MARKER.match(line) is not None
            or URI_MARKER.match(line) is not None
            or line.startswith(NO_STYLE_SHEET)
        )

    def _close_error(self) -> None:
        self.errors.append(ErrorRecord(
            line=self._error_line,
            selector=self._selector,
            message=' '.join(self._error_parts)
        ))
        self._error_parts = []

    def _close_warning(self) -> None:
        self.warnings.append(WarningRecord(
            line=self._warning_line,
            message=' '.join(self._warning_parts)
        ))
        self._warning_parts = []


def is_success(text: str) -> bool:
    """Check whether the engine reported zero errors."""
    return SUCCESS_SENTINEL in text


def parse_report(text: Optional[str]) -> ParsedReport:
    """Parse engine output into validity flag, errors and warnings.

    Never raises: an unexpected fault while scanning is logged and
    degrades to empty record lists.

    Args:
        text: Engine output text

    Returns:
        ParsedReport with records in report order
    """
    text = text or ''
    is_valid = is_success(text)
    try:
        errors, warnings = ReportParser().parse(text)
    except Exception as e:
        logger.error(f"Error parsing engine report: {e}")
        errors, warnings = [], []
    return ParsedReport(is_valid, tuple(errors), tuple(warnings))


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of one validation run.

    ``is_valid`` depends only on the engine's success sentinel. When the
    engine reports failure but no error record could be parsed,
    ``error_count`` is 1 so the failure stays visible.
    """

    raw_text: str
    exit_code: int
    is_valid: bool
    errors: Tuple[ErrorRecord, ...] = field(default_factory=tuple)
    warnings: Tuple[WarningRecord, ...] = field(default_factory=tuple)

    @classmethod
    def from_report(cls, report: RawReport) -> 'ValidationResult':
        """Build a result from raw engine output."""
        parsed = parse_report(report.text)
        result = cls(
            raw_text=report.text or '',
            exit_code=report.exit_code,
            is_valid=parsed.is_valid,
            errors=parsed.errors,
            warnings=parsed.warnings
        )
        if not result.is_valid and not result.errors:
            logger.warning(
                f"Engine reported invalid CSS (exit code {report.exit_code}) "
                "but no error records were found"
            )
        logger.debug(
            f"Parsed report: valid={result.is_valid}, "
            f"errors={result.error_count}, warnings={result.warning_count}"
        )
        return result

    @classmethod
    def from_output(cls, output: str, exit_code: int) -> 'ValidationResult':
        return cls.from_report(RawReport(output, exit_code))

    @property
    def error_count(self) -> int:
        if not self.is_valid and not self.errors:
            return 1
        return len(self.errors)

    @property
    def warning_count(self) -> int:
        return len(self.warnings)

    @property
    def has_errors(self) -> bool:
        return not self.is_valid

    @property
    def has_warnings(self) -> bool:
        return self.warning_count > 0

    def full_messages(self) -> List[str]:
        """Return every finding as a readable line, errors before warnings.

        Example: ["Line 1 (body): Property “colr” doesn't exist : red"]

        Returns:
            List of messages, ``["Invalid CSS"]`` when the engine failed
            without reporting anything parseable
        """
        messages = [error.to_message() for error in self.errors]
        messages.extend(warning.to_message() for warning in self.warnings)

        if not self.is_valid and not messages:
            messages.append(GENERIC_INVALID_MESSAGE)

        return messages

    def to_dict(self, include_raw: bool = False) -> Dict[str, Any]:
        """Convert the result to plain data.

        Args:
            include_raw: Whether to include the engine text

        Returns:
            Dictionary representation
        """
        data = {
            'valid': self.is_valid,
            'exit_code': self.exit_code,
            'error_count': self.error_count,
            'warning_count': self.warning_count,
            'errors': [asdict(error) for error in self.errors],
            'warnings': [asdict(warning) for warning in self.warnings],
            'messages': self.full_messages(),
        }
        if include_raw:
            data['raw_text'] = self.raw_text
        return data

    def to_json(self, include_raw: bool = False) -> str:
        return orjson.dumps(self.to_dict(include_raw)).decode('utf-8')


# Exported names
__all__ = [
    'ErrorRecord',
    'WarningRecord',
    'RawReport',
    'ParsedReport',
    'ParserState',
    'ReportParser',
    'ValidationResult',
    'is_success',
    'parse_report',
]
