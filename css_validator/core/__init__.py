"""Core functionality for CSS validation and report parsing."""

from .invoker import EngineInvoker, build_command, run_external_process, run_external_process_async
from .result import ErrorRecord, WarningRecord, RawReport, ValidationResult, parse_report
from .validator import Validator

__all__ = [
    'EngineInvoker',
    'build_command',
    'run_external_process',
    'run_external_process_async',
    'ErrorRecord',
    'WarningRecord',
    'RawReport',
    'ValidationResult',
    'parse_report',
    'Validator',
]
