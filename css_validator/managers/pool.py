"""Bounded batch validation for CSS Validator."""

import os
import time
from typing import Dict, Any, Optional, Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed

import psutil

from ..core.result import ValidationResult
from ..core.validator import Validator
from ..utils.concurrency import ThreadSafeDict
from ..utils.config import DEFAULT_PROFILE, DEFAULT_OUTPUT_FORMAT, ENGINE_MEMORY_MB
from ..utils.error import CSSValidatorError
from .base import BaseManager

class ValidationPool(BaseManager):
    """Validate many stylesheets with a fixed number of engine processes.

    ``max_workers`` caps how many engine processes run at once. Files that
    are rejected before launch are recorded in ``failures`` and do not stop
    the rest of the batch.
    """

    def __init__(self, validator: Validator, max_workers: Optional[int] = None):
        """Initialize validation pool.

        Args:
            validator: Validator shared by all workers
            max_workers: Maximum concurrent engine processes, defaults to CPU count

        Raises:
            ValueError: If max_workers is not positive
        """
        super().__init__()
        if max_workers is not None and max_workers <= 0:
            raise ValueError("Max workers must be positive")

        self.validator = validator
        self.max_workers = max_workers or os.cpu_count() or 1
        self.failures: Dict[str, str] = {}

        self.stats = ThreadSafeDict()
        self.stats.update({
            'submitted': 0,
            'completed': 0,
            'valid': 0,
            'invalid': 0,
            'failed': 0,
            'elapsed_time': 0.0
        })

    def check_resources(self) -> None:
        """Warn when the worker count could exhaust available memory."""
        try:
            available_mb = psutil.virtual_memory().available / (1024 * 1024)
        except (OSError, RuntimeError) as e:
            self.log_error("Failed to read available memory", e)
            return

        required_mb = self.max_workers * ENGINE_MEMORY_MB
        if required_mb > available_mb:
            self.logger.warning(
                f"{self.max_workers} engine processes may need {required_mb}MB "
                f"but only {available_mb:.0f}MB is available"
            )

    def get_stats(self) -> Dict[str, Any]:
        return self.stats.snapshot()

    def _record(self, result: ValidationResult) -> None:
        self.stats.increment('completed')
        self.stats.increment('valid' if result.is_valid else 'invalid')

    def validate_files(self, paths: Iterable[str], profile: str = DEFAULT_PROFILE,
                       output_format: str = DEFAULT_OUTPUT_FORMAT) -> Dict[str, ValidationResult]:
        """Validate files concurrently.

        Args:
            paths: Stylesheet paths
            profile: CSS profile name
            output_format: Engine report format

        Returns:
            Results keyed by path, for paths that were validated
        """
        self.check_resources()
        results: Dict[str, ValidationResult] = {}
        start = time.time()

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = {}
            for path in paths:
                self.stats.increment('submitted')
                future = executor.submit(self.validator.validate_file, path,
                                         profile=profile, output_format=output_format)
                futures[future] = path

            for future in as_completed(futures):
                path = futures[future]
                try:
                    result = future.result()
                except CSSValidatorError as e:
                    self.stats.increment('failed')
                    self.failures[path] = str(e)
                    self.log_error(f"Failed to validate {path}", e)
                    continue
                results[path] = result
                self._record(result)

        self.stats['elapsed_time'] = self.stats['elapsed_time'] + (time.time() - start)
        return results

# Exported class
__all__ = ['ValidationPool']
