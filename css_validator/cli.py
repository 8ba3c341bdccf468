#!/usr/bin/env python3
"""
Command-line interface for CSS Validator.
"""

import argparse
import logging
import sys
from typing import Dict, List, Optional, Tuple

import orjson

from css_validator.core.result import ValidationResult
from css_validator.core.validator import Validator
from css_validator.managers.pool import ValidationPool
from css_validator.utils.config import (
    VALID_PROFILES, VALID_FORMATS, DEFAULT_PROFILE, DEFAULT_OUTPUT_FORMAT, ENGINE_TIMEOUT
)
from css_validator.utils.error import CSSValidatorError, ConfigurationError
from css_validator.utils.logging import setup_logging, get_logger

logger = get_logger(__name__)

# Exit statuses
EXIT_VALID = 0
EXIT_INVALID = 1
EXIT_USAGE = 2

STDIN_SOURCE = '-'

def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog='css-validator',
        description='Validate CSS stylesheets against a CSS profile'
    )

    # Input source
    parser.add_argument(
        'files',
        help='Stylesheets to validate, or - to read from standard input',
        nargs='*',
        default=[]
    )
    parser.add_argument(
        '-t', '--text',
        help='CSS text to validate',
        type=str
    )

    # Engine options
    parser.add_argument(
        '-p', '--profile',
        help='CSS profile to validate against',
        choices=VALID_PROFILES,
        default=DEFAULT_PROFILE
    )
    parser.add_argument(
        '-o', '--output-format',
        help='Engine report format',
        choices=VALID_FORMATS,
        default=DEFAULT_OUTPUT_FORMAT
    )
    parser.add_argument(
        '--jar',
        help='Path to the engine jar',
        type=str
    )
    parser.add_argument(
        '--timeout',
        help='Engine timeout in seconds',
        type=float,
        default=ENGINE_TIMEOUT
    )
    parser.add_argument(
        '-w', '--workers',
        help='Maximum number of engine processes for multiple files',
        type=int,
        default=None
    )

    # Output options
    parser.add_argument(
        '--json',
        help='Print results as JSON',
        action='store_true'
    )
    parser.add_argument(
        '--raw',
        help='Print the engine report as well',
        action='store_true'
    )
    parser.add_argument(
        '-v', '--verbose',
        help='Enable verbose output',
        action='store_true'
    )

    args = parser.parse_args(argv)
    if args.text is None and not args.files:
        parser.error('a file, - or -t/--text is required')
    if args.text is not None and args.files:
        parser.error('files and -t/--text cannot be combined')
    if STDIN_SOURCE in args.files and len(args.files) > 1:
        parser.error(f"{STDIN_SOURCE} cannot be combined with file paths")
    return args

def validate_sources(validator: Validator,
                     args: argparse.Namespace) -> Tuple[Dict[str, ValidationResult], Dict[str, str]]:
    """Validate every source named on the command line.

    Returns:
        Tuple of (results keyed by source name, rejected files with reasons)

    Raises:
        InvalidArgumentError: If a single source is rejected
    """
    options = {'profile': args.profile, 'output_format': args.output_format}

    if args.text is not None:
        return {'<text>': validator.validate(args.text, **options)}, {}

    if args.files == [STDIN_SOURCE]:
        return {'<stdin>': validator.validate(sys.stdin.read(), **options)}, {}

    if len(args.files) == 1:
        path = args.files[0]
        return {path: validator.validate_file(path, **options)}, {}

    pool = ValidationPool(validator, max_workers=args.workers)
    results = pool.validate_files(args.files, **options)
    logger.debug(f"Pool stats: {pool.get_stats()}")
    # Keep command-line order
    ordered = {path: results[path] for path in args.files if path in results}
    return ordered, dict(pool.failures)

def print_results(results: Dict[str, ValidationResult], args: argparse.Namespace) -> None:
    """Print results in text or JSON form."""
    if args.json:
        documents = [
            dict(source=source, **result.to_dict(include_raw=args.raw))
            for source, result in results.items()
        ]
        sys.stdout.write(orjson.dumps(documents, option=orjson.OPT_INDENT_2).decode('utf-8'))
        sys.stdout.write('\n')
        return

    for source, result in results.items():
        status = 'valid' if result.is_valid else 'invalid'
        print(f"{source}: {status} ({result.error_count} errors, {result.warning_count} warnings)")
        for message in result.full_messages():
            print(f"  - {message}")
        if args.raw:
            print(result.raw_text)

def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    args = parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    try:
        validator = Validator(jar_path=args.jar, timeout=args.timeout)
        results, failures = validate_sources(validator, args)
    except (ConfigurationError, ValueError) as e:
        logger.error(f"Error: {str(e)}")
        return EXIT_USAGE
    except CSSValidatorError as e:
        logger.error(f"Error: {str(e)}")
        return EXIT_INVALID

    print_results(results, args)
    for path, reason in failures.items():
        print(f"{path}: {reason}", file=sys.stderr)

    if failures:
        return EXIT_INVALID
    if all(result.is_valid for result in results.values()):
        return EXIT_VALID
    return EXIT_INVALID

if __name__ == '__main__':
    sys.exit(main())
