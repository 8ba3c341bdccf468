"""File utility for CSS Validator."""

import os
import logging
import tempfile
from contextlib import contextmanager
from typing import Iterator

import aiofiles

from .config import TEMP_PREFIX, TEMP_SUFFIX
from .error import FileOperationError

logger = logging.getLogger(__name__)

def _reserve_temp_path() -> str:
    """Create an empty temp file and return its path."""
    try:
        fd, path = tempfile.mkstemp(prefix=TEMP_PREFIX, suffix=TEMP_SUFFIX)
        os.close(fd)
        return path
    except OSError as e:
        raise FileOperationError(f"Failed to create temporary file: {e}")

def remove_file(file_path: str) -> None:
    """Remove a file if it still exists.
    
    Args:
        file_path: Path to the file
    """
    try:
        if os.path.exists(file_path):
            os.remove(file_path)
    except OSError as e:
        logger.warning(f"Failed to remove temporary file {file_path}: {e}")

def write_transient_css(content: str, encoding: str = 'utf-8') -> str:
    """Write CSS text to a new temporary file.
    
    Args:
        content: CSS text
        encoding: File encoding
        
    Returns:
        Path of the written file
        
    Raises:
        FileOperationError: If the file cannot be written
    """
    path = _reserve_temp_path()
    try:
        with open(path, 'w', encoding=encoding) as f:
            f.write(content)
        return path
    except OSError as e:
        remove_file(path)
        raise FileOperationError(f"Failed to write file {path}: {e}")

async def write_transient_css_async(content: str, encoding: str = 'utf-8') -> str:
    """Asynchronous counterpart of :func:`write_transient_css`."""
    path = _reserve_temp_path()
    try:
        async with aiofiles.open(path, 'w', encoding=encoding) as f:
            await f.write(content)
        return path
    except OSError as e:
        remove_file(path)
        raise FileOperationError(f"Failed to write file {path}: {e}")

@contextmanager
def transient_css_file(content: str, encoding: str = 'utf-8') -> Iterator[str]:
    """Yield the path of a temp file holding ``content``; delete it on exit."""
    path = write_transient_css(content, encoding)
    try:
        yield path
    finally:
        remove_file(path)

# Exported functions
__all__ = [
    'remove_file',
    'write_transient_css',
    'write_transient_css_async',
    'transient_css_file',
]
