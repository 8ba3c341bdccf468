"""Launching the external CSS validation engine."""

import os
import shutil
import asyncio
import logging
import subprocess
from pathlib import Path
from typing import Awaitable, Callable, List, Optional, Sequence, Tuple

import psutil

from ..utils.config import JAVA_LAUNCHER, JAVA_OPTS, DEFAULT_JAR_PATH, ENGINE_TIMEOUT
from ..utils.error import ConfigurationError
from .result import RawReport

logger = logging.getLogger(__name__)

ProcessOutput = Tuple[str, str, int]
Runner = Callable[[Sequence[str], Optional[float]], ProcessOutput]
AsyncRunner = Callable[[Sequence[str], Optional[float]], Awaitable[ProcessOutput]]


def build_command(jar_path: str, input_path: str, profile: str, output_format: str,
                  launcher: str = JAVA_LAUNCHER) -> List[str]:
    """Build the engine command line.

    Args:
        jar_path: Location of the engine jar
        input_path: Stylesheet to validate
        profile: CSS profile name
        output_format: Engine report format
        launcher: Java launcher

    Returns:
        Argument vector, ending with a ``file://`` URI of the input
    """
    return [
        launcher,
        *JAVA_OPTS,
        '-jar',
        jar_path,
        f'--output={output_format}',
        f'--profile={profile}',
        Path(os.path.abspath(input_path)).as_uri(),
    ]


def kill_process_tree(pid: int) -> None:
    """Kill a process and all of its descendants."""
    try:
        parent = psutil.Process(pid)
        children = parent.children(recursive=True)
    except psutil.NoSuchProcess:
        return

    for proc in children + [parent]:
        try:
            proc.kill()
        except psutil.NoSuchProcess:
            pass


def _decode(data: Optional[bytes]) -> str:
    return data.decode('utf-8', errors='replace') if data else ''


def run_external_process(argv: Sequence[str], timeout: Optional[float] = None) -> ProcessOutput:
    """Run a command to completion and capture its output.

    A command still running after ``timeout`` seconds is killed along with
    its children; whatever it wrote so far is returned with its exit status.

    Args:
        argv: Command and arguments
        timeout: Optional deadline in seconds

    Returns:
        Tuple of (stdout, stderr, exit_code)

    Raises:
        ConfigurationError: If the command cannot be started
    """
    try:
        process = subprocess.Popen(
            list(argv),
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE
        )
    except OSError as e:
        raise ConfigurationError(f"Failed to start {argv[0]}: {e}")

    try:
        stdout, stderr = process.communicate(timeout=timeout)
    except subprocess.TimeoutExpired:
        logger.warning(f"Engine did not finish within {timeout} seconds, killing pid {process.pid}")
        kill_process_tree(process.pid)
        stdout, stderr = process.communicate()

    return _decode(stdout), _decode(stderr), process.returncode


async def run_external_process_async(argv: Sequence[str],
                                     timeout: Optional[float] = None) -> ProcessOutput:
    """Asynchronous counterpart of :func:`run_external_process`."""
    try:
        process = await asyncio.create_subprocess_exec(
            *argv,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE
        )
    except OSError as e:
        raise ConfigurationError(f"Failed to start {argv[0]}: {e}")

    communicate = asyncio.ensure_future(process.communicate())
    try:
        stdout, stderr = await asyncio.wait_for(asyncio.shield(communicate), timeout)
    except asyncio.TimeoutError:
        logger.warning(f"Engine did not finish within {timeout} seconds, killing pid {process.pid}")
        kill_process_tree(process.pid)
        stdout, stderr = await communicate
    except asyncio.CancelledError:
        logger.debug(f"Validation cancelled, killing pid {process.pid}")
        kill_process_tree(process.pid)
        communicate.cancel()
        raise

    return _decode(stdout), _decode(stderr), process.returncode


class EngineInvoker:
    """Runs the engine once per call against a stylesheet on disk."""

    def __init__(self, jar_path: Optional[str] = None,
                 launcher: Optional[str] = None,
                 timeout: Optional[float] = ENGINE_TIMEOUT,
                 runner: Optional[Runner] = None,
                 async_runner: Optional[AsyncRunner] = None):
        """Initialize engine invoker.

        Args:
            jar_path: Engine jar, defaults to the configured location
            launcher: Java launcher, defaults to the configured launcher
            timeout: Optional deadline per run in seconds
            runner: Replacement for :func:`run_external_process`
            async_runner: Replacement for :func:`run_external_process_async`
        """
        if timeout is not None and timeout <= 0:
            raise ValueError("Timeout must be positive")

        self.jar_path = jar_path or DEFAULT_JAR_PATH
        self.launcher = launcher or JAVA_LAUNCHER
        self.timeout = timeout
        self.runner = runner or run_external_process
        self.async_runner = async_runner or run_external_process_async

    def verify(self) -> None:
        """Check that the engine jar and the launcher can be found.

        Raises:
            ConfigurationError: If either is missing
        """
        if not os.path.isfile(self.jar_path):
            raise ConfigurationError(f"CSS Validator JAR not found at: {self.jar_path}")
        if shutil.which(self.launcher) is None:
            raise ConfigurationError(f"Java launcher not found: {self.launcher}")

    def command_for(self, input_path: str, profile: str, output_format: str) -> List[str]:
        return build_command(self.jar_path, input_path, profile, output_format,
                             launcher=self.launcher)

    def invoke(self, input_path: str, profile: str, output_format: str) -> RawReport:
        """Run the engine and capture its report.

        Args:
            input_path: Stylesheet to validate
            profile: CSS profile name
            output_format: Engine report format

        Returns:
            RawReport with stdout followed by stderr
        """
        argv = self.command_for(input_path, profile, output_format)
        logger.debug(f"Running engine: {' '.join(argv)}")
        stdout, stderr, exit_code = self.runner(argv, self.timeout)
        return RawReport(stdout + stderr, exit_code)

    async def invoke_async(self, input_path: str, profile: str, output_format: str) -> RawReport:
        argv = self.command_for(input_path, profile, output_format)
        logger.debug(f"Running engine: {' '.join(argv)}")
        stdout, stderr, exit_code = await self.async_runner(argv, self.timeout)
        return RawReport(stdout + stderr, exit_code)


# Exported names
__all__ = [
    'build_command',
    'kill_process_tree',
    'run_external_process',
    'run_external_process_async',
    'EngineInvoker',
]
