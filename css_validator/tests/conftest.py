"""Pytest configuration for CSS Validator tests."""

import logging

import pytest

from css_validator.core.validator import Validator
from .fakes import FakeRunner, respond_by_content

# Configure logging
logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

@pytest.fixture
def engine_jar(tmp_path):
    """Create an empty stand-in for the engine jar."""
    jar = tmp_path / 'css-validator.jar'
    jar.write_bytes(b'')
    return str(jar)


@pytest.fixture
def java_on_path(monkeypatch):
    """Pretend the Java launcher is installed."""
    monkeypatch.setattr(
        'css_validator.core.invoker.shutil.which',
        lambda name: f'/usr/bin/{name}'
    )


@pytest.fixture
def fake_runner():
    return FakeRunner(responder=respond_by_content)


@pytest.fixture
def validator(engine_jar, java_on_path, fake_runner):
    """Validator wired to the fake engine."""
    return Validator(
        jar_path=engine_jar,
        runner=fake_runner,
        async_runner=fake_runner.run_async
    )


@pytest.fixture
def css_file(tmp_path):
    """Write a stylesheet and return its path."""
    def _write(content: str, name: str = 'styles.css') -> str:
        path = tmp_path / name
        path.write_text(content, encoding='utf-8')
        return str(path)
    return _write
