"""Tests for transient stylesheet files."""

import os
import asyncio

import pytest

from css_validator.utils import file as file_utils
from css_validator.utils.error import FileOperationError
from css_validator.utils.file import (
    remove_file,
    transient_css_file,
    write_transient_css,
    write_transient_css_async,
)

class TestTransientFiles:
    """Tests for transient file helpers."""

    def test_context_manager_removes_file(self):
        with transient_css_file("body { color: red; }") as path:
            assert os.path.basename(path).startswith('css_validator')
            assert path.endswith('.css')
            with open(path, encoding='utf-8') as f:
                assert f.read() == "body { color: red; }"
        assert not os.path.exists(path)

    def test_removed_when_body_raises(self):
        with pytest.raises(RuntimeError):
            with transient_css_file("a {}") as path:
                raise RuntimeError("engine crashed")
        assert not os.path.exists(path)

    def test_unicode_content(self):
        css = 'p::before { content: "→ ©"; }'
        path = write_transient_css(css)
        try:
            with open(path, encoding='utf-8') as f:
                assert f.read() == css
        finally:
            remove_file(path)

    def test_async_writer(self):
        path = asyncio.run(write_transient_css_async("b { color: blue; }"))
        try:
            with open(path, encoding='utf-8') as f:
                assert f.read() == "b { color: blue; }"
        finally:
            remove_file(path)

    def test_remove_missing_file(self, tmp_path):
        remove_file(str(tmp_path / 'already-gone.css'))

    def test_temp_creation_failure(self, monkeypatch):
        def fail(*args, **kwargs):
            raise OSError("disk full")
        monkeypatch.setattr(file_utils.tempfile, 'mkstemp', fail)
        with pytest.raises(FileOperationError, match='disk full'):
            write_transient_css("a {}")
