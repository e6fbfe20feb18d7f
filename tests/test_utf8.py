"""
Tests for the UTF-8 path guards.
"""

import pytest
from pathlib import PurePosixPath

from safe_path import SafePathStatus, utf8
from safe_path.errors import InvalidUtf8PathError, PathEscapeError, PathNoOpError


class TestUtf8Join:
    """Join guard over text paths."""

    def test_returns_text(self, posix_config):
        result = utf8.safe_join("/home/user", "Documents/report.txt", config=posix_config)
        assert result.success is True
        assert result.path == "/home/user/Documents/report.txt"

    def test_escape(self, posix_config):
        result = utf8.safe_join("/home/user/Documents", "../../../etc/passwd",
                                config=posix_config)
        assert result.status == SafePathStatus.ESCAPE
        assert result.path is None

    def test_rejection_fields_are_text(self, posix_config):
        result = utf8.safe_join(PurePosixPath("/srv"), "../etc", config=posix_config)

        assert result.base == "/srv"
        assert result.candidate == "/srv/../etc"
        assert result.offending_prefix == ".."
        for value in (result.base, result.candidate, result.offending_prefix):
            assert type(value) is str

    def test_relaxed_noop(self, posix_config):
        assert utf8.safe_join("/a", ".", config=posix_config).status == SafePathStatus.NOOP
        assert utf8.relaxed_safe_join("/a", ".", config=posix_config).path == "/a"

    def test_utf8_bytes_accepted(self, posix_config):
        result = utf8.safe_join(b"/caf\xc3\xa9", b"menu", config=posix_config)
        assert result.path == "/café/menu"

    def test_pure_path_accepted(self, posix_config):
        result = utf8.safe_join(PurePosixPath("/a"), "b", config=posix_config)
        assert result.path == "/a/b"

    def test_or_raise(self, posix_config):
        assert utf8.safe_join_or_raise("/a", "b", config=posix_config) == "/a/b"
        with pytest.raises(PathEscapeError):
            utf8.safe_join_or_raise("/a", "..", config=posix_config)
        assert utf8.relaxed_safe_join_or_raise("/a", ".", config=posix_config) == "/a"


class TestUtf8Parent:
    """Parent guard over text paths."""

    def test_parent(self, posix_config):
        assert utf8.safe_parent("/a/b", config=posix_config).path == "/a"

    def test_fields_are_text(self, posix_config):
        result = utf8.safe_parent("/a/b", config=posix_config)
        assert type(result.base) is str
        assert type(result.candidate) is str
        assert result.candidate == "/a"

    def test_root(self, posix_config):
        assert utf8.safe_parent("/", config=posix_config).status == SafePathStatus.NOOP
        assert utf8.relaxed_safe_parent("/", config=posix_config).path == "/"

    def test_or_raise(self, posix_config):
        assert utf8.safe_parent_or_raise("/a/b", config=posix_config) == "/a"
        with pytest.raises(PathNoOpError):
            utf8.safe_parent_or_raise("/", config=posix_config)
        assert utf8.relaxed_safe_parent_or_raise("/", config=posix_config) == "/"


class TestValidation:
    """Inputs that are not valid UTF-8 are refused before any decision."""

    def test_invalid_bytes(self, posix_config):
        with pytest.raises(InvalidUtf8PathError):
            utf8.safe_join(b"/a", b"\xff", config=posix_config)

    def test_surrogate_escaped_text(self, posix_config):
        with pytest.raises(InvalidUtf8PathError):
            utf8.safe_parent("/a/\udcff", config=posix_config)

    def test_error_names_argument(self):
        with pytest.raises(InvalidUtf8PathError, match="dir"):
            utf8.validate_utf8(b"\xfe", "dir")

    def test_wrong_type(self):
        with pytest.raises(TypeError):
            utf8.validate_utf8(42)

    def test_valid_text_returned_unchanged(self):
        assert utf8.validate_utf8("/a/b") == "/a/b"
