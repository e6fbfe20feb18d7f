"""
Exceptions raised by the ``*_or_raise`` guards and the UTF-8 path layer.
"""

from .result import SafePathStatus


class UnsafePathError(ValueError):
    """Raised when a guard rejects a join or parent operation."""

    status = None

    def __init__(self, message: str, result=None):
        super().__init__(message)
        self.result = result


class PathEscapeError(UnsafePathError):
    """The result, or an intermediate prefix, lies outside the base directory."""

    status = SafePathStatus.ESCAPE


class PathNoOpError(UnsafePathError):
    """The result would be syntactically identical to the base directory."""

    status = SafePathStatus.NOOP


class InvalidUtf8PathError(ValueError):
    """Raised when a path given to ``safe_path.utf8`` is not valid UTF-8."""
