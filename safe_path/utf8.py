"""
UTF-8 Path Guards

Same guards as ``safe_path.guard`` for callers that keep paths as text.
Inputs must be valid UTF-8 (bytes are decoded strictly, and strings
carrying ``surrogateescape`` code points are refused); successful
results carry a ``str`` path.
"""

import os
from pathlib import PurePath
from typing import Optional

from . import guard
from .config import SafePathConfig
from .errors import InvalidUtf8PathError
from .result import SafePathResult


def validate_utf8(value, name: str = "path"):
    """
    Return ``value`` in a form the guards accept, or raise
    ``InvalidUtf8PathError`` if it cannot be represented as UTF-8.
    """
    if isinstance(value, bytes):
        try:
            return value.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidUtf8PathError(f"{name} is not valid UTF-8") from exc

    if isinstance(value, PurePath):
        text = str(value)
    elif isinstance(value, os.PathLike):
        return validate_utf8(os.fspath(value), name)
    elif isinstance(value, str):
        text = value
    else:
        raise TypeError(f"{name} must be str, bytes or os.PathLike, not {type(value).__name__}")

    try:
        text.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise InvalidUtf8PathError(f"{name} is not valid UTF-8") from exc
    return value


def _as_text(result: SafePathResult) -> SafePathResult:
    for name in ("path", "base", "candidate", "offending_prefix"):
        value = getattr(result, name)
        if value is not None:
            setattr(result, name, str(value))
    return result


def _raise_for(result: SafePathResult) -> str:
    if not result.success:
        raise result.to_exception()
    return result.path


def safe_join(dir, path, *, config: Optional[SafePathConfig] = None) -> SafePathResult:
    """UTF-8 form of ``safe_path.guard.safe_join``."""
    dir = validate_utf8(dir, "dir")
    path = validate_utf8(path)
    return _as_text(guard.safe_join(dir, path, config=config))


def relaxed_safe_join(dir, path, *,
                      config: Optional[SafePathConfig] = None) -> SafePathResult:
    """UTF-8 form of ``safe_path.guard.relaxed_safe_join``."""
    dir = validate_utf8(dir, "dir")
    path = validate_utf8(path)
    return _as_text(guard.relaxed_safe_join(dir, path, config=config))


def safe_join_or_raise(dir, path, *, config: Optional[SafePathConfig] = None) -> str:
    """
    Raising form of ``safe_join``. Meant only for migrating code that used
    unchecked joins; prefer ``safe_join`` for untrusted input.
    """
    return _raise_for(safe_join(dir, path, config=config))


def relaxed_safe_join_or_raise(dir, path, *,
                               config: Optional[SafePathConfig] = None) -> str:
    return _raise_for(relaxed_safe_join(dir, path, config=config))


def safe_parent(dir, *, config: Optional[SafePathConfig] = None) -> SafePathResult:
    """UTF-8 form of ``safe_path.guard.safe_parent``."""
    dir = validate_utf8(dir, "dir")
    return _as_text(guard.safe_parent(dir, config=config))


def relaxed_safe_parent(dir, *, config: Optional[SafePathConfig] = None) -> SafePathResult:
    """UTF-8 form of ``safe_path.guard.relaxed_safe_parent``."""
    dir = validate_utf8(dir, "dir")
    return _as_text(guard.relaxed_safe_parent(dir, config=config))


def safe_parent_or_raise(dir, *, config: Optional[SafePathConfig] = None) -> str:
    return _raise_for(safe_parent(dir, config=config))


def relaxed_safe_parent_or_raise(dir, *, config: Optional[SafePathConfig] = None) -> str:
    return _raise_for(relaxed_safe_parent(dir, config=config))
