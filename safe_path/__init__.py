"""
Safe Path

Syntactic guards against directory traversal. ``safe_join`` and
``safe_parent`` decide, without touching the filesystem, whether joining
a path onto a base directory (or ascending to its parent) could leave
that directory.
"""

import logging

from .config import SafePathConfig
from .core import PathParts, is_contained, normalize, paternalize, select_sentinel
from .errors import InvalidUtf8PathError, PathEscapeError, PathNoOpError, UnsafePathError
from .guard import (
    GuardTrace,
    TraceStep,
    explain_join,
    explain_parent,
    relaxed_safe_join,
    relaxed_safe_join_or_raise,
    relaxed_safe_parent,
    relaxed_safe_parent_or_raise,
    safe_join,
    safe_join_or_raise,
    safe_parent,
    safe_parent_or_raise,
)
from .result import SafePathResult, SafePathStatus

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.2.0"

__all__ = [
    'GuardTrace',
    'InvalidUtf8PathError',
    'PathEscapeError',
    'PathNoOpError',
    'PathParts',
    'SafePathConfig',
    'SafePathResult',
    'SafePathStatus',
    'TraceStep',
    'UnsafePathError',
    'explain_join',
    'explain_parent',
    'is_contained',
    'normalize',
    'paternalize',
    'relaxed_safe_join',
    'relaxed_safe_join_or_raise',
    'relaxed_safe_parent',
    'relaxed_safe_parent_or_raise',
    'safe_join',
    'safe_join_or_raise',
    'safe_parent',
    'safe_parent_or_raise',
    'select_sentinel',
]
