"""
Join and Parent Guards

Use ``safe_join`` in place of ``Path.joinpath`` (or ``/``) and
``safe_parent`` in place of ``Path.parent`` to help prevent directory
traversal attacks.

``safe_join(dir, path)`` rejects ``path`` if any prefix of it, joined to
``dir``, refers to something outside ``dir``. The check is purely
syntactic: both paths are padded with *n* copies of a component *x*
that appears in neither (when relative), normalized, and compared
component-wise. *n* is the total number of components in both paths,
an upper bound on how many directories the join could ascend.

For example, with ``dir = "w"`` and ``path = "y/../../z"``, *n* is 5::

    paternalize(dir)            = x/x/x/x/x/w
    paternalize(dir.join(path)) = x/x/x/x/x/w/y/../../z

The second normalizes to ``x/x/x/x/x/z``, which does not start with
``x/x/x/x/x/w``, so the join is rejected.

LIMITATIONS:
    The filesystem is never consulted. Whether ``dir`` is a directory,
    whether ``path`` contains symlinks, and what is mounted where are all
    ignored. Use ``Path.resolve`` on trusted paths when that matters.
"""

import os
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import List, Optional

from .config import SafePathConfig, default_config
from .core import (
    PathParts,
    is_contained,
    padded_normal_form,
    select_sentinel,
    split_path,
)
from .result import SafePathResult
from .telemetry import emit_decision


@dataclass
class TraceStep:
    """One containment check made while deciding a guard call."""
    prefix: PurePath
    normalized: PathParts
    contained: bool


@dataclass
class GuardTrace:
    """Everything a guard computed on the way to its decision."""
    operation: str
    base: PurePath
    candidate: PurePath
    sentinel: str
    padding: int
    normalized_base: PathParts
    steps: List[TraceStep] = field(default_factory=list)
    result: Optional[SafePathResult] = None


def _resolve_config(config: Optional[SafePathConfig]) -> SafePathConfig:
    return config or default_config()


def _path_class(dir, config: SafePathConfig):
    if isinstance(dir, PurePath):
        return type(dir)
    return config.path_class


def _coerce(value, path_class) -> PurePath:
    if isinstance(value, path_class):
        return value
    if isinstance(value, bytes):
        value = os.fsdecode(value)
    return path_class(value)


def _trace_join(dir, path, relaxed: bool, config: SafePathConfig,
                full: bool = False) -> GuardTrace:
    path_class = _path_class(dir, config)
    base = _coerce(dir, path_class)
    rel = _coerce(path, path_class)

    base_parts = split_path(base)
    rel_parts = rel.parts
    sentinel = select_sentinel(base_parts, split_path(rel))
    padding = base_parts.component_count() + len(rel_parts)

    joined = base.joinpath(rel)
    trace = GuardTrace(
        operation="join",
        base=base,
        candidate=joined,
        sentinel=sentinel,
        padding=padding,
        normalized_base=padded_normal_form(base_parts, sentinel, padding),
    )

    escaped_at = None
    for i in range(1, len(rel_parts) + 1):
        prefix = path_class(*rel_parts[:i])
        candidate = split_path(base.joinpath(prefix))
        contained = is_contained(base_parts, candidate, sentinel, padding)
        trace.steps.append(TraceStep(
            prefix=prefix,
            normalized=padded_normal_form(candidate, sentinel, padding),
            contained=contained,
        ))
        if not contained and escaped_at is None:
            escaped_at = prefix
            if not full:
                break

    if escaped_at is not None:
        trace.result = SafePathResult.escape_result(
            "join", base=base, candidate=joined, offending_prefix=escaped_at
        )
    elif not relaxed and (
        padded_normal_form(split_path(joined), sentinel, padding) == trace.normalized_base
    ):
        trace.result = SafePathResult.noop_result("join", base=base, candidate=joined)
    else:
        trace.result = SafePathResult.success_result(
            joined, "join", base=base, candidate=joined
        )
    return trace


def _trace_parent(dir, relaxed: bool, config: SafePathConfig) -> GuardTrace:
    path_class = _path_class(dir, config)
    base = _coerce(dir, path_class)
    base_parts = split_path(base)

    # Anchors and "." are their own parent.
    parent = base.parent if base_parts.names else base
    parent_parts = split_path(parent)

    sentinel = select_sentinel(base_parts, parent_parts)
    padding = base_parts.component_count() + parent_parts.component_count()
    normalized_parent = padded_normal_form(parent_parts, sentinel, padding)
    normalized_base = padded_normal_form(base_parts, sentinel, padding)

    contained = is_contained(parent_parts, base_parts, sentinel, padding)
    trace = GuardTrace(
        operation="parent",
        base=base,
        candidate=parent,
        sentinel=sentinel,
        padding=padding,
        normalized_base=normalized_parent,
        steps=[TraceStep(prefix=base, normalized=normalized_base, contained=contained)],
    )

    if not contained:
        trace.result = SafePathResult.escape_result("parent", base=base, candidate=parent)
    elif not relaxed and normalized_base == normalized_parent:
        trace.result = SafePathResult.noop_result("parent", base=base, candidate=parent)
    else:
        trace.result = SafePathResult.success_result(
            parent, "parent", base=base, candidate=parent
        )
    return trace


def _decide(trace: GuardTrace, config: SafePathConfig) -> SafePathResult:
    emit_decision(trace.result, config)
    return trace.result


def _raise_for(result: SafePathResult):
    if not result.success:
        raise result.to_exception()
    return result.path


# =============================================================================
# JOIN GUARD
# =============================================================================


def safe_join(dir, path, *, config: Optional[SafePathConfig] = None) -> SafePathResult:
    """
    Join ``path`` to ``dir`` if no prefix of ``path`` leaves ``dir``.

    Returns a successful ``SafePathResult`` whose ``path`` is
    ``dir / path`` exactly as pathlib builds it. Fails with status
    ``ESCAPE`` if some prefix escapes, or ``NOOP`` if the result
    normalizes back to ``dir`` itself (e.g. ``path`` is ``"."``).
    """
    config = _resolve_config(config)
    return _decide(_trace_join(dir, path, False, config), config)


def relaxed_safe_join(dir, path, *,
                      config: Optional[SafePathConfig] = None) -> SafePathResult:
    """Like ``safe_join``, but a result equal to ``dir`` is accepted."""
    config = _resolve_config(config)
    return _decide(_trace_join(dir, path, True, config), config)


def safe_join_or_raise(dir, path, *, config: Optional[SafePathConfig] = None) -> PurePath:
    """
    Raising form of ``safe_join``.

    Raises ``PathEscapeError`` or ``PathNoOpError``. This form exists only
    to ease migration from unchecked joins; code that handles untrusted
    paths (servers in particular) should use ``safe_join`` and inspect the
    result instead.
    """
    return _raise_for(safe_join(dir, path, config=config))


def relaxed_safe_join_or_raise(dir, path, *,
                               config: Optional[SafePathConfig] = None) -> PurePath:
    """Raising form of ``relaxed_safe_join``; see ``safe_join_or_raise``."""
    return _raise_for(relaxed_safe_join(dir, path, config=config))


def explain_join(dir, path, *, relaxed: bool = False,
                 config: Optional[SafePathConfig] = None) -> GuardTrace:
    """Check every prefix of ``path`` and return the full trace without logging."""
    return _trace_join(dir, path, relaxed, _resolve_config(config), full=True)


# =============================================================================
# PARENT GUARD
# =============================================================================


def safe_parent(dir, *, config: Optional[SafePathConfig] = None) -> SafePathResult:
    """
    Return the syntactic parent of ``dir`` if ascending to it is safe.

    Fails with ``ESCAPE`` when ``dir`` does not lie inside the computed
    parent (``..``, ``/x/..``), and with ``NOOP`` when the parent is
    ``dir`` itself (``/``, ``.``).
    """
    config = _resolve_config(config)
    return _decide(_trace_parent(dir, False, config), config)


def relaxed_safe_parent(dir, *, config: Optional[SafePathConfig] = None) -> SafePathResult:
    """Like ``safe_parent``, but a parent equal to ``dir`` is accepted."""
    config = _resolve_config(config)
    return _decide(_trace_parent(dir, True, config), config)


def safe_parent_or_raise(dir, *, config: Optional[SafePathConfig] = None) -> PurePath:
    """Raising form of ``safe_parent``; see ``safe_join_or_raise``."""
    return _raise_for(safe_parent(dir, config=config))


def relaxed_safe_parent_or_raise(dir, *,
                                 config: Optional[SafePathConfig] = None) -> PurePath:
    """Raising form of ``relaxed_safe_parent``; see ``safe_join_or_raise``."""
    return _raise_for(relaxed_safe_parent(dir, config=config))


def explain_parent(dir, *, relaxed: bool = False,
                   config: Optional[SafePathConfig] = None) -> GuardTrace:
    """Return the trace of a parent decision without logging."""
    return _trace_parent(dir, relaxed, _resolve_config(config))
