"""
Syntactic Path Primitives

Normalization, sentinel selection and the paternalize-and-compare
containment check shared by the join and parent guards. Nothing in this
module touches the filesystem.
"""

from itertools import count
from typing import Iterable, NamedTuple, Optional, Tuple

CUR_DIR = "."
PARENT_DIR = ".."


class PathParts(NamedTuple):
    """A path broken into its anchor (drive and/or root) and named components."""
    anchor: str
    names: Tuple[str, ...]

    @property
    def is_absolute(self) -> bool:
        return bool(self.anchor)

    def component_count(self) -> int:
        return len(self.names) + (1 if self.anchor else 0)

    def __str__(self) -> str:
        if not self.names:
            return self.anchor or CUR_DIR
        sep = "\\" if "\\" in self.anchor else "/"
        return self.anchor + sep.join(self.names)


def split_path(path) -> PathParts:
    """Split a ``PurePath`` (or an existing ``PathParts``) into ``PathParts``."""
    if isinstance(path, PathParts):
        return path
    parts = path.parts
    if path.anchor:
        # POSIX keeps a leading "//" distinct; it is still the root.
        anchor = "/" if path.anchor == "//" else path.anchor
        return PathParts(anchor, tuple(parts[1:]))
    return PathParts("", tuple(parts))


def normalize(path) -> PathParts:
    """
    Collapse ``.`` and ``name/..`` pairs without consulting the filesystem.

    Unresolved leading ``..`` components of a relative path are kept.
    For an absolute path a ``..`` directly after the anchor is dropped.
    """
    path = split_path(path)
    stack = []
    for name in path.names:
        if name in ("", CUR_DIR):
            continue
        if name == PARENT_DIR:
            if stack and stack[-1] != PARENT_DIR:
                stack.pop()
            elif not path.anchor:
                stack.append(PARENT_DIR)
            continue
        stack.append(name)
    return PathParts(path.anchor, tuple(stack))


def _sentinel_candidates() -> Iterable[str]:
    for width in count(1):
        yield "x" * width


def select_sentinel(*paths) -> str:
    """
    Return a normal component that occurs in none of ``paths``.

    Candidates are checked against the full set of components present,
    so the result is exact and deterministic.
    """
    used = set()
    for path in paths:
        used.update(split_path(path).names)
    return next(c for c in _sentinel_candidates() if c not in used)


def paternalize(path, sentinel: str, padding: int) -> PathParts:
    """Prepend ``padding`` copies of ``sentinel`` to a relative path."""
    path = split_path(path)
    if path.anchor:
        return path
    return PathParts("", (sentinel,) * padding + path.names)


def starts_with(path: PathParts, prefix: PathParts) -> bool:
    """Component-wise prefix test; anchors must match exactly."""
    if path.anchor != prefix.anchor:
        return False
    return path.names[: len(prefix.names)] == prefix.names


def padded_normal_form(path, sentinel: str, padding: int) -> PathParts:
    return normalize(paternalize(path, sentinel, padding))


def is_contained(outer, inner, sentinel: Optional[str] = None,
                 padding: Optional[int] = None) -> bool:
    """
    Return True if ``inner`` cannot have syntactically escaped ``outer``.

    Both paths are padded with ``padding`` sentinel components (when
    relative) before normalizing, so unresolved ``..`` in ``inner`` is
    compared against a stand-in for the directories above ``outer``.
    ``padding`` defaults to the combined component count of both paths
    and ``sentinel`` to a component absent from both.
    """
    outer = split_path(outer)
    inner = split_path(inner)
    if padding is None:
        padding = outer.component_count() + inner.component_count()
    if sentinel is None:
        sentinel = select_sentinel(outer, inner)
    return starts_with(
        padded_normal_form(inner, sentinel, padding),
        padded_normal_form(outer, sentinel, padding),
    )
