"""
Exhaustive checks over small path alphabets.

The join guard is compared against an independent depth counter: walk
the candidate path, add one per name, subtract one per '..', and fail
as soon as the depth would go negative or an anchor appears. A base
directory that normalizes to the root accepts everything.
"""

import itertools

import pytest
from pathlib import PurePosixPath

from safe_path import (
    SafePathConfig,
    SafePathStatus,
    normalize,
    relaxed_safe_join,
    relaxed_safe_parent,
    safe_join,
    safe_parent,
)

P = PurePosixPath


def build_paths(names, max_len):
    paths = []
    for length in range(max_len + 1):
        for combo in itertools.product(names, repeat=length):
            rel = "/".join(combo)
            paths.append(rel or ".")
            paths.append("/" + rel)
    return paths


DIRS = build_paths(["a", "..", "."], 3)
PATHS = build_paths(["a", "b", "..", "."], 3)


def root_depth(path):
    """Depth below the root, or None for a relative path."""
    depth = None
    for part in P(path).parts:
        if part == "/":
            depth = 0
        elif part == "..":
            if depth is not None and depth > 0:
                depth -= 1
        elif depth is not None:
            depth += 1
    return depth


def counter_join(dir, path):
    """Return (relaxed_ok, final_depth) for joining path onto dir."""
    if root_depth(dir) == 0:
        return True, root_depth(P(dir) / path)
    depth = 0
    for part in P(path).parts:
        if part == "/":
            return False, None
        if part == "..":
            if depth <= 0:
                return False, None
            depth -= 1
        else:
            depth += 1
    return True, depth


@pytest.fixture(scope="module")
def config():
    return SafePathConfig(flavor="posix", emit_events=False)


class TestJoinAgainstCounter:
    """Soundness and completeness of the join guard."""

    def test_relaxed_matches_counter(self, config):
        for dir in DIRS:
            for path in PATHS:
                expected, _ = counter_join(dir, path)
                result = relaxed_safe_join(dir, path, config=config)
                assert result.success is expected, (dir, path)
                if expected:
                    assert result.path == P(dir) / path
                else:
                    assert result.status == SafePathStatus.ESCAPE, (dir, path)

    def test_strict_matches_counter(self, config):
        for dir in DIRS:
            for path in PATHS:
                ok, depth = counter_join(dir, path)
                result = safe_join(dir, path, config=config)
                if not ok:
                    assert result.status == SafePathStatus.ESCAPE, (dir, path)
                elif depth == 0:
                    assert result.status == SafePathStatus.NOOP, (dir, path)
                else:
                    assert result.status == SafePathStatus.OK, (dir, path)


class TestRelaxation:
    """Relaxed mode only drops the no-op rule."""

    def test_relaxed_only_weakens_noop(self, config):
        for dir in DIRS:
            for path in PATHS:
                strict = safe_join(dir, path, config=config)
                relaxed = relaxed_safe_join(dir, path, config=config)
                if relaxed.success:
                    assert strict.status in (SafePathStatus.OK, SafePathStatus.NOOP)
                else:
                    assert strict.status == SafePathStatus.ESCAPE
                if strict.success:
                    assert relaxed.success

    def test_parent_relaxation(self, config):
        for dir in DIRS:
            strict = safe_parent(dir, config=config)
            relaxed = relaxed_safe_parent(dir, config=config)
            if strict.status == SafePathStatus.NOOP:
                assert relaxed.success
            else:
                assert strict.status == relaxed.status


class TestParentJoinDuality:
    """Ascending from p is safe exactly when p.parent / p.name is a safe join."""

    def test_duality(self, config):
        for dir in DIRS:
            p = P(dir)
            if not p.name:
                continue
            parent_ok = safe_parent(p, config=config).success
            join_ok = safe_join(p.parent, p.name, config=config).success
            assert parent_ok is join_ok, dir

            parent_ok = relaxed_safe_parent(p, config=config).success
            join_ok = relaxed_safe_join(p.parent, p.name, config=config).success
            assert parent_ok is join_ok, dir


class TestNormalizeProperties:
    """Normalizer invariants over the whole grid."""

    def test_idempotent(self):
        for path in PATHS:
            once = normalize(P(path))
            assert normalize(once) == once, path

    def test_no_interior_ascents(self):
        """After normalization '..' can only appear as a leading run."""
        for path in PATHS:
            names = normalize(P(path)).names
            rest = list(itertools.dropwhile(lambda n: n == "..", names))
            assert ".." not in rest, path
            assert "." not in names, path
