"""
Safe Path Result Types

Result types and status enums for guard decisions.
"""

from enum import Enum
from typing import Any, Dict, Optional


class SafePathStatus(Enum):
    """Outcome of a guard decision."""
    OK = "ok"
    ESCAPE = "escape"
    NOOP = "noop"


class SafePathResult:
    """Result from a join or parent guard."""

    def __init__(self, status: SafePathStatus, success: bool, **kwargs):
        self.status = status
        self.success = success
        self.path = kwargs.get('path')
        self.reason = kwargs.get('reason')
        self.operation = kwargs.get('operation')
        self.base = kwargs.get('base')
        self.candidate = kwargs.get('candidate')
        self.offending_prefix = kwargs.get('offending_prefix')

    @classmethod
    def success_result(cls, path: Any, operation: str, base: Any = None,
                       candidate: Any = None) -> 'SafePathResult':
        """Create a successful result carrying the computed path."""
        return cls(
            status=SafePathStatus.OK,
            success=True,
            path=path,
            operation=operation,
            base=base,
            candidate=candidate
        )

    @classmethod
    def escape_result(cls, operation: str, base: Any = None, candidate: Any = None,
                      offending_prefix: Any = None,
                      reason: Optional[str] = None) -> 'SafePathResult':
        """Create a result for a path that leaves its base directory."""
        if reason is None:
            if operation == "parent":
                reason = "unsafe path ascension"
            else:
                reason = "unsafe path adjunction"
        return cls(
            status=SafePathStatus.ESCAPE,
            success=False,
            reason=reason,
            operation=operation,
            base=base,
            candidate=candidate,
            offending_prefix=offending_prefix
        )

    @classmethod
    def noop_result(cls, operation: str, base: Any = None,
                    candidate: Any = None) -> 'SafePathResult':
        """Create a result for an operation that would leave the path unchanged."""
        return cls(
            status=SafePathStatus.NOOP,
            success=False,
            reason=f"{operation} would be a no-op",
            operation=operation,
            base=base,
            candidate=candidate
        )

    def to_exception(self) -> Exception:
        """Build the exception matching this result's failure status."""
        from .errors import PathEscapeError, PathNoOpError

        if self.status == SafePathStatus.ESCAPE:
            return PathEscapeError(self.reason, result=self)
        if self.status == SafePathStatus.NOOP:
            return PathNoOpError(self.reason, result=self)
        raise ValueError("successful result has no exception")

    def dict(self) -> Dict[str, Any]:
        """Convert result to dictionary."""
        return {
            'status': self.status.value,
            'success': self.success,
            'path': None if self.path is None else str(self.path),
            'reason': self.reason,
            'operation': self.operation,
            'base': None if self.base is None else str(self.base),
            'candidate': None if self.candidate is None else str(self.candidate),
            'offending_prefix': (
                None if self.offending_prefix is None else str(self.offending_prefix)
            )
        }

    def __repr__(self) -> str:
        if self.success:
            return f"SafePathResult(status={self.status.value}, path={self.path!r})"
        return f"SafePathResult(status={self.status.value}, reason={self.reason!r})"
