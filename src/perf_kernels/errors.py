"""
Kernel errors.
"""

from __future__ import annotations


class PreconditionError(ValueError):
    """
    Raised when two sequences that must have equal length do not.
    """

    def __init__(self, expected: int, observed: int, context: str | None = None) -> None:
        message = f"length mismatch: {expected} != {observed}"
        if context:
            message = f"{context}: {message}"
        super().__init__(message)
        self.expected = expected
        self.observed = observed
        self.context = context


def require_same_length(x, y, context: str | None = None) -> int:
    """Return the shared length of `x` and `y` or raise PreconditionError."""
    n = len(x)
    m = len(y)
    if n != m:
        raise PreconditionError(n, m, context)
    return n
