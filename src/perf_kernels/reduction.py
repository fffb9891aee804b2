"""Reductions over homogeneous numeric sequences.

``inner_product`` and ``array_sum`` share one set of modes. The generic
``checked`` loop is the reference; the JIT modes return the same type, and
``typed`` / ``trusted`` the same bits, for any numeric dtype.
"""

from __future__ import annotations

from typing import Any, Sequence, Tuple

import numpy as np

try:  # Optional acceleration
    import numba as nb  # type: ignore
except Exception:  # pragma: no cover
    nb = None  # type: ignore

from .errors import require_same_length

MODES = ("checked", "typed", "trusted", "fastmath", "vectorized")
JIT_MODES = ("typed", "trusted", "fastmath")
JIT_AVAILABLE = nb is not None


def inner_product(x: Sequence[Any], y: Sequence[Any], *, mode: str = "checked") -> Any:
    """Return sum(x[i] * y[i]) accumulated left to right.

    Modes:
    - checked: generic Python loop over any element type (default)
    - typed: JIT kernel over a concrete NumPy dtype, bounds checked
    - trusted: JIT kernel with bounds checking compiled out
    - fastmath: JIT kernel allowed to reassociate; not bit-reproducible
    - vectorized: numpy.dot; may reorder; not bit-reproducible

    Lengths are validated in every mode before any element is read.
    Boolean arrays are only accepted in checked mode.
    """
    _check_mode(mode)
    n = require_same_length(x, y, "inner_product")

    if mode == "checked":
        acc = _zero_of(x)
        for i in range(n):
            acc += x[i] * y[i]
        return acc

    a, b = _as_typed_pair(x, y)
    if mode == "vectorized":
        return _as_dtype(np.dot(a, b), a.dtype)
    zero = a.dtype.type(0)
    if mode == "typed":
        return _as_dtype(_dot_checked(a, b, zero), a.dtype)
    if mode == "trusted":
        return _as_dtype(_dot_trusted(a, b, zero), a.dtype)
    return _as_dtype(_dot_fastmath(a, b, zero), a.dtype)


def array_sum(x: Sequence[Any], *, mode: str = "checked") -> Any:
    """Return sum(x[i]) accumulated left to right. Valid for any length."""
    _check_mode(mode)

    if mode == "checked":
        acc = _zero_of(x)
        for i in range(len(x)):
            acc += x[i]
        return acc

    a = _as_typed(x)
    if mode == "vectorized":
        return _as_dtype(np.sum(a, dtype=a.dtype), a.dtype)
    zero = a.dtype.type(0)
    if mode == "typed":
        return _as_dtype(_sum_checked(a, zero), a.dtype)
    if mode == "trusted":
        return _as_dtype(_sum_trusted(a, zero), a.dtype)
    return _as_dtype(_sum_fastmath(a, zero), a.dtype)


def sum_of_squares(x: Sequence[Any], *, mode: str = "checked") -> Any:
    return inner_product(x, x, mode=mode)


def _check_mode(mode: str) -> None:
    if mode not in MODES:
        raise ValueError(f"unknown mode {mode!r}; expected one of {', '.join(MODES)}")


def _zero_of(x: Sequence[Any]) -> Any:
    # Additive identity of the element type, so the accumulator never widens.
    if isinstance(x, np.ndarray):
        return x.dtype.type(0)
    if len(x) == 0:
        return 0
    return type(x[0])(0)


def _as_dtype(value: Any, dtype: np.dtype) -> Any:
    # Numba widens narrow integers to int64; wrap back to the element type.
    return np.asarray(value).astype(dtype, copy=False)[()]


def _as_typed(x: Sequence[Any], dtype: Any = None) -> np.ndarray:
    a = np.ascontiguousarray(x, dtype=dtype)
    if a.ndim != 1:
        raise ValueError(f"expected a 1-D sequence, got {a.ndim}-D")
    if a.dtype.kind not in "iufc":
        raise TypeError(f"typed modes need a numeric element type, got {a.dtype}")
    return a


def _as_typed_pair(x: Sequence[Any], y: Sequence[Any]) -> Tuple[np.ndarray, np.ndarray]:
    a = _as_typed(x)
    b = _as_typed(y)
    dtype = np.result_type(a.dtype, b.dtype)
    return a.astype(dtype, copy=False), b.astype(dtype, copy=False)


if nb is not None:  # JIT kernels; one per compile-flag combination
    @nb.njit(cache=True, boundscheck=True)
    def _dot_checked(x: np.ndarray, y: np.ndarray, zero: Any) -> Any:
        acc = zero
        for i in range(x.shape[0]):
            acc += x[i] * y[i]
        return acc

    @nb.njit(cache=True, boundscheck=False)
    def _dot_trusted(x: np.ndarray, y: np.ndarray, zero: Any) -> Any:
        acc = zero
        for i in range(x.shape[0]):
            acc += x[i] * y[i]
        return acc

    @nb.njit(cache=True, boundscheck=False, fastmath=True)
    def _dot_fastmath(x: np.ndarray, y: np.ndarray, zero: Any) -> Any:
        acc = zero
        for i in range(x.shape[0]):
            acc += x[i] * y[i]
        return acc

    @nb.njit(cache=True, boundscheck=True)
    def _sum_checked(x: np.ndarray, zero: Any) -> Any:
        acc = zero
        for i in range(x.shape[0]):
            acc += x[i]
        return acc

    @nb.njit(cache=True, boundscheck=False)
    def _sum_trusted(x: np.ndarray, zero: Any) -> Any:
        acc = zero
        for i in range(x.shape[0]):
            acc += x[i]
        return acc

    @nb.njit(cache=True, boundscheck=False, fastmath=True)
    def _sum_fastmath(x: np.ndarray, zero: Any) -> Any:
        acc = zero
        for i in range(x.shape[0]):
            acc += x[i]
        return acc
else:
    def _numba_missing(*args, **kwargs):  # type: ignore
        raise RuntimeError("Numba not available")

    _dot_checked = _dot_trusted = _dot_fastmath = _numba_missing
    _sum_checked = _sum_trusted = _sum_fastmath = _numba_missing
