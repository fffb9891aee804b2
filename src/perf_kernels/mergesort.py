"""
Merge Sort
==========
Top-down merge sort in three flavours:

- ``merge_sort``: pure, returns a fresh list, any orderable element type
- ``merge_sort_inplace``: sorts a mutable sequence using one scratch buffer
- ``merge_sort_typed``: JIT-compiled over a NumPy array of a concrete dtype

All three split at ``n // 2`` and share one tie-break: the left head is
taken unless it is strictly greater than the right head. Equal keys
therefore keep their input order (the sort is stable).
"""

from __future__ import annotations

from typing import Any, Callable, List, MutableSequence, Optional, Sequence, TypeVar

import numpy as np

try:  # Optional acceleration
    import numba as nb  # type: ignore
except Exception:  # pragma: no cover
    nb = None  # type: ignore

T = TypeVar("T")


def merge_sort(
    seq: Sequence[T],
    *,
    key: Optional[Callable[[T], Any]] = None,
) -> List[T]:
    """
    Return a new list containing items from *seq* in non-decreasing order.

    Parameters
    ----------
    seq : sequence
        Input items. Never mutated.
    key : callable, optional
        One-argument function extracting the comparison key, as in
        ``sorted(..., key=...)``.

    Returns
    -------
    list
        A fresh sorted list, also for empty and single-item input.
    """
    items: List[T] = list(seq)
    n = len(items)
    if n <= 1:
        return items

    mid = n // 2
    left = merge_sort(items[:mid], key=key)
    right = merge_sort(items[mid:], key=key)
    return merge(left, right, key=key)


def merge(
    left: Sequence[T],
    right: Sequence[T],
    *,
    key: Optional[Callable[[T], Any]] = None,
) -> List[T]:
    """Merge two sorted sequences into a pre-sized output list (stable)."""
    len_l = len(left)
    len_r = len(right)
    out: List[Any] = [None] * (len_l + len_r)
    i = j = 0

    for k in range(len_l + len_r):
        if j >= len_r or (i < len_l and not _greater(left[i], right[j], key)):
            out[k] = left[i]
            i += 1
        else:
            out[k] = right[j]
            j += 1

    return out


def merge_sort_inplace(
    seq: MutableSequence[T],
    *,
    key: Optional[Callable[[T], Any]] = None,
) -> None:
    """Sort *seq* in place. Same split points and tie-break as ``merge_sort``."""
    n = len(seq)
    if n <= 1:
        return
    scratch: List[T] = list(seq)
    _sort_range(seq, scratch, 0, n, key)


def merge_sort_typed(arr: Any) -> np.ndarray:
    """Return a sorted copy of a 1-D numeric array using the JIT kernel.

    The output buffer has the input's dtype, so no element is boxed.
    """
    a = np.ascontiguousarray(arr)
    if a.ndim != 1:
        raise ValueError(f"expected a 1-D array, got {a.ndim}-D")
    if a.dtype.kind not in "biuf":
        raise TypeError(f"typed merge sort needs a real numeric dtype, got {a.dtype}")
    return _merge_sort_jit(a)


def _greater(a: Any, b: Any, key: Optional[Callable[[Any], Any]]) -> bool:
    if key is None:
        return a > b
    return key(a) > key(b)


def _sort_range(
    seq: MutableSequence[Any],
    scratch: List[Any],
    lo: int,
    hi: int,
    key: Optional[Callable[[Any], Any]],
) -> None:
    n = hi - lo
    if n <= 1:
        return
    mid = lo + n // 2
    _sort_range(seq, scratch, lo, mid, key)
    _sort_range(seq, scratch, mid, hi, key)

    for k in range(lo, hi):
        scratch[k] = seq[k]

    i, j = lo, mid
    for k in range(lo, hi):
        if j >= hi or (i < mid and not _greater(scratch[i], scratch[j], key)):
            seq[k] = scratch[i]
            i += 1
        else:
            seq[k] = scratch[j]
            j += 1


if nb is not None:  # Optional JIT for concrete dtypes
    @nb.njit(cache=True)
    def _merge_jit(left: np.ndarray, right: np.ndarray) -> np.ndarray:
        len_l = left.shape[0]
        len_r = right.shape[0]
        out = np.empty(len_l + len_r, dtype=left.dtype)
        i = 0
        j = 0
        for k in range(len_l + len_r):
            if j >= len_r or (i < len_l and not left[i] > right[j]):
                out[k] = left[i]
                i += 1
            else:
                out[k] = right[j]
                j += 1
        return out

    # Recursive dispatchers are not cached
    @nb.njit
    def _sort_range_jit(x: np.ndarray, lo: int, hi: int) -> np.ndarray:
        n = hi - lo
        if n <= 1:
            return x[lo:hi].copy()
        mid = lo + n // 2
        left = _sort_range_jit(x, lo, mid)
        right = _sort_range_jit(x, mid, hi)
        return _merge_jit(left, right)

    @nb.njit
    def _merge_sort_jit(x: np.ndarray) -> np.ndarray:
        return _sort_range_jit(x, 0, x.shape[0])
else:
    def _merge_sort_jit(*args, **kwargs):  # type: ignore
        raise RuntimeError("Numba not available")
