"""Demonstration kernels: array filling and an explicit heat-equation step.

Each comes as a generic Python loop and a JIT variant over NumPy arrays.
"""

from __future__ import annotations

from typing import Any, List, MutableSequence, Sequence

import numpy as np

try:  # Optional acceleration
    import numba as nb  # type: ignore
except Exception:  # pragma: no cover
    nb = None  # type: ignore


def fill(out: MutableSequence[Any], value: Any) -> MutableSequence[Any]:
    """Write `value` into every slot of `out` and return it."""
    for i in range(len(out)):
        out[i] = value
    return out


def fill_typed(arr: np.ndarray, value: Any) -> np.ndarray:
    """JIT variant of `fill` over a NumPy array; `value` is cast to arr.dtype."""
    if arr.ndim != 1:
        raise ValueError(f"expected a 1-D array, got {arr.ndim}-D")
    _fill_jit(arr, arr.dtype.type(value))
    return arr


def heat_step(u: Sequence[float], alpha: float) -> List[float]:
    """One explicit (FTCS) step of u_t = alpha * u_xx with fixed endpoints.

    `alpha` is the dimensionless ratio dt * k / dx**2; the explicit scheme is
    stable only for 0 < alpha <= 0.5.
    """
    _check_alpha(alpha)
    n = len(u)
    new = list(u)
    for i in range(1, n - 1):
        new[i] = u[i] + alpha * (u[i - 1] - 2 * u[i] + u[i + 1])
    return new


def heat_step_typed(u: Any, alpha: float) -> np.ndarray:
    """JIT variant of `heat_step`; returns a new float64 array."""
    _check_alpha(alpha)
    a = np.ascontiguousarray(u, dtype=np.float64)
    if a.ndim != 1:
        raise ValueError(f"expected a 1-D grid, got {a.ndim}-D")
    out = a.copy()
    _heat_step_jit(a, out, float(alpha))
    return out


def _check_alpha(alpha: float) -> None:
    if not 0.0 < alpha <= 0.5:
        raise ValueError(f"alpha must be in (0, 0.5] for a stable explicit step, got {alpha}")


if nb is not None:  # Optional JIT kernels
    @nb.njit(cache=True, boundscheck=False)
    def _fill_jit(arr: np.ndarray, value: Any) -> None:
        for i in range(arr.shape[0]):
            arr[i] = value

    @nb.njit(cache=True, boundscheck=False)
    def _heat_step_jit(u: np.ndarray, out: np.ndarray, alpha: float) -> None:
        for i in range(1, u.shape[0] - 1):
            out[i] = u[i] + alpha * (u[i - 1] - 2 * u[i] + u[i + 1])
else:
    def _fill_jit(*args, **kwargs):  # type: ignore
        raise RuntimeError("Numba not available")

    def _heat_step_jit(*args, **kwargs):  # type: ignore
        raise RuntimeError("Numba not available")
