"""perf_kernels: slow vs fast numeric kernels and the harness that times them.

This package provides:
- Reductions: inner_product / array_sum in checked, typed, trusted, fastmath
  and vectorized modes
- Merge sort: pure, in-place and JIT-typed variants sharing one stable tie-break
- Demonstration kernels: array filling and an explicit heat-equation step
- Profiling and benchmarking harnesses

The generic variants run on plain Python; the typed variants need Numba.
"""

__all__ = [
    "PreconditionError",
    "inner_product",
    "array_sum",
    "sum_of_squares",
    "merge",
    "merge_sort",
    "merge_sort_inplace",
    "merge_sort_typed",
    "fill",
    "fill_typed",
    "heat_step",
    "heat_step_typed",
]

from .errors import PreconditionError
from .kernels import fill, fill_typed, heat_step, heat_step_typed
from .mergesort import merge, merge_sort, merge_sort_inplace, merge_sort_typed
from .reduction import array_sum, inner_product, sum_of_squares
