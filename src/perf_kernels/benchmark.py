from __future__ import annotations

import json
import logging
import statistics
import time
from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

import numpy as np
from tqdm import tqdm

from . import config
from .kernels import fill, fill_typed, heat_step, heat_step_typed
from .mergesort import merge_sort, merge_sort_inplace, merge_sort_typed
from .metrics import Timer, log_event, sample_system
from .profiling import measure_memory
from .reduction import JIT_AVAILABLE, JIT_MODES, MODES, array_sum, inner_product

logger = logging.getLogger(__name__)


@dataclass
class Measurement:
    kernel: str
    variant: str
    size: int
    repeats: int
    warmup: int
    min_ms: float
    mean_ms: float
    max_ms: float
    mem_current: int
    mem_peak: int


def time_thunk(
    fn: Callable[[], Any],
    repeats: int = config.BENCH_REPEATS,
    warmup: int = config.BENCH_WARMUP,
    kernel: str = "thunk",
    variant: str = "",
    size: int = 0,
) -> Measurement:
    """Call `fn` `warmup` times, then time `repeats` calls.

    Results are discarded. Memory is measured on one extra call; allocations
    made by JIT-compiled code outside the Python allocator are not seen.
    """
    if repeats < 1:
        raise ValueError(f"repeats must be >= 1, got {repeats}")
    if warmup < 0:
        raise ValueError(f"warmup must be >= 0, got {warmup}")

    for _ in range(warmup):
        fn()

    times: List[float] = []
    for _ in range(repeats):
        t0 = time.perf_counter()
        fn()
        times.append((time.perf_counter() - t0) * 1000.0)

    mem = measure_memory(fn)

    return Measurement(
        kernel=kernel,
        variant=variant,
        size=size,
        repeats=repeats,
        warmup=warmup,
        min_ms=min(times),
        mean_ms=statistics.fmean(times),
        max_ms=max(times),
        mem_current=mem["current_bytes"],
        mem_peak=mem["peak_bytes"],
    )


def synthetic_vectors(n: int, seed: int = config.BENCH_SEED) -> Tuple[np.ndarray, np.ndarray]:
    rng = np.random.default_rng(seed)
    return rng.random(n), rng.random(n)


def synthetic_keys(n: int, seed: int = config.BENCH_SEED) -> np.ndarray:
    rng = np.random.default_rng(seed)
    return rng.integers(0, max(n, 1), size=n, dtype=np.int64)


def synthetic_grid(n: int) -> np.ndarray:
    # Hot spot in the middle of a cold rod
    u = np.zeros(n, dtype=np.float64)
    if n:
        u[n // 2] = 1.0
    return u


Thunk = Callable[[], Any]


def variants(size: int, seed: int = config.BENCH_SEED) -> List[Tuple[str, str, Thunk]]:
    """Build (kernel, variant, thunk) triples for every benchmarked kernel at `size`."""
    x, y = synthetic_vectors(size, seed)
    xl, yl = x.tolist(), y.tolist()
    keys = synthetic_keys(size, seed)
    keys_l = keys.tolist()
    grid = synthetic_grid(size)
    grid_l = grid.tolist()
    buf_l: List[float] = [0.0] * size
    buf = np.zeros(size, dtype=np.float64)

    out: List[Tuple[str, str, Thunk]] = []
    for mode in MODES:
        if mode in JIT_MODES and not JIT_AVAILABLE:
            continue
        if mode == "checked":
            out.append(("inner_product", mode, lambda: inner_product(xl, yl)))
            out.append(("array_sum", mode, lambda: array_sum(xl)))
        else:
            out.append(("inner_product", mode, lambda m=mode: inner_product(x, y, mode=m)))
            out.append(("array_sum", mode, lambda m=mode: array_sum(x, mode=m)))

    out.append(("merge_sort", "list", lambda: merge_sort(keys_l)))
    out.append(("merge_sort", "inplace", lambda: merge_sort_inplace(list(keys_l))))
    out.append(("merge_sort", "builtin", lambda: sorted(keys_l)))
    out.append(("merge_sort", "numpy", lambda: np.sort(keys, kind="stable")))
    out.append(("fill", "list", lambda: fill(buf_l, 1.0)))
    out.append(("fill", "numpy", lambda: buf.fill(1.0)))
    out.append(("heat_step", "list", lambda: heat_step(grid_l, 0.25)))
    if JIT_AVAILABLE:
        out.append(("merge_sort", "typed", lambda: merge_sort_typed(keys)))
        out.append(("fill", "typed", lambda: fill_typed(buf, 1.0)))
        out.append(("heat_step", "typed", lambda: heat_step_typed(grid, 0.25)))
    return out


def run_bench(
    size: int,
    repeats: int = config.BENCH_REPEATS,
    warmup: int = config.BENCH_WARMUP,
    seed: int = config.BENCH_SEED,
) -> List[Measurement]:
    if not JIT_AVAILABLE:
        logger.warning("numba not importable; skipping JIT variants")
    results: List[Measurement] = []
    for kernel, variant, thunk in variants(size, seed):
        m = time_thunk(thunk, repeats=repeats, warmup=warmup, kernel=kernel, variant=variant, size=size)
        logger.debug("%s/%s n=%d min=%.3fms", kernel, variant, size, m.min_ms)
        results.append(m)
    return results


def run_multi(
    sizes: List[int],
    out_path: Optional[str] = None,
    repeats: int = config.BENCH_REPEATS,
    warmup: int = config.BENCH_WARMUP,
    seed: int = config.BENCH_SEED,
    log_dir: Optional[str] = None,
    progress: bool = True,
) -> List[Measurement]:
    log_event("bench_start", log_dir=log_dir, sizes=sizes, repeats=repeats, warmup=warmup, system=sample_system())
    results: List[Measurement] = []
    for s in tqdm(sizes, desc="bench", disable=not progress):
        t = Timer()
        part = run_bench(s, repeats=repeats, warmup=warmup, seed=seed)
        results.extend(part)
        log_event("bench_size", log_dir=log_dir, size=s, measurements=len(part), ms=t.ms())
        logger.info("size %d: %d measurements", s, len(part))
    if out_path:
        data = [asdict(r) for r in results]
        with open(out_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
    log_event("bench_done", log_dir=log_dir, measurements=len(results), out_path=out_path)
    return results


# --- Comparative baseline vs candidate ---

@dataclass
class CompareResult:
    kernel: str
    size: int
    baseline: str
    candidate: str
    baseline_ms: float
    candidate_ms: float
    speedup: float


def compare(measurements: List[Measurement], kernel: str, baseline: str, candidate: str) -> List[CompareResult]:
    """Pair up two variants of `kernel` by size and report min-time speedups."""
    by_key: Dict[Tuple[str, int], Measurement] = {
        (m.variant, m.size): m for m in measurements if m.kernel == kernel
    }
    out: List[CompareResult] = []
    for size in sorted({m.size for m in measurements if m.kernel == kernel}):
        base = by_key.get((baseline, size))
        cand = by_key.get((candidate, size))
        if base is None or cand is None:
            continue
        speedup = base.min_ms / cand.min_ms if cand.min_ms > 0 else float("inf")
        out.append(CompareResult(
            kernel=kernel,
            size=size,
            baseline=baseline,
            candidate=candidate,
            baseline_ms=base.min_ms,
            candidate_ms=cand.min_ms,
            speedup=speedup,
        ))
    return out
