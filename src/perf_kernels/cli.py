from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

from . import config
from .benchmark import compare, run_multi, synthetic_grid, synthetic_keys, synthetic_vectors
from .kernels import heat_step
from .mergesort import merge_sort
from .profiling import run_cprofile, run_line_profiler, sample_stacks
from .reduction import array_sum, inner_product
from .viz import plot_bench_json

logger = logging.getLogger(__name__)


def _profile_targets(size: int, seed: int) -> Dict[str, Tuple[Callable[..., Any], tuple]]:
    x, y = synthetic_vectors(size, seed)
    return {
        "inner_product": (inner_product, (x.tolist(), y.tolist())),
        "array_sum": (array_sum, (x.tolist(),)),
        "merge_sort": (merge_sort, (synthetic_keys(size, seed).tolist(),)),
        "heat_step": (heat_step, (synthetic_grid(size).tolist(), 0.25)),
    }


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="perf-kernels", description="Slow vs fast numeric kernels and their benchmarks")
    parser.add_argument("--log-level", default=config.LOG_LEVEL, help="Logging level (default from PERF_KERNELS_LOG_LEVEL)")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_bench = sub.add_parser("bench", help="Run synthetic benchmarks and generate plot")
    p_bench.add_argument("sizes", nargs="+", type=int, help="Input sizes, e.g. 1000 10000 100000")
    p_bench.add_argument("--out-json", dest="out_json", required=True, help="Path to write benchmark JSON")
    p_bench.add_argument("--out-png", dest="out_png", default="", help="Path to write plot PNG")
    p_bench.add_argument("--repeats", type=int, default=config.BENCH_REPEATS, help="Timed calls per variant")
    p_bench.add_argument("--warmup", type=int, default=config.BENCH_WARMUP, help="Discarded calls per variant")
    p_bench.add_argument("--seed", type=int, default=config.BENCH_SEED, help="Seed for synthetic inputs")
    p_bench.add_argument("--no-progress", dest="progress", action="store_false", help="Hide the progress bar")

    p_prof = sub.add_parser("profile", help="Profile the generic variant of one kernel")
    p_prof.add_argument("kernel", choices=["inner_product", "array_sum", "merge_sort", "heat_step"])
    p_prof.add_argument("--size", type=int, default=100_000, help="Input size")
    p_prof.add_argument("--seed", type=int, default=config.BENCH_SEED, help="Seed for synthetic inputs")
    group = p_prof.add_mutually_exclusive_group()
    group.add_argument("--line", action="store_true", help="Use line_profiler instead of cProfile")
    group.add_argument("--sample", action="store_true", help="Use the sampling profiler instead of cProfile")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, str(args.log_level).upper(), logging.INFO))

    if args.cmd == "bench":
        # Ensure output directories exist
        Path(args.out_json).parent.mkdir(parents=True, exist_ok=True)
        results = run_multi(args.sizes, out_path=args.out_json, repeats=args.repeats, warmup=args.warmup, seed=args.seed, progress=args.progress)
        for kernel, baseline in (("inner_product", "checked"), ("array_sum", "checked"), ("merge_sort", "list"), ("fill", "list"), ("heat_step", "list")):
            for variant in sorted({m.variant for m in results if m.kernel == kernel and m.variant != baseline}):
                for c in compare(results, kernel, baseline, variant):
                    print(f"{c.kernel:14s} n={c.size:<10d} {c.candidate:>10s} vs {c.baseline:<8s} {c.speedup:8.2f}x")
        print("Benchmark results saved:", args.out_json)
        if args.out_png:
            Path(args.out_png).parent.mkdir(parents=True, exist_ok=True)
            plot_bench_json(args.out_json, args.out_png)
            print("Plot saved:", args.out_png)
    elif args.cmd == "profile":
        func, fargs = _profile_targets(args.size, args.seed)[args.kernel]
        logger.info("profiling %s at n=%d", args.kernel, args.size)
        if args.line:
            print(run_line_profiler(func, *fargs))
        elif args.sample:
            print(sample_stacks(func, *fargs).format())
        else:
            print(run_cprofile(func, *fargs))


if __name__ == "__main__":
    main()
