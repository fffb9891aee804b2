from __future__ import annotations

import cProfile
import pstats
import io
import sys
import threading
from collections import Counter
from dataclasses import dataclass, field
from typing import Callable, Any, Dict, List, Tuple

import tracemalloc

try:
    # Optional line profiler
    from line_profiler import LineProfiler
except Exception:  # pragma: no cover
    LineProfiler = None  # type: ignore


def run_cprofile(func: Callable[..., Any], *args: Any, **kwargs: Any) -> str:
    """Run cProfile on `func` and return a textual report as a string."""
    pr = cProfile.Profile()
    pr.enable()
    func(*args, **kwargs)
    pr.disable()
    s = io.StringIO()
    ps = pstats.Stats(pr, stream=s).sort_stats("tottime")
    ps.print_stats(50)
    return s.getvalue()


def run_line_profiler(func: Callable[..., Any], *args: Any, **kwargs: Any) -> str:
    """Run line_profiler on `func` if available; return text report or a note."""
    if LineProfiler is None:
        return "line_profiler not installed; skipping."
    lp = LineProfiler()
    lp.add_function(func)
    lp_wrapper = lp(func)
    lp_wrapper(*args, **kwargs)
    s = io.StringIO()
    lp.print_stats(stream=s)
    return s.getvalue()


def measure_memory(func: Callable[..., Any], *args: Any, **kwargs: Any) -> Dict[str, Any]:
    """Measure peak and current memory via tracemalloc for `func` execution."""
    tracemalloc.start()
    try:
        func(*args, **kwargs)
        current, peak = tracemalloc.get_traced_memory()
    finally:
        tracemalloc.stop()
    return {"current_bytes": current, "peak_bytes": peak}


# --- Sampling profiler ---

Stack = Tuple[str, ...]


@dataclass
class StackSamples:
    counts: Counter = field(default_factory=Counter)
    interval: float = 0.001
    result: Any = None

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    def top(self, n: int = 10) -> List[Tuple[Stack, int]]:
        return self.counts.most_common(n)

    def functions(self) -> Counter:
        """Count samples in which each function appears anywhere on the stack."""
        seen: Counter = Counter()
        for stack, c in self.counts.items():
            for name in set(stack):
                seen[name] += c
        return seen

    def format(self, n: int = 10) -> str:
        lines = [f"{self.total} samples every {self.interval * 1000:.3f} ms"]
        for stack, c in self.top(n):
            pct = 100.0 * c / self.total if self.total else 0.0
            lines.append(f"{c:6d} {pct:5.1f}%  " + " <- ".join(reversed(stack)))
        return "\n".join(lines)


def sample_stacks(func: Callable[..., Any], *args: Any, interval: float = 0.001, **kwargs: Any) -> StackSamples:
    """Run `func` on this thread while a sampler thread records its call stack.

    Each sample is the stack outermost-first, one `module:function` entry per
    frame. The result of `func` is kept on the returned StackSamples.
    """
    if interval <= 0:
        raise ValueError(f"interval must be positive, got {interval}")

    target = threading.get_ident()
    samples = StackSamples(interval=interval)
    stop = threading.Event()

    def sampler() -> None:
        while not stop.wait(interval):
            frame = sys._current_frames().get(target)
            if frame is None:
                continue
            stack: List[str] = []
            while frame is not None:
                code = frame.f_code
                stack.append(f"{frame.f_globals.get('__name__', '?')}:{code.co_name}")
                frame = frame.f_back
            samples.counts[tuple(reversed(stack))] += 1

    t = threading.Thread(target=sampler, name="stack-sampler", daemon=True)
    t.start()
    try:
        samples.result = func(*args, **kwargs)
    finally:
        stop.set()
        t.join()
    return samples
