from __future__ import annotations

import json
from collections import defaultdict
from typing import Dict, List, Tuple

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import seaborn as sns


def plot_bench_json(input_json_path: str, output_png_path: str) -> None:
    """Plot min time vs size, one panel per kernel and one line per variant."""
    with open(input_json_path, "r", encoding="utf-8") as f:
        data: List[dict] = json.load(f)

    series: Dict[str, Dict[str, List[Tuple[int, float]]]] = defaultdict(lambda: defaultdict(list))
    for d in data:
        series[d["kernel"]][d["variant"]].append((d["size"], d["min_ms"]))

    kernels = sorted(series)
    sns.set(style="whitegrid")
    fig, axes = plt.subplots(1, max(len(kernels), 1), figsize=(4.5 * max(len(kernels), 1), 4.5), squeeze=False)
    for ax, kernel in zip(axes[0], kernels):
        for variant, points in sorted(series[kernel].items()):
            points.sort()
            ax.plot([p[0] for p in points], [p[1] for p in points], label=variant, marker="o")
        ax.set_xscale("log")
        ax.set_yscale("log")
        ax.set_xlabel("Input size (elements)")
        ax.set_ylabel("Min time (ms)")
        ax.set_title(kernel)
        ax.legend(fontsize="small")
    fig.suptitle("perf_kernels benchmark results")
    fig.tight_layout()
    fig.savefig(output_png_path)
    plt.close(fig)
