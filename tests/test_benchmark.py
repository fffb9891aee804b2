import json

import pytest

from perf_kernels.benchmark import Measurement, compare, run_bench, run_multi, synthetic_keys, synthetic_vectors, time_thunk


def test_time_thunk_counts_calls():
    calls = []
    m = time_thunk(lambda: calls.append(1), repeats=3, warmup=2, kernel="noop", variant="list", size=0)
    # warm-up + timed + one memory pass
    assert len(calls) == 6
    assert m.repeats == 3 and m.warmup == 2
    assert 0 <= m.min_ms <= m.mean_ms <= m.max_ms
    assert m.mem_current >= 0 and m.mem_peak >= 0


def test_time_thunk_rejects_bad_counts():
    with pytest.raises(ValueError):
        time_thunk(lambda: None, repeats=0)
    with pytest.raises(ValueError):
        time_thunk(lambda: None, warmup=-1)


def test_synthetic_inputs_reproducible():
    a1, b1 = synthetic_vectors(10, seed=3)
    a2, b2 = synthetic_vectors(10, seed=3)
    assert (a1 == a2).all() and (b1 == b2).all()
    assert synthetic_keys(10, seed=3).tolist() == synthetic_keys(10, seed=3).tolist()
    assert len(synthetic_keys(0)) == 0


def test_run_bench_small():
    results = run_bench(200, repeats=1, warmup=1)
    kernels = {m.kernel for m in results}
    assert kernels == {"inner_product", "array_sum", "merge_sort", "fill", "heat_step"}
    assert all(m.size == 200 for m in results)
    assert ("inner_product", "checked") in {(m.kernel, m.variant) for m in results}


def test_run_multi_writes_json_and_events(tmp_path):
    out = tmp_path / "bench.json"
    results = run_multi([50, 100], out_path=str(out), repeats=1, warmup=1, log_dir=str(tmp_path), progress=False)
    data = json.loads(out.read_text(encoding="utf-8"))
    assert len(data) == len(results)
    assert {d["size"] for d in data} == {50, 100}
    events = [json.loads(line)["event"] for line in (tmp_path / "bench.jsonl").read_text(encoding="utf-8").splitlines()]
    assert events == ["bench_start", "bench_size", "bench_size", "bench_done"]


def _m(variant: str, size: int, ms: float) -> Measurement:
    return Measurement("merge_sort", variant, size, 1, 0, ms, ms, ms, 0, 0)


def test_compare_speedups():
    ms = [_m("list", 10, 4.0), _m("typed", 10, 1.0), _m("list", 20, 8.0), _m("typed", 20, 2.0), _m("list", 30, 1.0)]
    rows = compare(ms, "merge_sort", "list", "typed")
    assert [r.size for r in rows] == [10, 20]
    assert [r.speedup for r in rows] == [4.0, 4.0]
    assert compare(ms, "heat_step", "list", "typed") == []
