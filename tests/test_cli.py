import json

from perf_kernels.cli import main
from perf_kernels.viz import plot_bench_json


def test_cli_bench(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    out_json = tmp_path / "out" / "bench.json"
    main(["bench", "64", "--out-json", str(out_json), "--repeats", "1", "--warmup", "1", "--no-progress"])
    data = json.loads(out_json.read_text(encoding="utf-8"))
    assert data and all(d["size"] == 64 for d in data)
    assert (tmp_path / "logs" / "bench.jsonl").exists()
    out = capsys.readouterr().out
    assert "Benchmark results saved" in out
    assert any(line.startswith("fill ") and "vs list" in line for line in out.splitlines())


def test_cli_profile(capsys):
    main(["profile", "merge_sort", "--size", "200"])
    assert "merge_sort" in capsys.readouterr().out


def test_plot_bench_json(tmp_path):
    rows = [
        {"kernel": "merge_sort", "variant": v, "size": s, "min_ms": ms}
        for v, s, ms in [("list", 10, 1.0), ("list", 100, 9.0), ("typed", 10, 0.1), ("typed", 100, 0.5)]
    ]
    src = tmp_path / "bench.json"
    src.write_text(json.dumps(rows), encoding="utf-8")
    png = tmp_path / "bench.png"
    plot_bench_json(str(src), str(png))
    assert png.stat().st_size > 0
