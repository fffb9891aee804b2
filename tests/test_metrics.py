import json

from perf_kernels.metrics import Timer, log_event, log_path, sample_system


def test_log_event_appends_json_lines(tmp_path):
    log_event("one", log_dir=str(tmp_path), size=10)
    log_event("two", log_dir=str(tmp_path))
    lines = open(log_path(str(tmp_path)), encoding="utf-8").read().splitlines()
    first = json.loads(lines[0])
    assert [json.loads(line)["event"] for line in lines] == ["one", "two"]
    assert first["size"] == 10 and "ts" in first


def test_sample_system_and_timer():
    assert "pid" in sample_system()
    t = Timer()
    assert t.ms() >= 0
