import json
import logging
import os
import time
from datetime import datetime, timezone

try:
    import psutil  # type: ignore
except Exception:
    psutil = None  # type: ignore

from . import config

logger = logging.getLogger(__name__)

_LOG_NAME = "bench.jsonl"


def log_path(log_dir=None):
    return os.path.join(log_dir or config.LOG_DIR, _LOG_NAME)


def now_iso():
    return datetime.now(timezone.utc).isoformat()


def log_event(event: str, log_dir=None, **fields):
    """Append one JSON line describing `event` to the benchmark event log."""
    path = log_path(log_dir)
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    payload = {"ts": now_iso(), "event": event}
    payload.update(fields)
    line = json.dumps(payload, ensure_ascii=False, default=str)
    with open(path, "a", encoding="utf-8") as f:
        f.write(line + "\n")
    logger.debug("event %s written to %s", event, path)


def sample_system():
    pid = os.getpid()
    info = {"pid": pid}
    if psutil is not None:
        p = psutil.Process(pid)
        mem = p.memory_info()
        info.update({
            "cpu_percent": psutil.cpu_percent(interval=None),
            "cpu_count": psutil.cpu_count(logical=True),
            "rss_bytes": int(mem.rss),
            "vms_bytes": int(mem.vms),
        })
    return info


class Timer:
    def __init__(self):
        self.t0 = time.perf_counter()

    def ms(self):
        return (time.perf_counter() - self.t0) * 1000.0
