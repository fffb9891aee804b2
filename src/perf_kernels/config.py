from dotenv import load_dotenv
import os

load_dotenv()

BENCH_REPEATS = int(os.getenv("PERF_KERNELS_REPEATS", 5))
BENCH_WARMUP = int(os.getenv("PERF_KERNELS_WARMUP", 1))
BENCH_SEED = int(os.getenv("PERF_KERNELS_SEED", 42))
LOG_DIR = os.getenv("PERF_KERNELS_LOG_DIR", "logs")
LOG_LEVEL = os.getenv("PERF_KERNELS_LOG_LEVEL", "INFO").upper()
