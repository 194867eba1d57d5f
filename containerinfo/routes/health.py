import os
import platform
import time

import psutil
from fastapi import APIRouter

from ..config import settings
from ..metrics.cpu_usage import default_sources

router = APIRouter()

PROCESS_START = time.time()


def _first_existing(paths):
    for path in paths:
        if os.path.exists(path):
            return path
    return None


@router.get("")
def health():
    # Liveness of this service plus which metric sources it can see.
    me = psutil.Process(os.getpid())
    return {
        "status": "ok",
        "pid": me.pid,
        "uptime_seconds": int(time.time() - PROCESS_START),
        "platform": platform.platform(),
        "python": platform.python_version(),
        "cpu_percent": me.cpu_percent(interval=0.0),
        "memory_rss": me.memory_info().rss,
        "sources": {
            "proc": os.path.isdir(settings.proc_dir),
            "cpuinfo": os.path.isfile(settings.cpuinfo_path),
            "loadavg": os.path.isfile(settings.loadavg_path),
            "cpuacct": _first_existing(s.path for s in default_sources()),
        },
    }
