import logging
from typing import Optional

from ..config import settings

log = logging.getLogger(__name__)


def count_cores(cpuinfo_path: Optional[str] = None) -> Optional[int]:
    """Count the logical processors declared in a cpuinfo file.

    Every "processor : N" line is one logical core. Returns None when the
    file cannot be read.
    """
    cpuinfo_path = cpuinfo_path or settings.cpuinfo_path
    count = 0
    try:
        with open(cpuinfo_path, "r", encoding="utf-8", errors="ignore") as f:
            for line in f:
                key, sep, _ = line.partition(":")
                if sep and key.strip() == "processor":
                    count += 1
    except OSError as e:
        log.debug("Cannot read %s: %s", cpuinfo_path, e)
        return None
    return count
