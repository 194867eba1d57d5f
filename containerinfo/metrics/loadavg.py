import logging
from dataclasses import dataclass
from typing import Optional

from ..config import settings

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadAverages:
    one: float = 0.0
    five: float = 0.0
    fifteen: float = 0.0


def read_load_averages(loadavg_path: Optional[str] = None) -> LoadAverages:
    # Unreadable or malformed input degrades to zeros rather than failing.
    loadavg_path = loadavg_path or settings.loadavg_path
    try:
        with open(loadavg_path, "r", encoding="utf-8") as f:
            fields = f.read().split()
        one, five, fifteen = (float(x) for x in fields[:3])
    except (OSError, ValueError) as e:
        log.debug("Cannot read load averages from %s: %s", loadavg_path, e)
        return LoadAverages()
    return LoadAverages(one=one, five=five, fifteen=fifteen)
