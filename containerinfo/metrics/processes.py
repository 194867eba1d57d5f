import logging
import os
from typing import Optional

from ..config import settings

log = logging.getLogger(__name__)


def _is_pid(name: str) -> bool:
    # str.isdigit() also accepts non-ASCII digits like "²"
    return name.isascii() and name.isdigit()


def count_processes(proc_dir: Optional[str] = None) -> Optional[int]:
    """Count the process directories (numeric names) under the procfs root.

    Returns None when the directory cannot be listed.
    """
    proc_dir = proc_dir or settings.proc_dir
    count = 0
    try:
        with os.scandir(proc_dir) as it:
            for entry in it:
                try:
                    if entry.is_dir(follow_symlinks=False) and _is_pid(entry.name):
                        count += 1
                except OSError:
                    # Process exited between readdir and stat
                    continue
    except OSError as e:
        log.debug("Cannot list %s: %s", proc_dir, e)
        return None
    return count
