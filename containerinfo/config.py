import os
from dataclasses import dataclass
from typing import Tuple


def _get_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes", "y"}


def _get_float(name: str, default: str) -> float:
    try:
        return float(os.getenv(name, default))
    except ValueError:
        return float(default)


def _get_int(name: str, default: str) -> int:
    try:
        return int(os.getenv(name, default))
    except ValueError:
        return int(default)


def _get_paths(name: str, default: str) -> Tuple[str, ...]:
    return tuple(p.strip() for p in os.getenv(name, default).split(";") if p.strip())


# Semicolon separated, each "path" or "path:kind": the v1 hierarchy name "cpu,cpuacct" contains a comma.
DEFAULT_CPUACCT_PATHS = ";".join(
    [
        "/sys/fs/cgroup/cpu,cpuacct/cpuacct.usage",
        "/sys/fs/cgroup/cpuacct/cpuacct.usage",
        "/sys/fs/cgroup/cpu.stat",
    ]
)


@dataclass
class Settings:
    # Procfs sources
    proc_dir: str = os.getenv("PROC_DIR", "/proc")
    cpuinfo_path: str = os.getenv("CPUINFO_PATH", "/proc/cpuinfo")
    loadavg_path: str = os.getenv("LOADAVG_PATH", "/proc/loadavg")

    # Cgroup CPU accounting files, tried in order
    cpuacct_paths: Tuple[str, ...] = _get_paths("CPUACCT_PATHS", DEFAULT_CPUACCT_PATHS)

    # Virtualization detection
    virt_detect_command: Tuple[str, ...] = tuple(os.getenv("VIRT_DETECT_COMMAND", "systemd-detect-virt").split())
    virt_detect_timeout_sec: float = _get_float("VIRT_DETECT_TIMEOUT_SEC", "2")
    virt_detect_max_output: int = _get_int("VIRT_DETECT_MAX_OUTPUT", "128")

    # Logging
    logs_dir: str = os.getenv("LOGS_DIR", "logs")
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()
    log_to_file: bool = _get_bool("LOG_TO_FILE", "true")


settings = Settings()
