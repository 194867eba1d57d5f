"""CPU usage of the current cgroup, derived from its cumulative CPU-time counter.

The kernel only exposes the total CPU time consumed by the cgroup, so a usage
percentage needs two readings. The sampler keeps the previous reading and
reports the average per-core utilization since then.
"""
import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional

from ..config import settings

log = logging.getLogger(__name__)

KIND_CPUACCT = "cpuacct"  # cgroup v1: single integer, nanoseconds
KIND_CPU_STAT = "cpu.stat"  # cgroup v2: "usage_usec N" line, microseconds
KINDS = (KIND_CPUACCT, KIND_CPU_STAT)


class MalformedUsage(ValueError):
    pass


@dataclass(frozen=True)
class UsageSource:
    path: str
    kind: str = KIND_CPUACCT

    @classmethod
    def from_path(cls, path: str) -> "UsageSource":
        """Build a source from "path" or "path:kind"; a bare path gets its kind from the file name."""
        base, sep, kind = path.rpartition(":")
        if sep and kind in KINDS:
            return cls(path=base, kind=kind)
        kind = KIND_CPU_STAT if path.endswith("cpu.stat") else KIND_CPUACCT
        return cls(path=path, kind=kind)

    def parse(self, content: str) -> int:
        """Return the cumulative usage in nanoseconds."""
        if self.kind == KIND_CPU_STAT:
            for line in content.splitlines():
                parts = line.split()
                if len(parts) == 2 and parts[0] == "usage_usec":
                    return _parse_counter(parts[1]) * 1000
            raise MalformedUsage(f"no usage_usec in {self.path}")
        tokens = content.split()
        if not tokens:
            raise MalformedUsage(f"empty {self.path}")
        return _parse_counter(tokens[0])


def _parse_counter(token: str) -> int:
    if not (token.isascii() and token.isdigit()):
        raise MalformedUsage(f"not a counter: {token!r}")
    return int(token)


def default_sources() -> List[UsageSource]:
    return [UsageSource.from_path(p) for p in settings.cpuacct_paths]


@dataclass
class SamplerState:
    last_usage_ns: int = 0
    last_sample_at: Optional[float] = None


class CpuUsageSampler:
    """Computes CPU usage percentages from successive cgroup counter readings.

    One instance holds one baseline; share an instance between callers that
    should see rates relative to each other's samples. ``sample`` is safe to
    call from several threads.
    """

    def __init__(
        self,
        sources: Optional[Iterable[UsageSource]] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.sources = list(sources) if sources is not None else default_sources()
        self.clock = clock
        self.state = SamplerState()
        self._lock = threading.Lock()

    def read_usage(self) -> Optional[int]:
        """Read the cumulative usage (ns) from the first source that opens."""
        for source in self.sources:
            try:
                f = open(source.path, "rb")
            except OSError:
                continue
            try:
                with f:
                    content = f.read().decode("utf-8")
                return source.parse(content)
            except (OSError, UnicodeDecodeError, MalformedUsage) as e:
                log.debug("Malformed CPU accounting data: %s", e)
                return None
        log.debug("No CPU accounting file available among %s", [s.path for s in self.sources])
        return None

    def sample(self, cores: Optional[int]) -> Optional[float]:
        """Return the CPU usage percent since the previous sample.

        The first successful sample only sets the baseline and reports 0.0.
        Returns None when the counter cannot be read; state is left as is.
        """
        with self._lock:
            usage = self.read_usage()
            if usage is None:
                return None
            now = self.clock()

            state = self.state
            percent = 0.0
            if state.last_sample_at is not None:
                dt = now - state.last_sample_at
                delta = usage - state.last_usage_ns
                if delta < 0:
                    log.info("CPU usage counter went backwards (%d -> %d), treating as reset", state.last_usage_ns, usage)
                elif dt > 0 and cores is not None and cores > 0:
                    percent = delta / (dt * 1e9 * cores) * 100.0

            state.last_usage_ns = usage
            state.last_sample_at = now
            return percent

    def reset(self) -> None:
        with self._lock:
            self.state = SamplerState()
