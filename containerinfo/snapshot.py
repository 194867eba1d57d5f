"""Assembles the container metrics into one snapshot and renders it as JSON.

Per-metric failures are carried as None and rendered with the -1 markers
the front end already understands. Only a failure to produce the document
itself raises SnapshotError.
"""
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .config import settings
from .metrics.cores import count_cores
from .metrics.cpu_usage import CpuUsageSampler
from .metrics.loadavg import LoadAverages, read_load_averages
from .metrics.processes import count_processes
from .metrics.virt import SubprocessVirtDetector, VirtDetector, Virtualization

log = logging.getLogger(__name__)

MISSING = -1


class SnapshotError(Exception):
    """The snapshot document could not be produced."""


@dataclass
class Snapshot:
    processes: Optional[int]
    cores: Optional[int]
    cpu_usage: Optional[float]
    load_avg: LoadAverages
    load_percent: LoadAverages
    virt: Virtualization


def load_percentages(load_avg: LoadAverages, cores: Optional[int]) -> LoadAverages:
    # A load of 1.0 per core is 100%.
    if cores is None or cores <= 0:
        return LoadAverages()
    return LoadAverages(
        one=load_avg.one / cores * 100.0,
        five=load_avg.five / cores * 100.0,
        fifteen=load_avg.fifteen / cores * 100.0,
    )


def _fmt(value: float) -> str:
    return "%.2f" % value


def _pct(value: float) -> str:
    return "%.2f%%" % value


def _windows(values: LoadAverages, fmt) -> Dict[str, str]:
    return {"1min": fmt(values.one), "5min": fmt(values.five), "15min": fmt(values.fifteen)}


def to_dict(snapshot: Snapshot) -> Dict[str, Any]:
    return {
        "processes": snapshot.processes if snapshot.processes is not None else MISSING,
        "cpu_usage": _pct(snapshot.cpu_usage if snapshot.cpu_usage is not None else MISSING),
        "nprocs": snapshot.cores if snapshot.cores is not None else MISSING,
        "load_avg": _windows(snapshot.load_avg, _fmt),
        "load_percent": _windows(snapshot.load_percent, _pct),
        "virt": Virtualization(snapshot.virt).value,
    }


class SnapshotBuilder:
    def __init__(
        self,
        proc_dir: Optional[str] = None,
        cpuinfo_path: Optional[str] = None,
        loadavg_path: Optional[str] = None,
        sampler: Optional[CpuUsageSampler] = None,
        virt_detector: Optional[VirtDetector] = None,
    ):
        self.proc_dir = proc_dir or settings.proc_dir
        self.cpuinfo_path = cpuinfo_path or settings.cpuinfo_path
        self.loadavg_path = loadavg_path or settings.loadavg_path
        self.sampler = sampler or CpuUsageSampler()
        self.virt_detector = virt_detector or SubprocessVirtDetector()

    def build(self) -> Snapshot:
        # Read once so the sampler and the load normalization agree.
        cores = count_cores(self.cpuinfo_path)
        load_avg = read_load_averages(self.loadavg_path)
        return Snapshot(
            processes=count_processes(self.proc_dir),
            cores=cores,
            cpu_usage=self.sampler.sample(cores),
            load_avg=load_avg,
            load_percent=load_percentages(load_avg, cores),
            virt=self.virt_detector.detect(),
        )

    def render(self, snapshot: Optional[Snapshot] = None, indent: Optional[int] = None) -> str:
        if snapshot is None:
            snapshot = self.build()
        try:
            return json.dumps(to_dict(snapshot), indent=indent)
        except (TypeError, ValueError) as e:
            raise SnapshotError(f"Cannot serialize snapshot: {e}") from e
