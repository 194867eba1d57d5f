"""
Print container metrics snapshots as JSON.

Run:
  containerinfo                       # one snapshot (cpu_usage is 0.00% on the first sample)
  containerinfo --count 3 --interval 2
"""
import argparse
import logging
import sys
import time

from dotenv import load_dotenv

# Load env before settings are read
load_dotenv()
from .logging_config import configure_logging
from .metrics.virt import StaticVirtDetector
from .snapshot import SnapshotBuilder, SnapshotError

log = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    n = int(value)
    if n < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {n}")
    return n


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(prog="containerinfo", description=__doc__.strip().splitlines()[0])
    ap.add_argument("--count", type=_positive_int, default=1, help="number of snapshots to print")
    ap.add_argument("--interval", type=float, default=1.0, help="seconds between snapshots")
    ap.add_argument("--indent", type=int, default=None, help="pretty-print JSON with this indent")
    ap.add_argument("--skip-virt", action="store_true", help="do not run the virtualization detector")
    args = ap.parse_args(argv)

    configure_logging()

    builder = SnapshotBuilder(virt_detector=StaticVirtDetector() if args.skip_virt else None)
    for i in range(args.count):
        if i:
            time.sleep(max(args.interval, 0.0))
        try:
            print(builder.render(indent=args.indent), flush=True)
        except SnapshotError as e:
            log.error("%s", e)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
