import io
import json
import unittest
from contextlib import redirect_stdout
from unittest.mock import MagicMock, patch

from containerinfo import cli
from containerinfo.snapshot import SnapshotError


class CliTest(unittest.TestCase):
    def _run(self, argv, builder):
        out = io.StringIO()
        with patch("containerinfo.cli.configure_logging"), patch(
            "containerinfo.cli.SnapshotBuilder", return_value=builder
        ) as factory, patch("containerinfo.cli.time.sleep") as sleep, redirect_stdout(out):
            code = cli.main(argv)
        return code, out.getvalue(), factory, sleep

    def test_prints_requested_number_of_snapshots(self):
        builder = MagicMock()
        builder.render.return_value = json.dumps({"processes": 3})
        code, out, _, sleep = self._run(["--count", "3", "--interval", "0.5"], builder)
        self.assertEqual(code, 0)
        self.assertEqual(out.splitlines(), ['{"processes": 3}'] * 3)
        self.assertEqual(sleep.call_count, 2)
        sleep.assert_called_with(0.5)

    def test_skip_virt_uses_static_detector(self):
        builder = MagicMock()
        builder.render.return_value = "{}"
        _, _, factory, _ = self._run(["--skip-virt"], builder)
        detector = factory.call_args.kwargs["virt_detector"]
        self.assertEqual(detector.detect().value, "none")

    def test_snapshot_error_exits_non_zero(self):
        builder = MagicMock()
        builder.render.side_effect = SnapshotError("boom")
        code, out, _, _ = self._run([], builder)
        self.assertEqual(code, 1)
        self.assertEqual(out, "")

    def test_count_below_one_is_rejected(self):
        for value in ("0", "-2"):
            with self.assertRaises(SystemExit), patch("sys.stderr"):
                cli.main(["--count", value])


if __name__ == "__main__":
    unittest.main()
