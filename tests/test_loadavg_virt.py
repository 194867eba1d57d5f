import os
import subprocess
import tempfile
import unittest
from types import SimpleNamespace
from unittest.mock import patch

from containerinfo.metrics.loadavg import LoadAverages, read_load_averages
from containerinfo.metrics.virt import SubprocessVirtDetector, VirtDetector, Virtualization, classify_virt


class LoadAverageReaderTest(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.path = os.path.join(self._tmp.name, "loadavg")

    def tearDown(self):
        self._tmp.cleanup()

    def _write(self, content):
        with open(self.path, "w") as f:
            f.write(content)

    def test_reads_three_windows(self):
        self._write("0.52 1.25 2.00 3/412 12345\n")
        self.assertEqual(read_load_averages(self.path), LoadAverages(0.52, 1.25, 2.0))

    def test_missing_file_defaults_to_zero(self):
        self.assertEqual(read_load_averages(self.path), LoadAverages(0.0, 0.0, 0.0))

    def test_truncated_content_defaults_to_zero(self):
        self._write("0.52 1.25\n")
        self.assertEqual(read_load_averages(self.path), LoadAverages())

    def test_non_numeric_content_defaults_to_zero(self):
        self._write("high medium low\n")
        self.assertEqual(read_load_averages(self.path), LoadAverages())


class ClassifyVirtTest(unittest.TestCase):
    def test_exact_lxc(self):
        self.assertEqual(classify_virt("lxc"), Virtualization.LXC)

    def test_trailing_newline_is_ignored(self):
        self.assertEqual(classify_virt("lxc\n"), Virtualization.LXC)
        self.assertEqual(classify_virt("  lxc \n"), Virtualization.LXC)

    def test_other_types_are_none(self):
        for output in ("kvm", "lxc-libvirt", "docker\n", "none\n", "xlxc"):
            self.assertEqual(classify_virt(output), Virtualization.NONE, output)

    def test_empty_output_is_none(self):
        self.assertEqual(classify_virt(""), Virtualization.NONE)
        self.assertEqual(classify_virt(None), Virtualization.NONE)

    def test_only_first_line_counts(self):
        self.assertEqual(classify_virt("kvm\nlxc\n"), Virtualization.NONE)


class SubprocessVirtDetectorTest(unittest.TestCase):
    def test_base_detector_is_abstract(self):
        with self.assertRaises(TypeError):
            VirtDetector()

    def _detector(self):
        return SubprocessVirtDetector(command=["systemd-detect-virt"], timeout=1.5, max_output=128)

    def test_lxc_output(self):
        with patch("containerinfo.metrics.virt.subprocess.run") as run:
            run.return_value = SimpleNamespace(returncode=0, stdout=b"lxc\n")
            self.assertEqual(self._detector().detect(), Virtualization.LXC)
        args, kwargs = run.call_args
        self.assertEqual(args[0], ["systemd-detect-virt"])
        self.assertEqual(kwargs["timeout"], 1.5)

    def test_non_zero_exit_still_uses_output(self):
        with patch("containerinfo.metrics.virt.subprocess.run") as run:
            run.return_value = SimpleNamespace(returncode=1, stdout=b"none\n")
            self.assertEqual(self._detector().detect(), Virtualization.NONE)

    def test_missing_binary(self):
        with patch("containerinfo.metrics.virt.subprocess.run", side_effect=FileNotFoundError()):
            self.assertEqual(self._detector().detect(), Virtualization.NONE)

    def test_timeout(self):
        err = subprocess.TimeoutExpired(cmd="systemd-detect-virt", timeout=1.5)
        with patch("containerinfo.metrics.virt.subprocess.run", side_effect=err):
            self.assertEqual(self._detector().run(), "")

    def test_output_is_bounded(self):
        detector = SubprocessVirtDetector(command=["x"], timeout=1, max_output=3)
        with patch("containerinfo.metrics.virt.subprocess.run") as run:
            run.return_value = SimpleNamespace(returncode=0, stdout=b"lxc" + b"x" * 1000)
            self.assertEqual(detector.run(), "lxc")
            self.assertEqual(detector.detect(), Virtualization.LXC)

    def test_empty_command(self):
        detector = SubprocessVirtDetector(timeout=1, max_output=10)
        detector.command = []
        self.assertEqual(detector.detect(), Virtualization.NONE)


if __name__ == "__main__":
    unittest.main()
