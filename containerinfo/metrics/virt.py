import abc
import enum
import logging
import subprocess
from typing import Optional, Sequence

from ..config import settings

log = logging.getLogger(__name__)


class Virtualization(str, enum.Enum):
    NONE = "none"
    LXC = "lxc"


def classify_virt(output: Optional[str]) -> Virtualization:
    """Map the detector's output to a classification; only an exact "lxc" counts."""
    if not output:
        return Virtualization.NONE
    lines = output.splitlines()
    first = lines[0].strip() if lines else ""
    return Virtualization.LXC if first == "lxc" else Virtualization.NONE


class VirtDetector(abc.ABC):
    """Classifies the virtualization the service runs under."""

    @abc.abstractmethod
    def detect(self) -> Virtualization:
        raise NotImplementedError


class StaticVirtDetector(VirtDetector):
    def __init__(self, value: Virtualization = Virtualization.NONE):
        self.value = value

    def detect(self) -> Virtualization:
        return self.value


class SubprocessVirtDetector(VirtDetector):
    def __init__(
        self,
        command: Optional[Sequence[str]] = None,
        timeout: Optional[float] = None,
        max_output: Optional[int] = None,
    ):
        self.command = list(command or settings.virt_detect_command)
        self.timeout = timeout if timeout is not None else settings.virt_detect_timeout_sec
        self.max_output = max_output if max_output is not None else settings.virt_detect_max_output

    def run(self) -> str:
        """Run the detection command and return its (truncated) stdout, "" on failure."""
        if not self.command:
            return ""
        try:
            # systemd-detect-virt exits 1 when it prints "none"; the output decides.
            proc = subprocess.run(
                self.command,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
                timeout=self.timeout,
            )
        except FileNotFoundError:
            log.debug("Virtualization detector not available: %s", self.command[0])
            return ""
        except subprocess.TimeoutExpired:
            log.warning("Virtualization detector timed out after %ss", self.timeout)
            return ""
        except OSError as e:
            log.debug("Virtualization detector failed: %s", e)
            return ""
        return proc.stdout[: self.max_output].decode("utf-8", errors="ignore")

    def detect(self) -> Virtualization:
        return classify_virt(self.run())
