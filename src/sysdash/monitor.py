"""Host metric probes for sysdash."""

import logging
import math
import platform
import socket
import time

import psutil

from sysdash.models import HostInfo, MetricSample

logger = logging.getLogger(__name__)

# Errors a probe may raise that only mean "no reading this time".
PROBE_ERRORS = (psutil.Error, OSError, ValueError, TypeError, AttributeError, IndexError)


def _valid_percent(value: object) -> bool:
    """Check that a probe returned a finite percentage in [0, 100]."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and 0.0 <= value <= 100.0


def _platform_identity() -> tuple[str, str]:
    """Return the (platform, platform_version) pair for this host."""
    system = platform.system()
    if system == "Linux":
        try:
            release = platform.freedesktop_os_release()
        except OSError:
            return "linux", platform.release()
        return release.get("ID", "linux"), release.get("VERSION_ID", "")
    if system == "Darwin":
        return "darwin", platform.mac_ver()[0]
    return system.lower(), platform.version()


class MetricSource:
    """
    Best-effort adapter over the OS probes.

    Every failure is turned into "no update": sample_host_info() returns None
    and sample_metrics() returns None. Nothing is retried and no exception
    leaves this class.
    """

    def __init__(self, disk_path: str = "/") -> None:
        """
        Initialize the MetricSource.

        Args:
            disk_path: Mount point whose usage is reported. Default "/".
        """
        self._disk_path = disk_path
        # Prime the CPU counter (first call returns 0.0)
        try:
            psutil.cpu_percent(interval=None)
        except PROBE_ERRORS as exc:
            logger.debug("CPU counter priming failed: %s", exc)

    @property
    def disk_path(self) -> str:
        """Get the monitored mount point."""
        return self._disk_path

    def sample_host_info(self) -> HostInfo | None:
        """Collect the host identity, or None if any part is unavailable."""
        try:
            name, version = _platform_identity()
            uptime = max(0, int(time.time() - psutil.boot_time()))
            return HostInfo(
                hostname=socket.gethostname(),
                platform=name,
                platform_version=version,
                kernel_version=platform.release(),
                uptime_seconds=uptime,
            )
        except PROBE_ERRORS as exc:
            logger.debug("Host info unavailable: %s", exc)
            return None

    def sample_metrics(self) -> MetricSample | None:
        """
        Collect CPU, memory and disk utilization.

        CPU usage is measured over a zero-length window (since the previous
        call), so this never sleeps. If any probe fails or reports a value
        outside [0, 100], the whole sample is dropped.
        """
        try:
            cpu = psutil.cpu_percent(interval=None)
            memory = psutil.virtual_memory().percent
            disk = psutil.disk_usage(self._disk_path).percent
        except PROBE_ERRORS as exc:
            logger.debug("Metric sampling failed: %s", exc)
            return None

        for label, value in (("cpu", cpu), ("memory", memory), ("disk", disk)):
            if not _valid_percent(value):
                logger.debug("Discarding sample, invalid %s reading: %r", label, value)
                return None

        return MetricSample(
            cpu_percent=float(cpu),
            memory_percent=float(memory),
            disk_percent=float(disk),
        )
