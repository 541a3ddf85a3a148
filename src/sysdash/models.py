"""Data models for sysdash."""

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class HostInfo:
    """Immutable snapshot of the host identity, captured once at startup."""

    hostname: str
    platform: str  # 'ubuntu', 'darwin', 'windows', etc.
    platform_version: str
    kernel_version: str
    uptime_seconds: int


@dataclass(slots=True, frozen=True)
class MetricSample:
    """One successful reading of the three utilization probes."""

    cpu_percent: float  # 0.0 - 100.0, whole machine
    memory_percent: float
    disk_percent: float


@dataclass(slots=True)
class DashboardState:
    """
    Latest known values shown by the dashboard.

    Owned by the render loop and mutated only from its tick handler.
    """

    cpu_percent: float = 0.0
    memory_percent: float = 0.0
    disk_percent: float = 0.0
    host_info: HostInfo | None = None
    last_error: str | None = None

    def apply(self, sample: MetricSample | None) -> bool:
        """
        Merge a sample into the state.

        A missing sample (failed tick) leaves every field untouched so the
        previous values stay on screen.

        Returns:
            True if the state was updated.
        """
        if sample is None:
            return False
        self.cpu_percent = sample.cpu_percent
        self.memory_percent = sample.memory_percent
        self.disk_percent = sample.disk_percent
        return True
