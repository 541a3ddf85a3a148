"""Tests for dashboard text rendering."""

import math

import pytest

from sysdash.models import DashboardState, HostInfo
from sysdash.render import BAR_WIDTH, QUIT_HINT, TITLE, progress_bar, render_dashboard


def bar_interior(bar: str) -> str:
    """Return the characters between the brackets of a progress bar."""
    return bar[bar.index("[") + 1 : bar.index("]")]


def make_state(**kwargs) -> DashboardState:
    """Build a populated DashboardState; keyword arguments override fields."""
    host = HostInfo(
        hostname="devbox",
        platform="ubuntu",
        platform_version="22.04",
        kernel_version="6.5.0-generic",
        uptime_seconds=7300,
    )
    defaults = {"cpu_percent": 37.2, "memory_percent": 81.0, "disk_percent": 5.5, "host_info": host}
    defaults.update(kwargs)
    return DashboardState(**defaults)


class TestProgressBar:
    """Tests for progress_bar."""

    @pytest.mark.parametrize("percent", [0.0, 4.9, 5.0, 33.3, 50.0, 99.9, 100.0])
    def test_fill_count(self, percent):
        """Test the fill count is floor(p / 100 * 20) followed by blanks."""
        interior = bar_interior(progress_bar(percent))
        filled = math.floor(percent / 100 * BAR_WIDTH)

        assert len(interior) == BAR_WIDTH
        assert interior == "=" * filled + " " * (BAR_WIDTH - filled)

    def test_full_bar(self):
        """Test 100% fills every cell."""
        assert progress_bar(100.0) == "[" + "=" * 20 + "] 100.0%"

    def test_empty_bar(self):
        """Test 0% leaves every cell blank."""
        assert progress_bar(0.0) == "[" + " " * 20 + "] 0.0%"

    def test_out_of_range_clamps(self):
        """Test values above 100 stay inside the brackets."""
        bar = progress_bar(150.0)

        assert bar_interior(bar) == "=" * 20
        assert bar.endswith("] 150.0%")

    def test_negative_clamps_to_empty(self):
        """Test negative values render an empty bar."""
        assert bar_interior(progress_bar(-10.0)) == " " * 20

    def test_nan_renders_empty(self):
        """Test NaN does not raise and renders an empty bar."""
        assert bar_interior(progress_bar(float("nan"))) == " " * 20

    def test_label_has_one_decimal(self):
        """Test the label is formatted to exactly one decimal place."""
        assert progress_bar(37.25).endswith(" 37.2%")
        assert progress_bar(5).endswith(" 5.0%")

    def test_custom_width(self):
        """Test the bar honours a custom width."""
        assert bar_interior(progress_bar(50.0, width=10)) == "=" * 5 + " " * 5


class TestRenderDashboard:
    """Tests for render_dashboard."""

    def test_full_frame(self):
        """Test the complete frame layout with host info."""
        frame = render_dashboard(make_state())

        assert frame.splitlines() == [
            TITLE,
            "─" * len(TITLE),
            "",
            "Hostname: devbox",
            "OS:       ubuntu 22.04",
            "Kernel:   6.5.0-generic",
            "Uptime:   2 hours",
            "",
            "CPU:  [=======             ] 37.2%",
            "RAM:  [================    ] 81.0%",
            "Disk: [=                   ] 5.5%",
            "",
            QUIT_HINT,
        ]

    def test_metric_fill_counts(self):
        """Test each bar's fill count is floor(percent / 5)."""
        lines = render_dashboard(make_state()).splitlines()
        bars = {line.split(":")[0]: line for line in lines if line.startswith(("CPU", "RAM", "Disk"))}

        assert bar_interior(bars["CPU"]).count("=") == 7
        assert bar_interior(bars["RAM"]).count("=") == 16
        assert bar_interior(bars["Disk"]).count("=") == 1

    def test_idempotent(self):
        """Test rendering the same state twice yields identical text."""
        state = make_state()

        assert render_dashboard(state) == render_dashboard(state)

    def test_without_host_info(self):
        """Test the host block is omitted when host info is missing."""
        frame = render_dashboard(make_state(host_info=None))

        assert "Hostname:" not in frame
        assert "Kernel:" not in frame
        assert "Uptime:" not in frame
        assert "CPU:  [" in frame
        assert "RAM:  [" in frame
        assert "Disk: [" in frame
        assert frame.endswith(QUIT_HINT)

    def test_uptime_truncates_to_whole_hours(self):
        """Test uptime drops fractional hours."""
        host = HostInfo("h", "darwin", "14.2", "23.2.0", uptime_seconds=3599)

        frame = render_dashboard(make_state(host_info=host))

        assert "Uptime:   0 hours" in frame

    def test_error_short_circuits(self):
        """Test a stored error replaces the whole body."""
        frame = render_dashboard(make_state(last_error="terminal went away"))

        assert frame == "Error: terminal went away"

    def test_default_state(self):
        """Test a fresh state renders zeroed bars."""
        frame = render_dashboard(DashboardState())

        assert "CPU:  [" + " " * 20 + "] 0.0%" in frame
