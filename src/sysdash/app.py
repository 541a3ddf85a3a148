"""sysdash - Main Textual application."""

import argparse
import logging
import math
import sys
from enum import Enum

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.logging import TextualHandler
from textual.timer import Timer
from textual.widgets import Static

from sysdash.models import DashboardState
from sysdash.monitor import MetricSource
from sysdash.render import render_dashboard

logger = logging.getLogger(__name__)

MIN_INTERVAL = 0.1


def positive_interval(value: str) -> float:
    """Argparse type for a finite, positive number of seconds."""
    try:
        seconds = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid interval: {value!r}") from None
    if not math.isfinite(seconds) or seconds <= 0:
        raise argparse.ArgumentTypeError(f"interval must be a finite number above 0, got {value!r}")
    return seconds


class LoopState(Enum):
    """Lifecycle of the sampling-and-render loop."""

    RUNNING = "running"
    TERMINATED = "terminated"


class DashboardView(Static):
    """Static frame showing the latest rendered dashboard text."""

    DEFAULT_CSS = """
    DashboardView {
        width: auto;
        height: auto;
        padding: 1 2;
    }
    """

    def __init__(self, *args, **kwargs) -> None:
        """Initialize DashboardView with markup disabled (bars use brackets)."""
        kwargs.setdefault("markup", False)
        super().__init__(*args, **kwargs)


class SysdashApp(App):
    """Main sysdash application."""

    TITLE = "sysdash"
    SUB_TITLE = "System Monitor"

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("ctrl+c", "quit", "Quit", show=False, priority=True),
    ]

    def __init__(self, source: MetricSource | None = None, interval: float = 1.0) -> None:
        """
        Initialize the SysdashApp.

        Args:
            source: Metric adapter to poll. Defaults to the root filesystem.
            interval: Seconds between ticks. Default 1.0s.
        """
        super().__init__()
        self._source = source if source is not None else MetricSource()
        self._tick_interval = max(MIN_INTERVAL, interval)
        self._loop_state = LoopState.RUNNING
        self._tick_timer: Timer | None = None
        self._frames_rendered = 0
        # Host identity is captured once and never re-queried
        self._dashboard = DashboardState(host_info=self._source.sample_host_info())

    @property
    def dashboard_state(self) -> DashboardState:
        """Get the live dashboard state."""
        return self._dashboard

    @property
    def loop_state(self) -> LoopState:
        """Get the current loop state."""
        return self._loop_state

    @property
    def tick_interval(self) -> float:
        """Get the tick interval."""
        return self._tick_interval

    @property
    def frames_rendered(self) -> int:
        """Number of frames drawn so far."""
        return self._frames_rendered

    def compose(self) -> ComposeResult:
        """Compose the application layout."""
        yield DashboardView(render_dashboard(self._dashboard), id="dashboard")

    def on_mount(self) -> None:
        """Run the first tick as soon as the app is mounted."""
        self._tick()

    def _tick(self) -> None:
        """Sample, merge, redraw, then schedule exactly one next tick."""
        if self._loop_state is LoopState.TERMINATED:
            return

        sample = self._source.sample_metrics()
        if not self._dashboard.apply(sample):
            logger.debug("Tick without a sample, keeping previous values")
        self._draw_frame()

        self._tick_timer = self.set_timer(self._tick_interval, self._tick, name="tick")

    def _draw_frame(self) -> None:
        """Push the current state to the dashboard widget."""
        view = self.query_one("#dashboard", DashboardView)
        view.update(render_dashboard(self._dashboard))
        self._frames_rendered += 1

    def action_quit(self) -> None:
        """Stop ticking and exit cleanly."""
        self._loop_state = LoopState.TERMINATED
        if self._tick_timer is not None:
            self._tick_timer.stop()
            self._tick_timer = None
        self.exit(return_code=0)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="sysdash",
        description="Terminal dashboard for CPU, memory and disk utilization.",
    )
    parser.add_argument(
        "--interval",
        type=positive_interval,
        default=1.0,
        help="Seconds between samples (default: 1.0)",
    )
    parser.add_argument(
        "--disk-path",
        default="/",
        help="Mount point to report disk usage for (default: /)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Send debug logging to the Textual devtools console",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Entry point for sysdash. Returns the process exit code."""
    args = parse_args(argv)
    if args.debug:
        root = logging.getLogger()
        root.addHandler(TextualHandler())
        root.setLevel(logging.DEBUG)

    try:
        app = SysdashApp(MetricSource(args.disk_path), interval=args.interval)
        app.run()
    except Exception as exc:
        print(f"sysdash: there's been an error: {exc}", file=sys.stderr)
        return 1
    if app.return_code:
        # Textual already reported the traceback; keep the one-line summary
        error = getattr(app, "_exception", None) or f"exited with code {app.return_code}"
        print(f"sysdash: there's been an error: {error}", file=sys.stderr)
    return app.return_code or 0


if __name__ == "__main__":
    raise SystemExit(main())
