"""Text rendering for the sysdash frame."""

import math

from sysdash.models import DashboardState

BAR_WIDTH = 20
BAR_FILL = "="
BAR_EMPTY = " "
TITLE = "System Monitor"
QUIT_HINT = "Press 'q' to quit"


def progress_bar(percent: float, width: int = BAR_WIDTH) -> str:
    """
    Format a percentage as a fixed-width bar, e.g. "[====      ] 40.0%".

    The fill count is clamped to [0, width]; the label always shows the raw
    value with one decimal place.
    """
    if math.isnan(percent):
        filled = 0
    elif math.isinf(percent):
        filled = width if percent > 0 else 0
    else:
        filled = math.floor(percent / 100 * width)
    filled = min(max(filled, 0), width)
    return f"[{BAR_FILL * filled}{BAR_EMPTY * (width - filled)}] {percent:.1f}%"


def render_dashboard(state: DashboardState) -> str:
    """Render the whole frame for a state. Same state, same text."""
    if state.last_error is not None:
        return f"Error: {state.last_error}"

    lines = [TITLE, "─" * len(TITLE), ""]

    host = state.host_info
    if host is not None:
        lines.append(f"Hostname: {host.hostname}")
        lines.append(f"OS:       {host.platform} {host.platform_version}")
        lines.append(f"Kernel:   {host.kernel_version}")
        lines.append(f"Uptime:   {host.uptime_seconds // 3600} hours")
    lines.append("")

    lines.append(f"CPU:  {progress_bar(state.cpu_percent)}")
    lines.append(f"RAM:  {progress_bar(state.memory_percent)}")
    lines.append(f"Disk: {progress_bar(state.disk_percent)}")

    lines.append("")
    lines.append(QUIT_HINT)
    return "\n".join(lines)
