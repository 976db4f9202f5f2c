from __future__ import annotations

from typing import Dict, List

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import ScheduledSlice

COLORS = ["red", "green", "yellow", "blue", "magenta", "cyan"]


def _cell_width(sl: ScheduledSlice) -> int:
    # Wide enough for the label and the "start - end" mark.
    return max(sl.duration, len(sl.label), len(f"{sl.start_time}-{sl.end_time}")) + 1


def render_gantt(slices: List[ScheduledSlice]) -> str:
    """
    Plain-text Gantt chart: one block per slice in execution order.
    """
    if not slices:
        return "(no execution)"

    bars = "|"
    labels = "|"
    marks = "|"
    for sl in slices:
        width = _cell_width(sl)
        bars += "=" * width + "|"
        labels += sl.label.center(width) + "|"
        marks += f"{sl.start_time}-{sl.end_time}".center(width) + "|"

    return "\n".join(["Gantt Chart:", bars, labels, marks])


def build_rich_gantt(slices: List[ScheduledSlice]) -> Panel:
    """
    Build a Rich Panel containing a colored Gantt chart, one block per slice.
    """
    if not slices:
        return Panel("No execution", title="Gantt Chart")

    pid_to_color: Dict[int, str] = {}

    def pid_color(pid: int) -> str:
        if pid not in pid_to_color:
            pid_to_color[pid] = COLORS[len(pid_to_color) % len(COLORS)]
        return pid_to_color[pid]

    bars = Text()
    labels = Text()
    marks = Text()

    for sl in slices:
        width = _cell_width(sl)
        bars.append(" " * width, style=f"on {pid_color(sl.pid)}")
        labels.append(sl.label.center(width), style="bold")
        marks.append(f"{sl.start_time}-{sl.end_time}".center(width), style="dim")

    table = Table.grid(padding=(0, 0))
    table.add_row(bars)
    table.add_row(labels)
    table.add_row(marks)

    return Panel.fit(table, title="Gantt Chart")
