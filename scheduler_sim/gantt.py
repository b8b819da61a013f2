from __future__ import annotations

from typing import Dict, List

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import Segment


def render_gantt(segments: List[Segment]) -> str:
    """
    Plain-text Gantt chart, one character per time unit. Idle time is drawn with dots.
    """
    if not segments:
        return "(no execution)"

    line = "|"
    labels = ""
    time_marks = str(segments[0].start)

    for seg in segments:
        width = max(1, seg.duration)
        line += ("." if seg.is_idle else "=") * width
        labels += ("" if seg.is_idle else seg.label)[:width].ljust(width)
        time_marks += f"{seg.end:>3}"

    line += "|"

    return "\n".join(
        [
            "Gantt Chart:",
            line,
            labels,
            time_marks,
        ]
    )


def build_rich_gantt(segments: List[Segment]) -> tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.
    """
    if not segments:
        panel = Panel("No execution", title="Gantt Chart")
        return panel, ""

    colors = ["red", "green", "yellow", "blue", "magenta", "cyan"]
    pid_to_color: Dict[int, str] = {}

    def pid_color(pid: int) -> str:
        if pid not in pid_to_color:
            idx = len(pid_to_color) % len(colors)
            pid_to_color[pid] = colors[idx]
        return pid_to_color[pid]

    timeline = Text()
    labels = Text()
    time_marks = str(segments[0].start)

    for seg in segments:
        width = max(1, seg.duration)
        if seg.is_idle:
            timeline.append("·" * width, style="dim")
            labels.append(" " * width)
        else:
            timeline.append(" " * width, style=f"on {pid_color(seg.owner)}")
            labels.append(seg.label[:width].ljust(width), style="bold")
        time_marks += f"{seg.end:>3}"

    table = Table.grid(padding=(0, 0))
    table.add_row(timeline)
    table.add_row(labels)

    panel = Panel.fit(table, title="Gantt Chart")
    return panel, time_marks
