from __future__ import annotations

from typing import List

from .metrics import summarize_process_metrics
from .models import ScheduleResult, Segment

ROW_FORMAT = "{:<6} {:<8} {:<6} {:<8} {:<11}"


def format_trace(segments: List[Segment]) -> List[str]:
    return [f"[{s.start} - {s.end}] {s.label}" for s in segments]


def heading(result: ScheduleResult) -> str:
    return f"=== {result.title or result.algorithm} ==="


def format_report(result: ScheduleResult) -> str:
    """
    Plain-text report: execution order, per-process table (input order) and averages.
    """
    summary = summarize_process_metrics(result.processes)

    lines = [heading(result)]
    lines.extend(format_trace(result.timeline))
    lines.append("")
    lines.append("=== Results ===")
    lines.append(ROW_FORMAT.format("PID", "ARRIVE", "BURST", "WAIT", "TURNAROUND"))
    for p in result.processes:
        lines.append(ROW_FORMAT.format(p.pid, p.arrival_time, p.burst_time, p.waiting_time, p.turnaround_time))
    lines.append("")
    lines.append(f"Average waiting time: {summary['avg_waiting']:.2f}")
    lines.append(f"Average turnaround time: {summary['avg_turnaround']:.2f}")
    return "\n".join(lines) + "\n"
