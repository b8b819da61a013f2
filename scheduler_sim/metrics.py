from __future__ import annotations

from typing import List

from .models import ProcessMetrics, ScheduleResult, SystemMetrics
from .table import ProcessTable


def compute_process_metrics(table: ProcessTable) -> List[ProcessMetrics]:
    """
    Derive turnaround, waiting and response time for every record, in input order.
    """
    if len(table) == 0:
        raise ValueError("Cannot compute metrics for an empty process table")

    metrics: List[ProcessMetrics] = []
    for r in table:
        if r.completion is None or r.first_run is None:
            raise ValueError(f"Process P{r.pid} has not completed")

        turnaround_time = r.completion - r.arrival_time
        waiting_time = turnaround_time - r.burst_time
        metrics.append(
            ProcessMetrics(
                pid=r.pid,
                arrival_time=r.arrival_time,
                burst_time=r.burst_time,
                start_time=r.first_run,
                completion_time=r.completion,
                waiting_time=waiting_time,
                turnaround_time=turnaround_time,
                response_time=r.first_run - r.arrival_time,
            )
        )
    return metrics


def compute_system_metrics(result: ScheduleResult) -> SystemMetrics:
    """
    Compute throughput and CPU utilization given populated per-process metrics
    and timeline segments.
    """
    if not result.processes:
        return SystemMetrics(cpu_busy_time=0, idle_time=0, makespan=0, throughput=0.0, cpu_utilization=0.0)

    makespan = max(p.completion_time for p in result.processes)
    cpu_busy_time = sum(s.duration for s in result.timeline if not s.is_idle)
    idle_time = sum(s.duration for s in result.timeline if s.is_idle)

    throughput = len(result.processes) / makespan if makespan > 0 else 0.0
    cpu_utilization = cpu_busy_time / makespan if makespan > 0 else 0.0

    system = SystemMetrics(
        cpu_busy_time=cpu_busy_time,
        idle_time=idle_time,
        makespan=makespan,
        throughput=throughput,
        cpu_utilization=cpu_utilization,
    )
    result.system = system
    return system


def summarize_process_metrics(processes: List[ProcessMetrics]) -> dict:
    """
    Return averages of the key per-process metrics for quick comparison.
    """
    if not processes:
        return {"avg_waiting": 0.0, "avg_turnaround": 0.0, "avg_response": 0.0}

    n = len(processes)
    return {
        "avg_waiting": sum(p.waiting_time for p in processes) / n,
        "avg_turnaround": sum(p.turnaround_time for p in processes) / n,
        "avg_response": sum(p.response_time for p in processes) / n,
    }
