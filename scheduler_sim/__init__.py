"""
Scheduler simulator package.

Discrete-time simulation of preemptive CPU scheduling (Round Robin and
Shortest-Remaining-Time-First) producing an execution timeline and
per-process waiting/turnaround metrics.
"""

from .errors import InvalidInput, ResourceExhaustion, SchedulerError
from .simulator import run_algorithm, simulate

__all__ = ["InvalidInput", "ResourceExhaustion", "SchedulerError", "run_algorithm", "simulate"]
