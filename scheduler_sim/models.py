from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Union

# Owner of an idle segment. Kept distinct from every integer pid.
IDLE = None


@dataclass(frozen=True)
class Process:
    pid: int
    arrival_time: int
    burst_time: int


@dataclass
class ProcessRecord:
    """
    Static description of a process plus its mutable simulation state.
    """

    process: Process
    remaining: int
    completion: Optional[int] = None
    first_run: Optional[int] = None
    enqueued: bool = False

    @property
    def pid(self) -> int:
        return self.process.pid

    @property
    def arrival_time(self) -> int:
        return self.process.arrival_time

    @property
    def burst_time(self) -> int:
        return self.process.burst_time

    @property
    def finished(self) -> bool:
        return self.remaining == 0

    def arrived(self, clock: int) -> bool:
        return self.arrival_time <= clock


@dataclass
class Segment:
    """
    One contiguous interval of the timeline, [start, end).
    """

    owner: Optional[int]
    start: int
    end: int

    @property
    def is_idle(self) -> bool:
        return self.owner is IDLE

    @property
    def duration(self) -> int:
        return self.end - self.start

    @property
    def label(self) -> str:
        return "IDLE" if self.is_idle else f"P{self.owner}"


@dataclass(frozen=True)
class RunDecision:
    index: int
    duration: int


@dataclass(frozen=True)
class IdleDecision:
    until: int


Decision = Union[RunDecision, IdleDecision]


@dataclass
class ProcessMetrics:
    pid: int
    arrival_time: int
    burst_time: int
    start_time: int
    completion_time: int
    waiting_time: int
    turnaround_time: int
    response_time: int


@dataclass
class SystemMetrics:
    cpu_busy_time: int
    idle_time: int
    makespan: int
    throughput: float
    cpu_utilization: float


@dataclass
class ScheduleResult:
    algorithm: str
    quantum: Optional[int]
    title: str = ""
    processes: List[ProcessMetrics] = field(default_factory=list)
    timeline: List[Segment] = field(default_factory=list)
    system: Optional[SystemMetrics] = None
