from __future__ import annotations

from abc import ABC, abstractmethod
from collections import deque
from typing import Deque, Dict, Optional, Type

from .errors import InvalidInput, ResourceExhaustion
from .models import Decision, IdleDecision, RunDecision
from .table import ProcessTable


class SchedulingPolicy(ABC):
    """
    Decides which record runs next, and for how long.

    The simulation driver asks for a decision, executes it one time unit at
    a time (calling ``on_tick`` after every unit) and finally calls
    ``on_slice_end`` for the record that just ran.
    """

    name: str = ""
    quantum: Optional[int] = None

    @abstractmethod
    def next_decision(self, clock: int, table: ProcessTable) -> Decision:
        raise NotImplementedError

    def on_tick(self, clock: int, table: ProcessTable) -> None:
        pass

    @property
    def report_title(self) -> str:
        return f"{self.name} Execution Order"

    def on_slice_end(self, index: int, clock: int, table: ProcessTable) -> None:
        pass

    def __str__(self) -> str:
        return self.name


class RoundRobinPolicy(SchedulingPolicy):
    """
    Round Robin with a fixed time quantum.

    Arrivals are queued in input order as soon as the clock reaches them,
    including arrivals that happen while another record's slice is still
    running. A preempted record goes to the tail after those arrivals.
    """

    name = "Round Robin"

    def __init__(self, quantum: int):
        if quantum is None or quantum <= 0:
            raise InvalidInput(f"Round Robin requires a positive quantum, got {quantum}")
        self.quantum = quantum
        self.ready: Deque[int] = deque()

    @property
    def report_title(self) -> str:
        return f"{self.name} Execution Order (q={self.quantum})"

    def _push(self, index: int) -> None:
        try:
            self.ready.append(index)
        except MemoryError as exc:
            raise ResourceExhaustion("Unable to grow the ready sequence") from exc

    def enqueue_arrivals(self, clock: int, table: ProcessTable) -> None:
        for i, record in enumerate(table):
            if not record.enqueued and not record.finished and record.arrived(clock):
                self._push(i)
                record.enqueued = True

    def next_decision(self, clock: int, table: ProcessTable) -> Decision:
        self.enqueue_arrivals(clock, table)

        while self.ready:
            index = self.ready.popleft()
            record = table[index]
            if record.finished:
                continue
            return RunDecision(index=index, duration=min(record.remaining, self.quantum))

        waiting = [r.arrival_time for _, r in table.unfinished() if not r.enqueued]
        if not waiting:
            raise RuntimeError(f"No runnable process at t={clock} but the run is not finished")
        return IdleDecision(until=min(waiting))

    def on_tick(self, clock: int, table: ProcessTable) -> None:
        self.enqueue_arrivals(clock, table)

    def on_slice_end(self, index: int, clock: int, table: ProcessTable) -> None:
        if not table[index].finished:
            self._push(index)


class SRTFPolicy(SchedulingPolicy):
    """
    Shortest Remaining Time First (preemptive SJF).

    Re-evaluated every time unit; ties go to the earlier arrival, then the
    smaller pid, then input order.
    """

    name = "SRTF"

    @property
    def report_title(self) -> str:
        return "Preemptive SJF (SRTF) Execution Order"

    def next_decision(self, clock: int, table: ProcessTable) -> Decision:
        ready = [(i, r) for i, r in table.unfinished() if r.arrived(clock)]
        if not ready:
            nxt = table.next_arrival_after(clock)
            if nxt is None:
                raise RuntimeError(f"No runnable process at t={clock} but the run is not finished")
            return IdleDecision(until=nxt)

        index, _ = min(ready, key=lambda item: (item[1].remaining, item[1].arrival_time, item[1].pid))
        return RunDecision(index=index, duration=1)


POLICIES: Dict[str, Type[SchedulingPolicy]] = {
    "rr": RoundRobinPolicy,
    "srtf": SRTFPolicy,
}


def make_policy(name: str, quantum: Optional[int] = None) -> SchedulingPolicy:
    """
    Build a fresh policy by its short name. Quantum is only used by round-robin.
    """
    key = name.lower()
    if key not in POLICIES:
        raise InvalidInput(f"Unknown algorithm '{name}' (choose from: {', '.join(POLICIES)})")
    if key == "rr":
        return RoundRobinPolicy(quantum)
    return SRTFPolicy()
