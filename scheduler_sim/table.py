from __future__ import annotations

from typing import Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from .errors import InvalidInput
from .models import Process, ProcessRecord

RawProcess = Union[Process, Tuple[int, int, int]]


class ProcessTable:
    """
    Indexed table of process records for a single simulation run.

    Records keep input order. Pids are not required to be unique; every
    record is tracked by its position in the table.
    """

    def __init__(self, records: List[ProcessRecord]):
        self.records = records

    @classmethod
    def load(cls, processes: Sequence[RawProcess]) -> "ProcessTable":
        if not processes:
            raise InvalidInput("Workload must contain at least one process")

        records: List[ProcessRecord] = []
        for position, raw in enumerate(processes, start=1):
            p = raw if isinstance(raw, Process) else Process(*raw)
            if p.arrival_time < 0:
                raise InvalidInput(
                    f"Process #{position} (pid {p.pid}): arrival must be >= 0, got {p.arrival_time}"
                )
            if p.burst_time <= 0:
                raise InvalidInput(
                    f"Process #{position} (pid {p.pid}): burst must be > 0, got {p.burst_time}"
                )
            records.append(ProcessRecord(process=p, remaining=p.burst_time))

        return cls(records)

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[ProcessRecord]:
        return iter(self.records)

    def __getitem__(self, index: int) -> ProcessRecord:
        return self.records[index]

    def all_finished(self) -> bool:
        return all(r.finished for r in self.records)

    def unfinished(self) -> Iterable[Tuple[int, ProcessRecord]]:
        return ((i, r) for i, r in enumerate(self.records) if not r.finished)

    def earliest_arrival(self) -> int:
        return min(r.arrival_time for r in self.records)

    def next_arrival_after(self, clock: int) -> Optional[int]:
        future = [r.arrival_time for _, r in self.unfinished() if r.arrival_time > clock]
        return min(future) if future else None
