from __future__ import annotations

import logging
from typing import Optional, Sequence

from .metrics import compute_process_metrics, compute_system_metrics
from .models import IDLE, IdleDecision, ScheduleResult
from .policies import SchedulingPolicy, make_policy
from .table import ProcessTable, RawProcess
from .timeline import TimelineRecorder

logger = logging.getLogger(__name__)


def simulate(processes: Sequence[RawProcess], policy: SchedulingPolicy) -> ScheduleResult:
    """
    Run one closed simulation of ``processes`` under ``policy``.

    The clock starts at 0; if nothing arrives at 0 the CPU is idle until the
    first arrival. The loop ends once every record has no remaining time.
    """
    table = ProcessTable.load(processes)
    recorder = TimelineRecorder()

    clock = 0
    earliest = table.earliest_arrival()
    if earliest > 0:
        recorder.append(IDLE, 0, earliest)
        clock = earliest

    while not table.all_finished():
        decision = policy.next_decision(clock, table)

        if isinstance(decision, IdleDecision):
            logger.debug("t=%d idle until %d", clock, decision.until)
            recorder.append(IDLE, clock, decision.until)
            clock = decision.until
            continue

        record = table[decision.index]
        if record.first_run is None:
            record.first_run = clock

        start = clock
        # One unit at a time so the policy sees arrivals inside the slice.
        for _ in range(decision.duration):
            clock += 1
            record.remaining -= 1
            policy.on_tick(clock, table)
            if record.finished:
                break

        recorder.append(record.pid, start, clock)
        logger.debug("t=%d ran P%d until %d (remaining %d)", start, record.pid, clock, record.remaining)

        if record.finished:
            record.completion = clock
        policy.on_slice_end(decision.index, clock, table)

    result = ScheduleResult(
        algorithm=policy.name,
        quantum=policy.quantum,
        title=policy.report_title,
        processes=compute_process_metrics(table),
        timeline=recorder.segments(),
    )
    compute_system_metrics(result)
    return result


def run_algorithm(name: str, processes: Sequence[RawProcess], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Dispatch to the requested policy by short name (``rr`` or ``srtf``).
    """
    policy = make_policy(name, quantum)
    return simulate(processes, policy)
