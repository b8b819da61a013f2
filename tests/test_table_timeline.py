import pytest

from scheduler_sim.errors import InvalidInput
from scheduler_sim.models import IDLE, Process
from scheduler_sim.table import ProcessTable
from scheduler_sim.timeline import TimelineRecorder


def test_load_initializes_state():
    table = ProcessTable.load([Process(1, 0, 3), (2, 4, 1)])
    assert len(table) == 2
    assert table[0].remaining == 3
    assert table[1].pid == 2
    assert all(r.completion is None for r in table)
    assert table.earliest_arrival() == 0
    assert table.next_arrival_after(0) == 4


@pytest.mark.parametrize(
    "records",
    [
        [],
        [(1, -1, 3)],
        [(1, 0, 0)],
        [(1, 0, 2), (2, 0, -5)],
    ],
)
def test_load_rejects_invalid(records):
    with pytest.raises(InvalidInput):
        ProcessTable.load(records)


def test_load_error_names_process():
    with pytest.raises(InvalidInput, match="Process #2"):
        ProcessTable.load([(1, 0, 2), (5, 0, 0)])


def test_recorder_merges_touching_same_owner():
    rec = TimelineRecorder()
    rec.append(1, 0, 1)
    rec.append(1, 1, 2)
    rec.append(2, 2, 3)
    rec.append(1, 3, 4)
    assert [(s.owner, s.start, s.end) for s in rec.segments()] == [(1, 0, 2), (2, 2, 3), (1, 3, 4)]


def test_recorder_skips_empty_and_keeps_idle_apart_from_pid_zero():
    rec = TimelineRecorder()
    rec.append(IDLE, 0, 2)
    rec.append(0, 2, 2)
    rec.append(0, 2, 3)
    assert len(rec) == 2
    assert rec.segments()[0].is_idle
    assert rec.segments()[1].label == "P0"


def test_recorder_rejects_backwards_segment():
    with pytest.raises(ValueError):
        TimelineRecorder().append(1, 3, 2)
