import io
from pathlib import Path

from scheduler_sim.cli import main
from scheduler_sim.errors import ResourceExhaustion
from scheduler_sim.gantt import render_gantt
from scheduler_sim.report import format_report, format_trace
from scheduler_sim.simulator import run_algorithm

RR_INPUT = "3\n2\n1 0 4\n2 1 3\n3 3 2\n"
SRTF_INPUT = "4\n1 0 8\n2 1 4\n3 2 9\n4 3 5\n"


def test_rr_report_from_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO(RR_INPUT))
    assert main(["rr"]) == 0
    out = capsys.readouterr().out.splitlines()

    assert out[0] == "=== Round Robin Execution Order (q=2) ==="
    assert out[1:6] == ["[0 - 2] P1", "[2 - 4] P2", "[4 - 6] P1", "[6 - 8] P3", "[8 - 9] P2"]
    assert out[7] == "=== Results ==="
    assert out[8].split() == ["PID", "ARRIVE", "BURST", "WAIT", "TURNAROUND"]
    assert [line.split() for line in out[9:12]] == [
        ["1", "0", "4", "2", "6"],
        ["2", "1", "3", "5", "8"],
        ["3", "3", "2", "3", "5"],
    ]
    assert out[-2] == "Average waiting time: 3.33"
    assert out[-1] == "Average turnaround time: 6.33"


def test_srtf_report_from_file(tmp_path: Path, capsys):
    p = tmp_path / "in.txt"
    p.write_text(SRTF_INPUT)
    assert main(["srtf", "--input", str(p)]) == 0
    out = capsys.readouterr().out
    assert out.startswith("=== Preemptive SJF (SRTF) Execution Order ===\n[0 - 1] P1\n[1 - 5] P2\n")
    assert "Average waiting time: 6.50\n" in out


def test_invalid_input_exits_non_zero(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("1\n1 0 0\n"))
    assert main(["srtf"]) != 0
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "burst must be > 0" in captured.err


def test_invalid_quantum_exits_non_zero(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("1\n0\n1 0 1\n"))
    assert main(["rr"]) != 0
    assert "Invalid quantum" in capsys.readouterr().err


def test_report_is_deterministic():
    first = format_report(run_algorithm("rr", [(1, 0, 3), (2, 0, 3), (3, 2, 1)], quantum=1))
    second = format_report(run_algorithm("rr", [(1, 0, 3), (2, 0, 3), (3, 2, 1)], quantum=1))
    assert first == second


def test_trace_and_plain_gantt_show_idle():
    res = run_algorithm("srtf", [(1, 2, 2)])
    assert format_trace(res.timeline) == ["[0 - 2] IDLE", "[2 - 4] P1"]
    chart = render_gantt(res.timeline).splitlines()
    assert chart[1] == "|..==|"


def test_run_and_compare_commands(tmp_path: Path, capsys):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":1,"arrival_time":0,"burst_time":4},'
                 '{"pid":2,"arrival_time":1,"burst_time":3}]')
    assert main(["run", "-a", "rr", "-w", str(p), "-q", "2"]) == 0
    assert "Round Robin" in capsys.readouterr().out

    assert main(["compare", "-w", str(p)]) == 0
    out = capsys.readouterr().out
    assert "SRTF" in out
    assert "Round Robin" in out


def test_missing_workload_file(tmp_path: Path):
    assert main(["run", "-a", "srtf", "-w", str(tmp_path / "nope.json")]) == 1


def test_non_utf8_input_file_exits_non_zero(tmp_path: Path, capsys):
    p = tmp_path / "in.txt"
    p.write_bytes(b"1\n1 0 \xff\n")
    assert main(["srtf", "--input", str(p)]) == 1
    assert "not valid UTF-8" in capsys.readouterr().err


def test_non_utf8_workload_exits_non_zero(tmp_path: Path, capsys):
    p = tmp_path / "w.json"
    p.write_bytes(b"[\xff]")
    assert main(["run", "-a", "srtf", "-w", str(p)]) == 1
    assert "not valid UTF-8" in capsys.readouterr().err


def test_resource_exhaustion_exits_with_two(monkeypatch, capsys):
    def exhausted(*args, **kwargs):
        raise ResourceExhaustion("Unable to grow the execution timeline")

    monkeypatch.setattr("scheduler_sim.cli.run_algorithm", exhausted)
    monkeypatch.setattr("sys.stdin", io.StringIO(SRTF_INPUT))
    assert main(["srtf"]) == 2
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Unable to grow" in captured.err
