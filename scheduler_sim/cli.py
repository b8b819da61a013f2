from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .errors import InvalidInput, ResourceExhaustion
from .gantt import build_rich_gantt
from .metrics import summarize_process_metrics
from .models import ScheduleResult
from .policies import POLICIES
from .report import format_report
from .simulator import run_algorithm
from .workload_io import load_workload, parse_text_workload

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scheduler-sim",
        description="Discrete-time CPU scheduling simulator (Round Robin, SRTF).",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log every scheduling decision to stderr.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    rr_parser = subparsers.add_parser(
        "rr",
        help="Round Robin on 'n, quantum, then n lines of PID ARRIVAL BURST' read from stdin.",
    )
    rr_parser.add_argument(
        "--input",
        "-i",
        default=None,
        help="Read the input from this file instead of stdin.",
    )

    srtf_parser = subparsers.add_parser(
        "srtf",
        help="Preemptive SJF on 'n, then n lines of PID ARRIVAL BURST' read from stdin.",
    )
    srtf_parser.add_argument(
        "--input",
        "-i",
        default=None,
        help="Read the input from this file instead of stdin.",
    )

    run_parser = subparsers.add_parser("run", help="Run a scheduling policy on a workload file.")
    run_parser.add_argument(
        "--algorithm",
        "-a",
        required=True,
        choices=sorted(POLICIES),
        help="Policy to use (rr, srtf).",
    )
    run_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to JSON, CSV or text workload file.",
    )
    run_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=2,
        help="Time quantum for round-robin (ignored by SRTF, default: 2).",
    )
    run_parser.add_argument(
        "--step",
        action="store_true",
        help="Show a simple time-stepped simulation in the terminal.",
    )
    run_parser.add_argument(
        "--step-delay",
        type=float,
        default=0.3,
        help="Seconds to wait between steps when --step is used (default: 0.3).",
    )

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run both policies on the same workload and compare average metrics.",
    )
    compare_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to JSON, CSV or text workload file.",
    )
    compare_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=2,
        help="Time quantum used for round-robin (default: 2).",
    )

    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _read_input(path: str | None) -> str:
    source = "stdin" if path is None else path
    try:
        if path is None:
            return sys.stdin.read()
        return Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidInput(f"Input {source} is not valid UTF-8 text: {exc}") from exc


def _print_result(result: ScheduleResult, console: Console) -> None:
    console.print(f"[bold]Algorithm:[/bold] {result.algorithm}")
    if result.quantum is not None:
        console.print(f"[bold]Quantum:[/bold] {result.quantum}")

    console.print()

    panel, time_marks = build_rich_gantt(result.timeline)
    console.print(panel)
    if time_marks:
        console.print(time_marks)

    console.print()

    headers = ["PID", "Arrive", "Burst", "Start", "Complete", "Wait", "Turnaround", "Response"]

    proc_table = Table(title="Per-process metrics", box=box.SIMPLE_HEAVY)
    for h in headers:
        justify = "center" if h == "PID" else "right"
        proc_table.add_column(h, justify=justify)

    for p in result.processes:
        proc_table.add_row(
            f"P{p.pid}",
            str(p.arrival_time),
            str(p.burst_time),
            str(p.start_time),
            str(p.completion_time),
            str(p.waiting_time),
            str(p.turnaround_time),
            str(p.response_time),
        )

    console.print(proc_table)
    console.print()

    summary = summarize_process_metrics(result.processes)
    if result.system:
        sys_metrics = result.system
        sys_table = Table(title="System metrics", box=box.SIMPLE_HEAVY)
        sys_table.add_column("Metric")
        sys_table.add_column("Value", justify="right")

        sys_table.add_row("Avg waiting", f"{summary['avg_waiting']:.2f}")
        sys_table.add_row("Avg turnaround", f"{summary['avg_turnaround']:.2f}")
        sys_table.add_row("Avg response", f"{summary['avg_response']:.2f}")
        sys_table.add_row("Makespan", str(sys_metrics.makespan))
        sys_table.add_row("Idle time", str(sys_metrics.idle_time))
        sys_table.add_row("Throughput (proc/time)", f"{sys_metrics.throughput:.3f}")
        sys_table.add_row("CPU utilization", f"{sys_metrics.cpu_utilization*100:.1f}%")

        console.print(sys_table)


def _run_compare(workload_path: Path, quantum: int, console: Console) -> None:
    """
    Run both policies on a workload and print the summary table.
    """
    processes = load_workload(workload_path)

    summary_table = Table(title=f"Algorithm comparison: {workload_path}", box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Quantum", justify="right")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")
    summary_table.add_column("Avg response", justify="right")

    for alg in POLICIES:
        result = run_algorithm(alg, processes, quantum=quantum)
        summary = summarize_process_metrics(result.processes)
        summary_table.add_row(
            result.algorithm,
            "" if result.quantum is None else str(result.quantum),
            f"{summary['avg_waiting']:.2f}",
            f"{summary['avg_turnaround']:.2f}",
            f"{summary['avg_response']:.2f}",
        )

    console.print(summary_table)


def _animate_result(result: ScheduleResult, delay: float, console: Console) -> None:
    """
    Simple time-stepped textual simulation using the computed timeline.
    """
    if not result.timeline:
        console.print("[red]No execution to animate.[/red]")
        return

    makespan = result.timeline[-1].end
    console.print(f"[bold]Simulating {result.algorithm}[/bold] (duration {makespan} time units)")
    console.print("[dim]Press Ctrl+C to skip animation.[/dim]")

    for t in range(makespan):
        seg = next(s for s in result.timeline if s.start <= t < s.end)
        if seg.is_idle:
            console.print(f"t={t:2d}: [dim]idle[/dim]")
        else:
            bar = f"[green]{'█' * (t - seg.start + 1)}[/green]"
            console.print(f"t={t:2d}: {seg.label} {bar}")
        time.sleep(delay)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose)
    console = Console()
    err_console = Console(stderr=True)

    try:
        if args.command in ("rr", "srtf"):
            text = _read_input(args.input)
            processes, quantum = parse_text_workload(text, with_quantum=args.command == "rr")
            result = run_algorithm(args.command, processes, quantum=quantum)
            sys.stdout.write(format_report(result))
            return 0

        if args.command == "run":
            processes = load_workload(args.workload)
            result = run_algorithm(args.algorithm, processes, quantum=args.quantum)
            if args.step:
                try:
                    _animate_result(result, args.step_delay, console)
                except KeyboardInterrupt:
                    console.print("[yellow]Animation skipped.[/yellow]")
            _print_result(result, console)
            return 0

        if args.command == "compare":
            _run_compare(Path(args.workload), args.quantum, console)
            return 0
    except (InvalidInput, OSError) as exc:
        logger.debug("input rejected", exc_info=True)
        err_console.print(f"[red]Error:[/red] {escape(str(exc))}", highlight=False, soft_wrap=True)
        return 1
    except ResourceExhaustion as exc:
        err_console.print(f"[red]Fatal:[/red] {escape(str(exc))}", highlight=False, soft_wrap=True)
        return 2

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
