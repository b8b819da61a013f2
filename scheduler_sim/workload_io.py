from __future__ import annotations

import csv
import json
import re
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from .errors import InvalidInput
from .models import Process

# What a scanf("%d") reader accepts: optional sign, ASCII digits only.
_INT_TOKEN = re.compile(r"[+-]?[0-9]+")


def parse_text_workload(text: str, with_quantum: bool = False) -> Tuple[List[Process], Optional[int]]:
    """
    Parse the whitespace-separated integer format::

        n
        [quantum]          (only when ``with_quantum`` is set)
        pid arrival burst  (n times)

    Line breaks are not significant; only the order of the integers is.
    Range checks on arrival/burst are left to ``ProcessTable.load``.
    """
    tokens = iter(text.split())

    n = _next_int(tokens, "Invalid n: expected the number of processes")
    if n <= 0:
        raise InvalidInput(f"Invalid n: number of processes must be > 0, got {n}")

    quantum: Optional[int] = None
    if with_quantum:
        quantum = _next_int(tokens, "Invalid quantum: expected an integer time quantum")
        if quantum <= 0:
            raise InvalidInput(f"Invalid quantum: must be > 0, got {quantum}")

    processes: List[Process] = []
    for i in range(1, n + 1):
        message = f"Invalid input line for process #{i}: expected 'PID ARRIVAL BURST'"
        pid = _next_int(tokens, message)
        arrival_time = _next_int(tokens, message)
        burst_time = _next_int(tokens, message)
        processes.append(Process(pid=pid, arrival_time=arrival_time, burst_time=burst_time))

    return processes, quantum


def _next_int(tokens: Iterator[str], message: str) -> int:
    token = next(tokens, None)
    if token is None:
        raise InvalidInput(f"{message} (input ended early)")
    if not _INT_TOKEN.fullmatch(token):
        raise InvalidInput(f"{message} (got {token!r})")
    return int(token)


def load_workload(path: str | Path) -> List[Process]:
    """
    Load a workload from a JSON, CSV or plain-text file into a list of Process objects.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    try:
        if suffix == ".json":
            return _load_json(path)
        if suffix == ".csv":
            return _load_csv(path)

        processes, _ = parse_text_workload(path.read_text(encoding="utf-8"))
        return processes
    except UnicodeDecodeError as exc:
        raise InvalidInput(f"Workload {path} is not valid UTF-8 text: {exc}") from exc


def _load_json(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as exc:
            raise InvalidInput(f"Malformed JSON workload {path}: {exc}") from exc

    if not isinstance(raw, list):
        raise InvalidInput("JSON workload must be a list of process objects")

    return [_process_from_mapping(entry) for entry in raw]


def _load_csv(path: Path) -> List[Process]:
    processes: List[Process] = []
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        for row in reader:
            processes.append(_process_from_mapping(row))
    return processes


def _int_field(mapping, key: str) -> int:
    value = mapping[key]
    # JSON floats and booleans would otherwise be truncated by int().
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise TypeError(f"{key} must be an integer, got {value!r}")
    if isinstance(value, str):
        value = value.strip()
        if not _INT_TOKEN.fullmatch(value):
            raise ValueError(f"{key} must be an integer, got {value!r}")
    return int(value)


def _process_from_mapping(mapping) -> Process:
    try:
        pid = _int_field(mapping, "pid")
        arrival_time = _int_field(mapping, "arrival_time")
        burst_time = _int_field(mapping, "burst_time")
    except (KeyError, TypeError, ValueError) as exc:
        raise InvalidInput(f"Invalid process entry: {mapping!r}") from exc

    return Process(
        pid=pid,
        arrival_time=arrival_time,
        burst_time=burst_time,
    )
