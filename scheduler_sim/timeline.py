from __future__ import annotations

from typing import List, Optional

from .errors import ResourceExhaustion
from .models import Segment


class TimelineRecorder:
    """
    Accumulates execution segments in time order.

    Adjacent segments with the same owner are merged as they are appended,
    so the recorded timeline never holds two touching segments for one owner.
    """

    def __init__(self) -> None:
        self._segments: List[Segment] = []

    def append(self, owner: Optional[int], start: int, end: int) -> None:
        if end < start:
            raise ValueError(f"Segment ends before it starts: [{start} - {end}]")
        if start == end:
            return

        if self._segments:
            last = self._segments[-1]
            if last.owner == owner and last.end == start:
                last.end = end
                return

        try:
            self._segments.append(Segment(owner=owner, start=start, end=end))
        except MemoryError as exc:
            raise ResourceExhaustion("Unable to grow the execution timeline") from exc

    def segments(self) -> List[Segment]:
        return list(self._segments)

    def __len__(self) -> int:
        return len(self._segments)
