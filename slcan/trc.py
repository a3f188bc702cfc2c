"""
Reader for CANHacker .trc trace files.

Each data line looks like:

    07,399  291  8  01 02 03 04 05 06 07 08

time in seconds with a comma as decimal mark, then the CAN ID and DLC in
decimal, then the data bytes in hex. Header lines and anything unparseable
are skipped.
"""

from collections import defaultdict
from typing import Iterable, List, Tuple

from .errors import FrameError
from .protocol import MAX_DLC, CanFrame, make_id

TraceEntry = Tuple[int, CanFrame]


def parse_trc_lines(lines: Iterable[str]) -> List[TraceEntry]:
    """Return (time_ms, frame) tuples in file order."""
    entries = []

    for line in lines:
        line = line.strip()
        if not line or line.startswith('Time'):
            continue

        parts = line.split()
        if len(parts) < 3:
            continue

        try:
            time_ms = round(float(parts[0].replace(',', '.')) * 1000)
            can_id = int(parts[1])
            dlc = int(parts[2])
        except (ValueError, OverflowError):
            continue

        if not 0 <= dlc <= MAX_DLC:
            continue

        # Missing or garbled data bytes are sent as zero
        data = []
        for i in range(3, 3 + dlc):
            try:
                data.append(int(parts[i], 16))
            except (IndexError, ValueError):
                data.append(0)

        try:
            frame = CanFrame.new(make_id(can_id), data)
        except (FrameError, ValueError):
            continue

        entries.append((time_ms, frame))

    return entries


def parse_trc_file(filepath) -> List[TraceEntry]:
    with open(filepath, 'r') as f:
        return parse_trc_lines(f)


def group_by_timestamp(entries: Iterable[TraceEntry]) -> List[Tuple[int, List[CanFrame]]]:
    """Group frames sharing a millisecond, sorted by time."""
    groups = defaultdict(list)
    for time_ms, frame in entries:
        groups[time_ms].append(frame)
    return sorted(groups.items())
