"""Recording descriptions: what to record, when, and how it went."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class RecordingStatus(IntEnum):
    """State of a planned recording."""

    NOTSET = 0
    WAITING = 1
    PROCESSING = 2
    FINISHED = 3
    SKIPPED = 4
    ERROR = 5


@dataclass
class RecordingInfo:
    """A recording of one channel between two instants.

    Times are integers in the same unit for ``begin_time``, ``end_time``
    and the reference times given to the query methods.
    """

    title: str
    begin_time: int = 0
    end_time: int = 0
    channel_id: int = -1
    id: int = -1
    status: RecordingStatus = RecordingStatus.NOTSET
    filename: str | None = None

    def has_time(self, ref_time: int) -> bool:
        """Tell whether ``ref_time`` falls within the recording, bounds included."""
        return self.begin_time <= ref_time <= self.end_time

    def is_time_greater(self, ref_time: int) -> bool:
        """Tell whether ``ref_time`` lies after the end of the recording."""
        return ref_time > self.end_time