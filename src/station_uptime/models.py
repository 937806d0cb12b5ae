from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, NamedTuple, Set, Tuple

from .errors import InvalidWindow

UnitId = int
StationId = int

MAX_ID = 2**32 - 1
MAX_TIME = 2**64 - 1


@dataclass(frozen=True)
class TimeWindow:
    """A reported span during which a unit was up or down.

    Windows are half-open: ``end`` itself is not part of the span.
    """

    start: int
    end: int
    up: bool = False

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise InvalidWindow(self.start, self.end)

    @property
    def duration(self) -> int:
        return self.end - self.start


def window_key(window: TimeWindow) -> Tuple[int, int, bool]:
    """Sort key: ascending start, then end. Status only breaks exact ties."""
    return (window.start, window.end, window.up)


StationMembership = Dict[StationId, Set[UnitId]]
UnitTimeline = Dict[UnitId, List[TimeWindow]]
NormalizedTimeline = Tuple[TimeWindow, ...]


@dataclass(frozen=True)
class StationCoverage:
    """Reachable and observed time for one station."""

    available: int
    total: int


class StationAvailability(NamedTuple):
    station_id: StationId
    percentage: int
