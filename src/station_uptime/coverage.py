"""Union of reachable time across the units of one station."""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from .models import NormalizedTimeline, StationCoverage, TimeWindow, window_key

logger = logging.getLogger(__name__)


def station_coverage(timelines: Iterable[NormalizedTimeline]) -> Optional[StationCoverage]:
    """Sweep every unit's windows at once and measure the station's coverage.

    ``available`` is the time during which at least one unit was up.
    ``total`` runs from the earliest start to the latest end of any window,
    up or down. Returns ``None`` when no unit contributed a window.
    """
    windows: List[TimeWindow] = sorted(
        (w for timeline in timelines for w in timeline), key=window_key
    )
    if not windows:
        return None

    first = windows[0]
    first_start = first.start
    last_end = first.end
    if first.up:
        covered_until = first.end
        available = first.duration
    else:
        covered_until = first_start
        available = 0

    for window in windows[1:]:
        # Down windows still widen the observed span.
        if window.end > last_end:
            last_end = window.end
        if not window.up:
            continue
        if covered_until >= window.end:
            continue
        if covered_until >= window.start:
            available += window.end - covered_until
        else:
            available += window.duration
        covered_until = window.end

    total = last_end - first_start
    logger.debug(
        "Swept %d windows: available=%d total=%d", len(windows), available, total
    )
    return StationCoverage(available=available, total=total)
