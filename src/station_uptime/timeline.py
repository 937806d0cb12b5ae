import logging
from typing import Iterable, List

from .errors import ConflictingReport
from .models import NormalizedTimeline, TimeWindow, UnitId, window_key

logger = logging.getLogger(__name__)


def normalize_timeline(unit_id: UnitId, windows: Iterable[TimeWindow]) -> NormalizedTimeline:
    """Sort a unit's windows and merge overlapping ones with the same status.

    Overlapping windows that disagree on status raise ``ConflictingReport``.
    Windows that only touch (``next.start == current.end``) stay separate.
    """
    ordered = sorted(windows, key=window_key)
    if not ordered:
        return ()

    merged: List[TimeWindow] = []
    current = ordered[0]
    for window in ordered[1:]:
        if window.start < current.end:
            if window.up != current.up:
                logger.debug(
                    "Charger %s: %s overlaps %s with a different status",
                    unit_id,
                    window,
                    current,
                )
                raise ConflictingReport(unit_id)
            if window.end > current.end:
                current = TimeWindow(current.start, window.end, current.up)
        else:
            merged.append(current)
            current = window
    merged.append(current)

    logger.debug(
        "Charger %s: normalized %d windows into %d", unit_id, len(ordered), len(merged)
    )
    return tuple(merged)
