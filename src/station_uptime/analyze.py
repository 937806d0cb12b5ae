from typing import Dict, List, Tuple
import logging

from .coverage import station_coverage
from .models import (
    NormalizedTimeline,
    StationAvailability,
    StationCoverage,
    StationId,
    StationMembership,
    UnitId,
    UnitTimeline,
)
from .stats import from_coverage
from .timeline import normalize_timeline

logger = logging.getLogger(__name__)


def compute_coverage(
    membership: StationMembership, timelines: UnitTimeline
) -> List[Tuple[StationId, StationCoverage]]:
    """Return the coverage of every station with data, ordered by station id.

    Chargers listed for a station but absent from ``timelines`` are skipped.
    A conflicting charger aborts the whole computation.
    """
    normalized: Dict[UnitId, NormalizedTimeline] = {}
    results: List[Tuple[StationId, StationCoverage]] = []

    logger.debug("Computing coverage for %d stations", len(membership))

    for station_id in sorted(membership):
        unit_timelines: List[NormalizedTimeline] = []
        for unit_id in sorted(membership[station_id]):
            raw = timelines.get(unit_id)
            if raw is None:
                logger.debug("Station %s: charger %s never reported", station_id, unit_id)
                continue
            if unit_id not in normalized:
                normalized[unit_id] = normalize_timeline(unit_id, raw)
            unit_timelines.append(normalized[unit_id])

        coverage = station_coverage(unit_timelines)
        if coverage is None:
            logger.debug("Station %s has no reported windows", station_id)
            continue
        results.append((station_id, coverage))

    return results


def compute_availability(
    membership: StationMembership, timelines: UnitTimeline
) -> List[StationAvailability]:
    """Compute the availability percentage of each station.

    Stations without data, including those whose observed span is zero, are
    omitted rather than reported as 0%.
    """
    return availability_from_coverage(compute_coverage(membership, timelines))


def availability_from_coverage(
    coverage: List[Tuple[StationId, StationCoverage]]
) -> List[StationAvailability]:
    results: List[StationAvailability] = []
    for station_id, station in coverage:
        percent = from_coverage(station)
        if percent is None:
            logger.debug("Station %s has an empty observed span", station_id)
            continue
        logger.debug(
            "Station %s: %d/%d -> %d%%",
            station_id,
            station.available,
            station.total,
            percent,
        )
        results.append(StationAvailability(station_id, percent))
    logger.debug("Computed availability for %d stations", len(results))
    return results
