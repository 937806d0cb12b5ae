from typing import Any, Dict, List, Sequence, Tuple
import html
import json
import logging

from .models import StationAvailability, StationCoverage, StationId

logger = logging.getLogger(__name__)


# Template for the HTML availability report
REPORT_TEMPLATE = """
<!DOCTYPE html>
<html lang='en'>
<head>
    <meta charset='UTF-8'>
    <title>Station Uptime</title>
    <link href="https://cdn.jsdelivr.net/npm/bootswatch@5.3.2/dist/flatly/bootstrap.min.css" rel="stylesheet">
</head>
<body>
<nav class="navbar navbar-dark bg-primary">
  <div class="container-fluid">
    <span class="navbar-brand">Station Uptime</span>
  </div>
</nav>
<div class="container py-4">
<h1 class="mb-4">Station Availability</h1>
<ul class="list-group mb-4">
    <li class="list-group-item">Stations with data: {stations}</li>
    <li class="list-group-item">Average availability: {average:.1f}%</li>
</ul>
<table class="table table-striped">
<thead><tr><th>Station</th><th>Availability</th><th>Available time</th><th>Observed time</th></tr></thead>
<tbody>
{rows}
</tbody>
</table>
<p class="text-muted">Last updated: {updated}</p>
</div>
</body>
</html>
"""

ROW_TEMPLATE = (
    "<tr><td>{station_id}</td><td>{percentage}%</td>"
    "<td>{available}</td><td>{total}</td></tr>"
)


def render_text(results: Sequence[StationAvailability]) -> str:
    """Return one ``<station_id> <percentage>`` line per station."""
    return "".join(f"{r.station_id} {r.percentage}\n" for r in results)


def _station_payload(
    results: Sequence[StationAvailability],
    coverage: Sequence[Tuple[StationId, StationCoverage]],
) -> List[Dict[str, Any]]:
    by_station = dict(coverage)
    payload = []
    for r in results:
        station = by_station.get(r.station_id)
        payload.append(
            {
                "station_id": r.station_id,
                "availability": r.percentage,
                "available_time": station.available if station else None,
                "total_time": station.total if station else None,
            }
        )
    return payload


def availability_document(
    results: Sequence[StationAvailability],
    coverage: Sequence[Tuple[StationId, StationCoverage]],
) -> Dict[str, Any]:
    return {"stations": _station_payload(results, coverage)}


def render_json(
    results: Sequence[StationAvailability],
    coverage: Sequence[Tuple[StationId, StationCoverage]],
) -> str:
    return json.dumps(availability_document(results, coverage), indent=2) + "\n"


def render_html(
    results: Sequence[StationAvailability],
    coverage: Sequence[Tuple[StationId, StationCoverage]],
    updated: str | None = None,
) -> str:
    """Return the HTML availability report."""
    logger.debug("Rendering HTML for %d stations", len(results))
    stations = _station_payload(results, coverage)
    rows = "\n".join(
        ROW_TEMPLATE.format(
            station_id=s["station_id"],
            percentage=s["availability"],
            available=s["available_time"],
            total=s["total_time"],
        )
        for s in stations
    )
    average = (
        sum(s["availability"] for s in stations) / len(stations) if stations else 0.0
    )
    return REPORT_TEMPLATE.format(
        stations=len(stations),
        average=average,
        rows=rows,
        updated=html.escape(updated or "unknown"),
    )
