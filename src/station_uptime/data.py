import logging
from pathlib import Path
from typing import Dict, List, Set, Tuple

import requests

from .errors import InputUnavailable, InvalidWindow, MalformedRecord
from .models import (
    MAX_ID,
    MAX_TIME,
    StationId,
    StationMembership,
    TimeWindow,
    UnitId,
    UnitTimeline,
)

logger = logging.getLogger(__name__)

STATIONS_HEADER = "[Stations]"
REPORTS_HEADER = "[Charger Availability Reports]"

# Only these literals mark a charger as reachable.
UP_FLAGS = ("true", "True")


def fetch_data(path: Path | None = None, url: str | None = None) -> str:
    """Read the report text from a local file or a remote endpoint."""
    if path:
        logger.debug("Loading reports from %s", path)
        try:
            with path.open(encoding="utf-8") as f:
                text = f.read()
        except OSError as exc:
            raise InputUnavailable(f"Unable to read {path}: {exc}") from exc
        except UnicodeDecodeError as exc:
            raise MalformedRecord(f"Report file {path} is not valid UTF-8: {exc}") from exc
        logger.debug("Loaded %d bytes from file", len(text))
        return text
    if url:
        logger.debug("Fetching reports from %s", url)
        try:
            resp = requests.get(url, timeout=30)
            resp.raise_for_status()
        except requests.RequestException as exc:
            raise InputUnavailable(f"Unable to fetch {url}: {exc}") from exc
        logger.debug("Fetched %d bytes from remote", len(resp.content))
        return resp.text
    raise InputUnavailable("Missing input. Pass a report file path or a URL.")


def _parse_int(token: str, limit: int) -> int:
    if not token.isascii() or not token.isdigit():
        raise ValueError(token)
    value = int(token)
    if value > limit:
        raise ValueError(token)
    return value


def parse_up_flag(token: str | None) -> bool:
    return token in UP_FLAGS


def parse_station(line: str) -> Tuple[StationId, List[UnitId]]:
    """Parse ``<station_id> <charger_id> ...`` into its ids."""
    tokens = line.split()
    station_token = tokens[0] if tokens else ""
    try:
        station_id = _parse_int(station_token, MAX_ID)
    except ValueError:
        raise MalformedRecord(f"Invalid station ID: '{station_token}'") from None

    chargers: List[UnitId] = []
    for token in tokens[1:]:
        try:
            chargers.append(_parse_int(token, MAX_ID))
        except ValueError:
            raise MalformedRecord(
                f"Invalid station entry for Station ID: {station_id}. "
                f"Could not parse charger ID '{token}'.",
                station_id=station_id,
            ) from None
    return station_id, chargers


def parse_report(line: str) -> Tuple[UnitId, TimeWindow]:
    """Parse ``<charger_id> <start> <end> [<up>]`` into a window."""
    tokens = line.split()
    if len(tokens) not in (3, 4):
        raise MalformedRecord(
            "Could not parse charger availability entry. "
            f"Expected 3 or 4 fields, got {len(tokens)}."
        )
    try:
        unit_id = _parse_int(tokens[0], MAX_ID)
    except ValueError:
        raise MalformedRecord(
            f"Invalid charger availability entry. Could not parse charger ID '{tokens[0]}'."
        ) from None
    try:
        start = _parse_int(tokens[1], MAX_TIME)
        end = _parse_int(tokens[2], MAX_TIME)
    except ValueError as exc:
        raise MalformedRecord(
            f"Invalid charger availability entry. Could not parse time '{exc}' "
            f"for charger ID: {unit_id}.",
            unit_id=unit_id,
        ) from None
    if start > end:
        raise InvalidWindow(start, end, unit_id=unit_id)
    up = parse_up_flag(tokens[3] if len(tokens) == 4 else None)
    return unit_id, TimeWindow(start, end, up)


def parse_reports(text: str) -> Tuple[StationMembership, UnitTimeline]:
    """Split the report text into station membership and charger windows."""
    section: str | None = None
    membership: Dict[StationId, Set[UnitId]] = {}
    timelines: Dict[UnitId, List[TimeWindow]] = {}

    for line_no, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line:
            continue
        if line in (STATIONS_HEADER, REPORTS_HEADER):
            section = line
            continue
        if section is None:
            raise MalformedRecord(
                "Invalid file format: data found before any section header",
                line_no,
                line,
            )
        try:
            if section == STATIONS_HEADER:
                station_id, chargers = parse_station(line)
                membership.setdefault(station_id, set()).update(chargers)
            else:
                unit_id, window = parse_report(line)
                timelines.setdefault(unit_id, []).append(window)
        except (MalformedRecord, InvalidWindow) as exc:
            raise exc.at_line(line_no, line)

    logger.debug(
        "Parsed %d stations and %d chargers with reports",
        len(membership),
        len(timelines),
    )
    return membership, timelines
