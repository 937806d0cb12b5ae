"""Error kinds raised while reading reports and computing availability."""
from __future__ import annotations


class AvailabilityError(Exception):
    """Base class for failures that abort a whole availability run."""

    kind = "error"
    exit_code = 1
    line_no: int | None = None
    line: str | None = None

    def at_line(self, line_no: int, line: str) -> "AvailabilityError":
        """Attach the offending input line and return the error."""
        self.line_no = line_no
        self.line = line
        self.args = (f"{self.args[0]} (line {line_no}: '{line}')",)
        return self


class InputUnavailable(AvailabilityError):
    """The report source could not be opened or downloaded."""

    kind = "input_unavailable"
    exit_code = 1


class MalformedRecord(AvailabilityError):
    """A line does not match the expected token shape."""

    kind = "malformed_record"
    exit_code = 2

    def __init__(
        self,
        message: str,
        line_no: int | None = None,
        line: str | None = None,
        *,
        station_id: int | None = None,
        unit_id: int | None = None,
    ) -> None:
        super().__init__(message)
        self.station_id = station_id
        self.unit_id = unit_id
        if line_no is not None:
            self.at_line(line_no, line)


class ConflictingReport(AvailabilityError):
    """Two overlapping windows for the same unit disagree on status."""

    kind = "conflicting_report"
    exit_code = 3

    def __init__(self, unit_id: int) -> None:
        super().__init__(
            f"Conflicting availability entries found for charger {unit_id}"
        )
        self.unit_id = unit_id


class InvalidWindow(AvailabilityError):
    """A window starts after it ends."""

    kind = "invalid_window"
    exit_code = 4

    def __init__(self, start: int, end: int, unit_id: int | None = None) -> None:
        if unit_id is None:
            message = f"Invalid window: start {start} is after end {end}"
        else:
            message = (
                f"Invalid availability entry for charger {unit_id}: "
                f"start {start} is after end {end}"
            )
        super().__init__(message)
        self.start = start
        self.end = end
        self.unit_id = unit_id
