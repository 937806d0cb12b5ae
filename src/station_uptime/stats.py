from typing import Optional

from .models import StationCoverage

# Above this many time units the denominator is scaled down instead of the
# numerator being scaled up.
SCALE_THRESHOLD = 10000
PERCENT = 100


def availability_percent(available: int, total: int) -> Optional[int]:
    """Return ``available / total`` as a truncated integer percentage.

    Returns ``None`` when ``total`` is zero.
    """
    if total == 0:
        return None
    if total > SCALE_THRESHOLD:
        total //= PERCENT
    else:
        available *= PERCENT
    return available // total


def from_coverage(coverage: StationCoverage) -> Optional[int]:
    return availability_percent(coverage.available, coverage.total)
