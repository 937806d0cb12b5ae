from station_uptime.models import StationCoverage
from station_uptime.stats import availability_percent, from_coverage


def test_small_total_scales_available():
    assert availability_percent(50, 100) == 50
    assert availability_percent(1, 3) == 33


def test_large_total_scales_total():
    # 20000 becomes 200, and 15000 // 200 == 75
    assert availability_percent(15000, 20000) == 75


def test_threshold_is_exclusive():
    assert availability_percent(9999, 10000) == 99
    assert availability_percent(10000, 10000) == 100
    assert availability_percent(10001, 10001) == 100


def test_truncates_toward_zero():
    assert availability_percent(2, 3) == 66
    assert availability_percent(19999, 20099) == 99


def test_zero_total_is_no_data():
    assert availability_percent(0, 0) is None


def test_result_within_bounds():
    for total in (1, 7, 9999, 10000, 10001, 10099, 19999, 123456789, 2**64 - 1):
        for available in (0, total // 3, total // 2, total - 1, total):
            percent = availability_percent(available, total)
            assert 0 <= percent <= 100


def test_monotonic_in_available():
    for total in (100, 10000, 10001, 20000, 987654):
        previous = -1
        for available in range(0, total + 1, max(total // 97, 1)):
            percent = availability_percent(available, total)
            assert percent >= previous
            previous = percent


def test_from_coverage():
    assert from_coverage(StationCoverage(available=0, total=50)) == 0
    assert from_coverage(StationCoverage(available=5, total=5)) == 100
