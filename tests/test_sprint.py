"""Tests for the sprint window calculator."""

from datetime import date, datetime, timedelta, timezone

import pytest

from pippin.core.exceptions import ConfigError
from pippin.core.sprint import current_window

from conftest import utc

EPOCH = date(2025, 1, 1)


def test_window_containing_reference_instant():
    window = current_window(utc(2025, 1, 10, 15), EPOCH, 7)

    assert window.start == utc(2025, 1, 8)
    assert window.end == utc(2025, 1, 15)
    assert window.contains(utc(2025, 1, 10))


def test_epoch_day_starts_first_window():
    window = current_window(utc(2025, 1, 1), EPOCH, 7)
    assert window.start == utc(2025, 1, 1)
    assert window.end == utc(2025, 1, 8)


def test_end_is_exclusive():
    window = current_window(utc(2025, 1, 8), EPOCH, 7)
    assert window.start == utc(2025, 1, 8)
    assert not current_window(utc(2025, 1, 7, 23, 59), EPOCH, 7).contains(utc(2025, 1, 8))


def test_before_epoch_floors_to_earlier_window():
    window = current_window(utc(2024, 12, 31, 12), EPOCH, 7)

    assert window.start == utc(2024, 12, 25)
    assert window.end == utc(2025, 1, 1)


def test_far_before_epoch():
    window = current_window(utc(2024, 12, 1), EPOCH, 14)
    assert window.start <= utc(2024, 12, 1) < window.end
    assert (EPOCH - window.start.date()).days % 14 == 0


def test_naive_datetime_treated_as_utc():
    naive = current_window(datetime(2025, 1, 10), EPOCH, 7)
    aware = current_window(utc(2025, 1, 10), EPOCH, 7)
    assert naive == aware


def test_other_timezones_normalised():
    # 2025-01-08 01:00 at UTC+5 is still 2025-01-07 in UTC
    plus_five = timezone(timedelta(hours=5))
    window = current_window(datetime(2025, 1, 8, 1, tzinfo=plus_five), EPOCH, 7)
    assert window.start == utc(2025, 1, 1)


@pytest.mark.parametrize("length", [1, 3, 7, 14, 30])
def test_windows_partition_the_timeline(length):
    start = utc(2024, 11, 1)
    previous = None
    for hours in range(0, 24 * 120, 5):
        now = start + timedelta(hours=hours)
        window = current_window(now, EPOCH, length)

        assert window.start <= now < window.end
        assert window.end - window.start == timedelta(days=length)
        assert window.start.time() == datetime.min.time()
        if previous is not None and previous != window:
            # consecutive windows touch with no gap or overlap
            assert window.start == previous.end
        previous = window


@pytest.mark.parametrize("length", [0, -1, -7])
def test_non_positive_length_is_config_error(length):
    with pytest.raises(ConfigError):
        current_window(utc(2025, 1, 10), EPOCH, length)
