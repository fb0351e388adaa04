"""
core/sprint.py
--------------
Sprint window calculator.

Sprints are fixed-length windows laid end to end from a configured epoch:

    epoch + k * length  <=  instant  <  epoch + (k + 1) * length

k is floored, so instants before the epoch land in earlier (negative)
windows instead of being clamped to the first one. Windows are aligned to
UTC midnight; naive datetimes are treated as UTC.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone

from pippin.core.exceptions import ConfigError

ONE_DAY = timedelta(days=1)


def as_utc(instant: datetime) -> datetime:
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)


def epoch_start(epoch: date) -> datetime:
    return datetime.combine(epoch, time.min, tzinfo=timezone.utc)


@dataclass(frozen=True)
class SprintWindow:
    start: datetime
    end: datetime

    @property
    def length(self) -> timedelta:
        return self.end - self.start

    def contains(self, instant: datetime) -> bool:
        return self.start <= as_utc(instant) < self.end


def validate_length(length_days: int) -> int:
    if isinstance(length_days, bool) or not isinstance(length_days, int) or length_days <= 0:
        raise ConfigError(
            f"sprint length must be a positive number of days, got {length_days!r}"
        )
    return length_days


def current_window(now: datetime, epoch: date, length_days: int) -> SprintWindow:
    """Return the sprint window enclosing ``now``."""
    validate_length(length_days)
    origin = epoch_start(epoch)
    # timedelta // timedelta floors toward negative infinity
    days_since_epoch = (as_utc(now) - origin) // ONE_DAY
    index = days_since_epoch // length_days
    start = origin + timedelta(days=index * length_days)
    return SprintWindow(start=start, end=start + timedelta(days=length_days))
