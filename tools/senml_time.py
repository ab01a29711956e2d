"""
senml_time.py - Convert SenML time values to and from absolute times

SenML times are seconds as floating point numbers. Values greater than or
equal to 2**28 are absolute times relative to the Unix epoch. Smaller values
(including negative ones) are relative to the time the pack is processed.

SenML relies on float64 for subsecond precision. The fractional part is
truncated to whole nanoseconds, so 1234567890.123456789 resolves to
1234567890 s + 123456716 ns. Subsecond timestamps round-trip only
approximately.

datetime carries microseconds only, so resolved times are SenMLTime values
(epoch seconds + nanoseconds). Use to_datetime() when microseconds are
enough.

Usage:
    from senml_time import SenMLTime, convert_senml_time, datetime_to_timestamp

    now = SenMLTime.now()
    t = convert_senml_time(-10.0, now)        # ten seconds ago
    t = convert_senml_time(1.320067464e9, now)  # absolute
    seconds, precise = datetime_to_timestamp(t)
"""

import math
import time
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

# 2**28
TIME_THRESHOLD = 268_435_456.0

NANOS_PER_SECOND = 1_000_000_000

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Representable range, bounded by datetime (years 1 to 9999)
MIN_SECONDS = -62_135_596_800
MAX_SECONDS = 253_402_300_799


@dataclass(frozen=True, order=True)
class SenMLTime:
    """Absolute UTC time with nanosecond precision.

    nanos is always normalized to 0 <= nanos < 1e9, also for times
    before the epoch.
    """
    seconds: int
    nanos: int = 0

    def __post_init__(self):
        if not 0 <= self.nanos < NANOS_PER_SECOND:
            raise ValueError(f"nanos out of range: {self.nanos}")

    @classmethod
    def from_nanos(cls, total: int) -> 'SenMLTime':
        seconds, nanos = divmod(total, NANOS_PER_SECOND)
        return cls(seconds, nanos)

    @classmethod
    def now(cls) -> 'SenMLTime':
        """Current wall-clock time."""
        return cls.from_nanos(time.time_ns())

    @classmethod
    def from_datetime(cls, value: datetime) -> 'SenMLTime':
        """Convert a datetime. Naive datetimes are taken as UTC."""
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        delta = value - EPOCH
        seconds = delta.days * 86400 + delta.seconds
        return cls(seconds, delta.microseconds * 1000)

    @property
    def total_nanos(self) -> int:
        return self.seconds * NANOS_PER_SECOND + self.nanos

    def shifted(self, seconds: int = 0, nanos: int = 0) -> 'SenMLTime':
        """Return this time moved by seconds + nanos (either may be negative)."""
        return SenMLTime.from_nanos(self.total_nanos + seconds * NANOS_PER_SECOND + nanos)

    def to_datetime(self) -> datetime:
        """Convert to an aware UTC datetime, truncating to microseconds."""
        return EPOCH + timedelta(seconds=self.seconds, microseconds=self.nanos // 1000)

    def __str__(self) -> str:
        if not in_range(self):
            return f"{self.seconds}.{self.nanos:09d}"
        base = (EPOCH + timedelta(seconds=self.seconds)).replace(tzinfo=None)
        return f"{base.isoformat()}.{self.nanos:09d}Z"


def in_range(value: SenMLTime) -> bool:
    """True if value can be represented as a datetime."""
    return MIN_SECONDS <= value.seconds <= MAX_SECONDS


def convert_senml_time(seconds: float, now: SenMLTime) -> Optional[SenMLTime]:
    """
    Convert a SenML time value to an absolute time.

    Args:
        seconds: SenML time value (base time + time)
        now: Reference time for relative values

    Returns:
        The absolute time, or None if the value is NaN, infinite or
        outside the representable range.
    """
    if not math.isfinite(seconds):
        return None

    # Truncate toward zero, both parts keep the sign of seconds
    frac, whole = math.modf(seconds)
    whole_seconds = int(whole)
    nanoseconds = int(frac * NANOS_PER_SECOND) if frac != 0.0 else 0

    if seconds >= TIME_THRESHOLD:
        result = SenMLTime.from_nanos(whole_seconds * NANOS_PER_SECOND + nanoseconds)
    else:
        result = now.shifted(whole_seconds, nanoseconds)

    if not in_range(result):
        return None
    return result


def datetime_to_timestamp(value: SenMLTime) -> Tuple[int, Optional[float]]:
    """
    Convert an absolute time to its SenML wire form.

    Returns:
        (seconds, precise) where seconds is the integer Unix timestamp and
        precise is seconds plus the subsecond fraction as a float, or None
        when the time has no subsecond part.
    """
    if value.nanos > 0:
        return value.seconds, value.seconds + value.nanos / NANOS_PER_SECOND
    return value.seconds, None
