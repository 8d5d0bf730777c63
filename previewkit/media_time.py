"""
Media time values for PreviewKit.

MediaTime is an immutable, signed duration with millisecond resolution.
Conversions from stream timestamps use Python integers throughout, so
scaling large tick counts by the time base never overflows.
"""

from fractions import Fraction
from functools import total_ordering
from numbers import Integral
from typing import Tuple, Union

from .exceptions import InvalidTimeBase

TimeBase = Union[Fraction, Tuple[int, int]]


def _split_time_base(time_base: TimeBase) -> Tuple[int, int]:
    if isinstance(time_base, Fraction):
        return time_base.numerator, time_base.denominator

    try:
        numerator, denominator = time_base
    except (TypeError, ValueError):
        raise InvalidTimeBase(f"Time base of unusable format: {time_base!r}")

    if not isinstance(numerator, Integral) or not isinstance(denominator, Integral):
        raise InvalidTimeBase(f"Time base of unusable format: {time_base!r}")
    if denominator == 0:
        raise InvalidTimeBase(f"Time base has a zero denominator: {time_base!r}")
    return int(numerator), int(denominator)


@total_ordering
class MediaTime:
    """
    Signed duration in whole milliseconds.

    Example:
        >>> MediaTime.from_rational(90000, (1, 90000))
        MediaTime(1000)
        >>> str(MediaTime.from_seconds(3725))
        '01:02:05.000'
    """

    __slots__ = ("_millis",)

    def __init__(self, millis: int = 0):
        object.__setattr__(self, "_millis", int(millis))

    def __setattr__(self, name, value):
        raise AttributeError("MediaTime is immutable")

    @classmethod
    def from_rational(cls, timestamp: int, time_base: TimeBase) -> "MediaTime":
        """
        Convert a stream timestamp to MediaTime.

        Args:
            timestamp: Tick count in units of the stream's time base
            time_base: Fraction, or (numerator, denominator) pair

        Returns:
            MediaTime truncated toward zero to whole milliseconds

        Raises:
            InvalidTimeBase: If the denominator is zero or a component is not an integer
        """
        numerator, denominator = _split_time_base(time_base)
        # int(Fraction) truncates toward zero for negative ticks too
        return cls(int(Fraction(1000 * int(timestamp) * numerator, denominator)))

    @classmethod
    def from_millis(cls, millis: int) -> "MediaTime":
        return cls(millis)

    @classmethod
    def from_seconds(cls, seconds: Union[int, float]) -> "MediaTime":
        if isinstance(seconds, Integral):
            return cls(int(seconds) * 1000)
        return cls(round(seconds * 1000))

    @property
    def millis(self) -> int:
        return self._millis

    @property
    def seconds(self) -> int:
        """Whole seconds, truncated toward zero."""
        if self._millis < 0:
            return -(-self._millis // 1000)
        return self._millis // 1000

    def total_seconds(self) -> float:
        return self._millis / 1000.0

    def is_zero(self) -> bool:
        return self._millis == 0

    def __add__(self, other: "MediaTime") -> "MediaTime":
        if not isinstance(other, MediaTime):
            return NotImplemented
        return MediaTime(self._millis + other._millis)

    def __sub__(self, other: "MediaTime") -> "MediaTime":
        if not isinstance(other, MediaTime):
            return NotImplemented
        return MediaTime(self._millis - other._millis)

    def __neg__(self) -> "MediaTime":
        return MediaTime(-self._millis)

    def __eq__(self, other) -> bool:
        if not isinstance(other, MediaTime):
            return NotImplemented
        return self._millis == other._millis

    def __lt__(self, other: "MediaTime") -> bool:
        if not isinstance(other, MediaTime):
            return NotImplemented
        return self._millis < other._millis

    def __hash__(self) -> int:
        return hash(self._millis)

    def __repr__(self) -> str:
        return f"MediaTime({self._millis})"

    def __str__(self) -> str:
        sign = "-" if self._millis < 0 else ""
        total = abs(self._millis)
        millis = total % 1000
        seconds = total // 1000 % 60
        minutes = total // 60000 % 60
        hours = total // 3600000

        if hours == 0:
            return f"{sign}{minutes:02d}:{seconds:02d}.{millis:03d}"
        return f"{sign}{hours:02d}:{minutes:02d}:{seconds:02d}.{millis:03d}"
