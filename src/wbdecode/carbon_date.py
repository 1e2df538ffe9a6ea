"""
Calendar values with Wikibase time precision.

A Wikibase time value is a proleptic Gregorian timestamp plus a precision
code ranging from "billion years" (0) down to "second" (14). Fields finer
than the precision carry no information: ``+1940-00-00T00:00:00Z`` at year
precision is just "1940", and ``-4540000000`` at billion-year precision is
"about 4 billion years ago". ``CalendarValue`` keeps only the meaningful
fields and compares two values at the coarser of their two precisions.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Union

from . import config
from .errors import MalformedSnak, UnsupportedPrecision


class Precision(IntEnum):
    """Precision levels ordered from coarsest to finest."""

    BILLION_YEARS = 0
    HUNDRED_MILLION_YEARS = 1
    TEN_MILLION_YEARS = 2
    MILLION_YEARS = 3
    HUNDRED_THOUSAND_YEARS = 4
    TEN_THOUSAND_YEARS = 5
    MILLENNIUM = 6
    CENTURY = 7
    DECADE = 8
    YEAR = 9
    MONTH = 10
    DAY = 11
    HOUR = 12
    MINUTE = 13
    SECOND = 14

    @property
    def label(self) -> str:
        return self.name.lower()

    @property
    def year_unit(self) -> Optional[int]:
        """Size of the year bucket for precisions coarser than a year, else None."""
        return config.PRECISION_YEAR_UNITS.get(self.label)

    @classmethod
    def from_code(cls, code) -> "Precision":
        """Map a wire precision code through the published lookup table."""
        name = None
        if isinstance(code, int) and not isinstance(code, bool):
            name = config.TIME_PRECISION_CODES.get(code)
        if name is None:
            raise UnsupportedPrecision(
                f"Unsupported time precision code {code!r}.",
                {"precision": code, "supported": sorted(config.TIME_PRECISION_CODES)},
            )
        return cls[name.upper()]

    @classmethod
    def coerce(cls, value: Union["Precision", str, int]) -> "Precision":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls[value.upper()]
            except KeyError:
                raise UnsupportedPrecision(f"Unknown precision name {value!r}.", {"precision": value}) from None
        return cls.from_code(value)


_FIELD_NAMES = ("month", "day", "hour", "minute", "second")


def _year_bucket(year: int, unit: int) -> int:
    # Floor division: 50 BCE (-50) lands in the century starting at -100.
    return year // unit


@dataclass(frozen=True, eq=False)
class CalendarValue:
    """Signed (proleptic) year plus optional finer fields at a declared precision."""

    year: int
    month: Optional[int] = None
    day: Optional[int] = None
    hour: Optional[int] = None
    minute: Optional[int] = None
    second: Optional[int] = None
    precision: Optional[Precision] = None

    def __post_init__(self):
        if self.precision is None:
            precision = Precision.YEAR
            for offset, name in enumerate(_FIELD_NAMES, start=1):
                if getattr(self, name) is not None:
                    precision = Precision(Precision.YEAR + offset)
        else:
            precision = Precision.coerce(self.precision)
        object.__setattr__(self, "precision", precision)

    def _comparison_key(self, precision: Precision) -> tuple:
        unit = precision.year_unit
        if unit is not None:
            return (_year_bucket(self.year, unit),)
        fields = (self.year, self.month, self.day, self.hour, self.minute, self.second)
        return fields[: precision - Precision.YEAR + 1]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CalendarValue):
            return NotImplemented
        shared = min(self.precision, other.precision)
        return self._comparison_key(shared) == other._comparison_key(shared)

    def __hash__(self) -> int:
        # Equal values always fall into the same billion-year bucket.
        return hash(_year_bucket(self.year, Precision.BILLION_YEARS.year_unit))

    def __str__(self) -> str:
        year = f"{self.year:05d}" if self.year < 0 else f"{self.year:04d}"
        if self.precision < Precision.YEAR:
            return f"{year} ({self.precision.label})"
        rendered = year
        separators = ("-", "-", "T", ":", ":")
        for name, separator in zip(_FIELD_NAMES, separators):
            value = getattr(self, name)
            if value is None:
                break
            rendered += f"{separator}{value:02d}"
        return rendered


def normalize(
    raw_year: int,
    raw_month: Optional[int] = None,
    raw_day: Optional[int] = None,
    raw_hour: Optional[int] = None,
    raw_minute: Optional[int] = None,
    raw_second: Optional[int] = None,
    *,
    precision_code: int,
) -> CalendarValue:
    """
    Build a CalendarValue from raw timestamp fields and a wire precision code.

    Coarse precisions (decade and above) round the year down to the bucket
    the precision names and drop every finer field. Year precision and finer
    keep the literal year and each field down to the precision. The sign of the
    year is kept as-is; no epoch shift is applied. Zero month/day values are
    the wire placeholder for "not given" and normalize to None.
    """
    precision = Precision.from_code(precision_code)
    unit = precision.year_unit
    if unit is not None:
        return CalendarValue(_year_bucket(raw_year, unit) * unit, precision=precision)

    raw_fields = (raw_month or None, raw_day or None, raw_hour, raw_minute, raw_second)
    kept = {}
    for offset, (name, value) in enumerate(zip(_FIELD_NAMES, raw_fields), start=1):
        if precision < Precision.YEAR + offset:
            break
        kept[name] = value
    return CalendarValue(raw_year, precision=precision, **kept)


def parse_wikibase_time(value: dict) -> CalendarValue:
    """Decode a ``time`` datavalue payload (``{"time": "+1940-10-10T00:00:00Z", "precision": 11}``)."""
    raw_time = value.get("time")
    match = config.WIKIBASE_TIME_PATTERN.match(raw_time) if isinstance(raw_time, str) else None
    if not match:
        raise MalformedSnak("Time value has no parseable timestamp.", {"time": raw_time})
    fields = {key: int(group) for key, group in match.groupdict().items()}
    return normalize(
        fields["year"],
        fields["month"],
        fields["day"],
        fields["hour"],
        fields["minute"],
        fields["second"],
        precision_code=value.get("precision"),
    )
