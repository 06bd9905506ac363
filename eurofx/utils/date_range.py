"""Helpers for parsing dates and working with inclusive date windows."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Tuple

from eurofx.utils.ecb import EUROFXREF_DATE_FORMAT


@dataclass(frozen=True)
class DateRange:
    """Container representing a closed date range.

    An inverted range (``start > end``) is allowed and simply contains no
    dates, which lets range statistics treat it as an empty selection.
    """

    start: date
    end: date

    def as_tuple(self) -> Tuple[date, date]:
        """Return the range as a tuple of ``(start, end)``."""
        return (self.start, self.end)

    @property
    def is_empty(self) -> bool:
        return self.start > self.end

    def __contains__(self, day: object) -> bool:
        if not isinstance(day, date):
            return False
        return self.start <= day <= self.end

    @classmethod
    def from_values(cls, start: str | date, end: str | date) -> "DateRange":
        """Build a range from ``date`` objects or ISO strings."""

        return cls(start=parse_date(start), end=parse_date(end))


def parse_date(value: str | date) -> date:
    """Parse a date string in ISO format to :class:`date`.

    ``datetime`` instances are narrowed to their calendar date so they compare
    equal to the row dates held by a rate table.
    """

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.strptime(value, EUROFXREF_DATE_FORMAT).date()


__all__ = ["DateRange", "parse_date"]
