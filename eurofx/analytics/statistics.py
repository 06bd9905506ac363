"""Conversion and range statistics over a loaded :class:`RateTable`.

Every function here is a pure read of the table. Rates are quoted against
the base currency (EUR), so converting between two non-base currencies goes
through it: ``amount / source_rate * target_rate``.

Unavailable rates are ``None`` in the table. Range statistics either drop
them (``remove_unavailable=True``) or count them as zero while keeping them
in the denominator, which lowers the average.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

import pandas as pd

from eurofx.exceptions import CurrencyUnavailableError
from eurofx.ingestion.models import RateTable
from eurofx.utils.date_range import DateRange


@dataclass(frozen=True, slots=True)
class RateSummary:
    """Summary statistics for one currency over a date range."""

    count: int
    minimum: float
    maximum: float
    total: float
    mean: float


def convert(
    table: RateTable,
    rate_date: date,
    amount: float,
    source_currency: str,
    target_currency: str,
) -> float:
    """Convert ``amount`` from ``source_currency`` to ``target_currency`` on ``rate_date``."""

    rates = table.rates_on(rate_date)
    source_rate = rates.get(source_currency)
    if source_rate is None:
        raise CurrencyUnavailableError(
            source_currency, f"{source_currency} not available on {rate_date}"
        )
    if source_rate == 0:
        raise CurrencyUnavailableError(
            source_currency, f"{source_currency} has a zero rate on {rate_date}"
        )
    target_rate = rates.get(target_currency)
    if target_rate is None:
        raise CurrencyUnavailableError(
            target_currency, f"{target_currency} not available on {rate_date}"
        )
    return amount / source_rate * target_rate


def select_range(
    table: RateTable,
    start: date,
    end: date,
    currency: str,
) -> list[float | None]:
    """Return ``currency``'s rate for every row dated within ``[start, end]``."""

    window = DateRange(start=start, end=end)
    if window.is_empty:
        return []
    return [table.rate(row, currency) for row in table.rows() if row.rate_date in window]


def _range_series(
    table: RateTable,
    start: date,
    end: date,
    currency: str,
    remove_unavailable: bool,
) -> pd.Series:
    series = pd.Series(select_range(table, start, end, currency), dtype="float64")
    if remove_unavailable:
        series = series.dropna()
    else:
        series = series.fillna(0.0)
    if series.empty:
        raise CurrencyUnavailableError(
            currency, f"{currency} not available between {start} and {end}"
        )
    return series


def summarize(
    table: RateTable,
    start: date,
    end: date,
    currency: str,
    remove_unavailable: bool = True,
) -> RateSummary:
    """Return count/min/max/sum/mean for ``currency`` over the inclusive range."""

    series = _range_series(table, start, end, currency, remove_unavailable)
    return RateSummary(
        count=int(series.count()),
        minimum=float(series.min()),
        maximum=float(series.max()),
        total=float(series.sum()),
        mean=float(series.mean()),
    )


def highest(table: RateTable, start: date, end: date, currency: str) -> float:
    """Return the highest published rate of ``currency`` in the range."""

    return float(_range_series(table, start, end, currency, True).max())


def average(
    table: RateTable,
    start: date,
    end: date,
    currency: str,
    remove_unavailable: bool,
) -> float:
    """Return the average rate of ``currency`` in the range."""

    return float(_range_series(table, start, end, currency, remove_unavailable).mean())


__all__ = ["RateSummary", "convert", "select_range", "summarize", "highest", "average"]
