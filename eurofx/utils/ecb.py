"""ECB-specific constants shared across the package."""

from __future__ import annotations

from typing import Final

BASE_CURRENCY: Final[str] = "EUR"
EUROFXREF_HIST_URL: Final[str] = "https://www.ecb.europa.eu/stats/eurofxref/eurofxref-hist.zip"
EUROFXREF_CSV_NAME: Final[str] = "eurofxref-hist.csv"
# Dates in the historical CSV are always ISO formatted.
EUROFXREF_DATE_FORMAT: Final[str] = "%Y-%m-%d"


__all__ = [
    "BASE_CURRENCY",
    "EUROFXREF_HIST_URL",
    "EUROFXREF_CSV_NAME",
    "EUROFXREF_DATE_FORMAT",
]
