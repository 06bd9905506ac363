"""Public interface for the eurofx package."""

from __future__ import annotations

from datetime import date
from importlib import metadata as importlib_metadata
from pathlib import Path
from typing import TYPE_CHECKING, BinaryIO, Dict, List, Optional

from eurofx.analytics import statistics as rate_statistics
from eurofx.analytics.statistics import RateSummary
from eurofx.exceptions import CurrencyUnavailableError, EuroFxError, RateSourceError
from eurofx.ingestion.eurofxref import BadRowPolicy, EurofxrefLoader, LoadResult
from eurofx.ingestion.models import RateRow, RateTable
from eurofx.ingestion.row_parser import SkippedRecord
from eurofx.ingestion.sources import LocalArchiveSource, RemoteArchiveSource
from eurofx.ingestion.strategy import ArchiveSource
from eurofx.utils.date_range import parse_date
from eurofx.utils.ecb import BASE_CURRENCY, EUROFXREF_CSV_NAME, EUROFXREF_HIST_URL

if TYPE_CHECKING:  # pragma: no cover
    import requests

__all__ = [
    "__version__",
    "EuroFx",
    "RateTable",
    "RateRow",
    "RateSummary",
    "LoadResult",
    "EurofxrefLoader",
    "EuroFxError",
    "CurrencyUnavailableError",
    "RateSourceError",
]

try:
    __version__ = importlib_metadata.version("eurofx")
except importlib_metadata.PackageNotFoundError:  # pragma: no cover - fallback for local runs
    __version__ = "0.1.0"


class EuroFx:
    """Package facade: load the ECB archive once, then query it.

    The facade keeps the most recently loaded :class:`RateTable`. A load that
    fails leaves the previous table in place; a successful one replaces it
    with a brand new instance, so tables handed out earlier are never
    mutated. Dates may be passed as :class:`datetime.date` objects or ISO
    ``YYYY-MM-DD`` strings.
    """

    __slots__ = ("table", "rejected_rows", "_loader")

    base_currency = BASE_CURRENCY

    # Provide direct access to the package version as a class attribute.
    __version__ = __version__

    def __init__(
        self,
        *,
        on_bad_row: BadRowPolicy = "skip",
        resource_name: str = EUROFXREF_CSV_NAME,
    ) -> None:
        self._loader = EurofxrefLoader(resource_name=resource_name, on_bad_row=on_bad_row)
        self.table = RateTable()
        self.rejected_rows: List[SkippedRecord] = []

    def load(self, stream: BinaryIO | bytes) -> RateTable:
        """Load a zip byte stream containing ``eurofxref-hist.csv``."""

        result = self._loader.load(stream)
        self.table = result.table
        self.rejected_rows = result.rejected
        return self.table

    def load_source(self, source: ArchiveSource) -> RateTable:
        """Acquire the archive from ``source`` and load it."""

        with source.open() as stream:
            return self.load(stream)

    def load_zip(self, zip_path: str | Path) -> RateTable:
        """Load the archive from a zip file on disk."""

        return self.load_source(LocalArchiveSource(Path(zip_path)))

    def load_live(
        self,
        *,
        url: str = EUROFXREF_HIST_URL,
        timeout: int = 30,
        session: requests.Session | None = None,
    ) -> RateTable:
        """Download the current archive from the ECB and load it."""

        return self.load_source(RemoteArchiveSource(url=url, timeout=timeout, session=session))

    def currency_names(self) -> tuple[str, ...]:
        return self.table.currency_names()

    def rates_on(self, rate_date: date | str) -> Dict[str, Optional[float]]:
        """Return every currency's rate on ``rate_date`` (empty when not published)."""

        return self.table.rates_on(parse_date(rate_date))

    def convert(
        self,
        rate_date: date | str,
        amount: float,
        source_currency: str,
        target_currency: str,
    ) -> float:
        """Convert ``amount`` between two currencies at ``rate_date``'s reference rates."""

        return rate_statistics.convert(
            self.table, parse_date(rate_date), amount, source_currency, target_currency
        )

    def highest(self, start: date | str, end: date | str, currency: str) -> float:
        """Highest reference rate of ``currency`` between ``start`` and ``end`` inclusive."""

        return rate_statistics.highest(self.table, parse_date(start), parse_date(end), currency)

    def average(
        self,
        start: date | str,
        end: date | str,
        currency: str,
        remove_unavailable: bool = True,
    ) -> float:
        """Average reference rate of ``currency`` between ``start`` and ``end`` inclusive.

        With ``remove_unavailable=False`` unpublished rates count as zero,
        which lowers the average over the range.
        """

        return rate_statistics.average(
            self.table, parse_date(start), parse_date(end), currency, remove_unavailable
        )

    def statistics(
        self,
        start: date | str,
        end: date | str,
        currency: str,
        remove_unavailable: bool = True,
    ) -> RateSummary:
        return rate_statistics.summarize(
            self.table, parse_date(start), parse_date(end), currency, remove_unavailable
        )
