"""Data models shared across ingestion and query modules."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING, Iterator, Sequence

from eurofx.utils.logger import get_logger

if TYPE_CHECKING:  # pragma: no cover
    import pandas as pd

LOGGER = get_logger(__name__)

CurrencySchema = tuple[str, ...]


@dataclass(frozen=True, slots=True)
class RateRow:
    """Rates published for a single date, aligned with the table's currencies.

    ``None`` marks a rate that was not published (or could not be parsed);
    it is never replaced by zero at this layer.
    """

    rate_date: date
    rates: tuple[float | None, ...]


class RateTable:
    """In-memory time series of reference rates keyed by date.

    The currency list comes from the first CSV record and never changes for
    the lifetime of the table. Rows keep their insertion order; when the same
    date is added twice the later row replaces the earlier one in place.
    """

    __slots__ = ("_currencies", "_positions", "_rows", "_index")

    def __init__(self, currencies: Sequence[str] = ()) -> None:
        schema: CurrencySchema = tuple(currencies)
        positions: dict[str, int] = {}
        for position, code in enumerate(schema):
            if code in positions:
                raise ValueError(f"Duplicate currency code in header: {code!r}")
            positions[code] = position
        self._currencies = schema
        self._positions = positions
        self._rows: list[RateRow] = []
        self._index: dict[date, int] = {}

    def currency_names(self) -> CurrencySchema:
        """Return the ordered currency codes known to the table."""

        return self._currencies

    def add_row(self, row: RateRow) -> None:
        """Append ``row`` (or replace the row already stored for its date)."""

        if len(row.rates) != len(self._currencies):
            raise ValueError(
                f"Row for {row.rate_date} has {len(row.rates)} rates, "
                f"expected {len(self._currencies)}"
            )
        existing = self._index.get(row.rate_date)
        if existing is not None:
            LOGGER.debug("Replacing duplicate row for %s", row.rate_date)
            self._rows[existing] = row
            return
        self._index[row.rate_date] = len(self._rows)
        self._rows.append(row)

    def rows(self) -> Iterator[RateRow]:
        """Iterate over rows in insertion order (a fresh iterator per call)."""

        return iter(self._rows)

    def dates(self) -> list[date]:
        return [row.rate_date for row in self._rows]

    def row_for(self, rate_date: date) -> RateRow | None:
        position = self._index.get(rate_date)
        return None if position is None else self._rows[position]

    def resolve(self, row: RateRow) -> dict[str, float | None]:
        """Map a row's positional rates onto currency codes."""

        return dict(zip(self._currencies, row.rates))

    def rates_on(self, rate_date: date) -> dict[str, float | None]:
        """Return every currency's rate on ``rate_date`` or ``{}`` if absent."""

        row = self.row_for(rate_date)
        if row is None:
            return {}
        return self.resolve(row)

    def rate(self, row: RateRow, currency: str) -> float | None:
        """Return ``currency``'s rate in ``row``; unknown codes are unavailable."""

        position = self._positions.get(currency)
        if position is None:
            return None
        return row.rates[position]

    def to_frame(self) -> "pd.DataFrame":
        """Return the table as a DataFrame indexed by date (``NaN`` when unavailable)."""

        import pandas as pd

        frame = pd.DataFrame(
            [list(row.rates) for row in self._rows],
            index=pd.Index(self.dates(), name="Date"),
            columns=list(self._currencies),
            dtype="float64",
        )
        return frame

    def __len__(self) -> int:
        return len(self._rows)

    def __contains__(self, rate_date: object) -> bool:
        return rate_date in self._index

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RateTable):
            return NotImplemented
        return self._currencies == other._currencies and self._rows == other._rows

    def __repr__(self) -> str:
        return f"RateTable(currencies={len(self._currencies)}, rows={len(self._rows)})"


__all__ = ["CurrencySchema", "RateRow", "RateTable"]
