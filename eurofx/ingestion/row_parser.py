"""Turn raw ``eurofxref-hist.csv`` records into header or rate rows."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Sequence, Union

from eurofx.ingestion.models import CurrencySchema, RateRow
from eurofx.utils.ecb import EUROFXREF_DATE_FORMAT


@dataclass(frozen=True, slots=True)
class HeaderRecord:
    """The first record of the file: the currency codes in column order."""

    currencies: CurrencySchema


@dataclass(frozen=True, slots=True)
class SkippedRecord:
    """A record that could not become a row, kept for diagnostics."""

    ordinal: int
    fields: tuple[str, ...]
    reason: str


ParsedRecord = Union[HeaderRecord, RateRow, SkippedRecord]


# Plain decimal notation only; ``float`` also accepts "1_000", "nan" and "inf".
_DECIMAL_PATTERN = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


def _parse_rate(value: str) -> float | None:
    token = value.strip()
    if not _DECIMAL_PATTERN.fullmatch(token):
        return None
    rate = float(token)
    # Huge exponents overflow to ``inf``, which is not a published rate.
    if not math.isfinite(rate):
        return None
    return rate


class EurofxrefRowParser:
    """Parse single CSV records from the ECB historical reference-rate file.

    The parser is stateless: the caller supplies the record's 1-based
    ordinal and, for data records, the currency codes taken from the header.
    Records that cannot be trusted are returned as :class:`SkippedRecord`
    instead of raising, so one bad line never aborts a load.
    """

    def __init__(self, *, date_format: str = EUROFXREF_DATE_FORMAT) -> None:
        self.date_format = date_format

    def parse(
        self,
        fields: Sequence[str],
        ordinal: int,
        currencies: CurrencySchema = (),
    ) -> ParsedRecord:
        payload = self._payload(fields)
        if ordinal == 1:
            return HeaderRecord(currencies=tuple(payload))

        raw_date = fields[0] if fields else ""
        rate_date = self._parse_date(raw_date)
        if rate_date is None:
            return SkippedRecord(ordinal, tuple(fields), f"unparseable date {raw_date!r}")
        # Fields beyond the header's currencies have no name and are ignored.
        rates = [_parse_rate(value) for value in payload[: len(currencies)]]
        # Missing trailing columns are rates that were not published that day.
        rates.extend([None] * (len(currencies) - len(rates)))
        return RateRow(rate_date=rate_date, rates=tuple(rates))

    @staticmethod
    def _payload(fields: Sequence[str]) -> list[str]:
        payload = list(fields[1:])
        if payload and payload[-1] == "":
            payload.pop()
        return payload

    def _parse_date(self, value: str) -> date | None:
        try:
            return datetime.strptime(value.strip(), self.date_format).date()
        except ValueError:
            return None


__all__ = ["EurofxrefRowParser", "HeaderRecord", "SkippedRecord", "ParsedRecord"]
