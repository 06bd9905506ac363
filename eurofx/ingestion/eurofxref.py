"""Load the ECB ``eurofxref-hist`` archive into a :class:`RateTable`."""

from __future__ import annotations

import csv
import io
import zipfile
import zlib
from dataclasses import dataclass, field
from typing import BinaryIO, Iterable, Literal, Sequence

from eurofx.exceptions import RateSourceError
from eurofx.ingestion.models import RateRow, RateTable
from eurofx.ingestion.row_parser import EurofxrefRowParser, HeaderRecord, SkippedRecord
from eurofx.utils.ecb import EUROFXREF_CSV_NAME, EUROFXREF_DATE_FORMAT
from eurofx.utils.logger import get_logger

LOGGER = get_logger(__name__)

BadRowPolicy = Literal["skip", "collect"]
BAD_ROW_POLICIES: tuple[str, ...] = ("skip", "collect")


@dataclass(slots=True)
class LoadResult:
    """Outcome of one archive load."""

    table: RateTable
    rejected: list[SkippedRecord] = field(default_factory=list)
    entry_name: str | None = None

    @property
    def found_entry(self) -> bool:
        return self.entry_name is not None


@dataclass(slots=True)
class EurofxrefLoader:
    """Read the historical rate CSV out of a zip archive.

    Loading is best-effort at the row level: records with an unparseable
    date are skipped and non-numeric rates become ``None``. With
    ``on_bad_row="collect"`` the skipped records are returned on the
    :class:`LoadResult` instead of being discarded. Only an archive that
    cannot be read, or whose header repeats a currency code, raises
    :class:`~eurofx.exceptions.RateSourceError`.
    """

    resource_name: str = EUROFXREF_CSV_NAME
    date_format: str = EUROFXREF_DATE_FORMAT
    encoding: str = "utf-8-sig"
    on_bad_row: BadRowPolicy = "skip"

    def __post_init__(self) -> None:
        if self.on_bad_row not in BAD_ROW_POLICIES:
            raise ValueError(
                f"on_bad_row must be one of {', '.join(BAD_ROW_POLICIES)}; got {self.on_bad_row!r}"
            )

    def load(self, stream: BinaryIO | bytes) -> LoadResult:
        """Parse ``stream`` (zip bytes or a binary file object) into a new table."""

        try:
            with zipfile.ZipFile(self._seekable(stream)) as archive:
                entry = self._find_entry(archive.infolist())
                if entry is None:
                    LOGGER.warning(
                        "Archive does not contain %s; table left empty", self.resource_name
                    )
                    return LoadResult(table=RateTable())
                with archive.open(entry) as raw, io.TextIOWrapper(
                    raw, encoding=self.encoding, newline=""
                ) as handle:
                    result = self._read_records(csv.reader(handle))
        except RateSourceError:
            raise
        except (
            OSError,
            EOFError,
            zipfile.BadZipFile,
            zlib.error,
            UnicodeDecodeError,
            csv.Error,
        ) as exc:
            raise RateSourceError(f"Unable to read rate archive: {exc}") from exc

        result.entry_name = entry.filename
        LOGGER.info(
            "Loaded %s rows for %s currencies from %s",
            len(result.table),
            len(result.table.currency_names()),
            entry.filename,
        )
        return result

    def _read_records(self, records: Iterable[Sequence[str]]) -> LoadResult:
        parser = EurofxrefRowParser(date_format=self.date_format)
        table = RateTable()
        rejected: list[SkippedRecord] = []
        ordinal = 0
        for fields in records:
            if not fields:
                continue
            ordinal += 1
            parsed = parser.parse(fields, ordinal, table.currency_names())
            if isinstance(parsed, HeaderRecord):
                try:
                    table = RateTable(parsed.currencies)
                except ValueError as exc:
                    raise RateSourceError(f"Malformed rate table header: {exc}") from exc
            elif isinstance(parsed, RateRow):
                table.add_row(parsed)
            else:
                LOGGER.debug("Skipping record %s: %s", parsed.ordinal, parsed.reason)
                if self.on_bad_row == "collect":
                    rejected.append(parsed)
        return LoadResult(table=table, rejected=rejected)

    def _find_entry(self, entries: Iterable[zipfile.ZipInfo]) -> zipfile.ZipInfo | None:
        wanted = self.resource_name.lower()
        for entry in entries:
            if entry.filename.lower() == wanted:
                return entry
        return None

    @staticmethod
    def _seekable(stream: BinaryIO | bytes) -> BinaryIO:
        if isinstance(stream, (bytes, bytearray)):
            return io.BytesIO(stream)
        if stream.seekable():
            return stream
        # ``zipfile`` needs random access to the central directory.
        return io.BytesIO(stream.read())


__all__ = ["EurofxrefLoader", "LoadResult", "BadRowPolicy", "BAD_ROW_POLICIES"]
