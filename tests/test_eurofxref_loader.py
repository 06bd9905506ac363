from __future__ import annotations

import io
import zipfile
from datetime import date

import pytest

from eurofx.exceptions import RateSourceError
from eurofx.ingestion.eurofxref import EurofxrefLoader


class _NonSeekableStream(io.RawIOBase):
    def __init__(self, payload: bytes) -> None:
        self._inner = io.BytesIO(payload)

    def readable(self) -> bool:
        return True

    def seekable(self) -> bool:
        return False

    def readinto(self, buffer) -> int:
        data = self._inner.read(len(buffer))
        buffer[: len(data)] = data
        return len(data)


class _BrokenStream(io.RawIOBase):
    def readable(self) -> bool:
        return True

    def seekable(self) -> bool:
        return False

    def readinto(self, buffer) -> int:
        raise OSError("connection reset")


def test_load_builds_table_from_sample(sample_archive: bytes) -> None:
    result = EurofxrefLoader().load(io.BytesIO(sample_archive))

    table = result.table
    assert result.found_entry
    assert result.entry_name == "eurofxref-hist.csv"
    assert table.currency_names() == ("USD", "GBP", "AAA")
    assert len(table) == 10
    assert all(len(row.rates) == len(table.currency_names()) for row in table.rows())
    assert table.rates_on(date(2021, 10, 13))["USD"] == 1.1562
    assert table.rates_on(date(2021, 10, 8))["AAA"] is None


def test_load_accepts_raw_bytes(sample_archive: bytes) -> None:
    result = EurofxrefLoader().load(sample_archive)

    assert len(result.table) == 10


def test_load_buffers_non_seekable_streams(sample_archive: bytes) -> None:
    result = EurofxrefLoader().load(_NonSeekableStream(sample_archive))

    assert len(result.table) == 10


def test_entry_name_match_is_case_insensitive(make_archive, sample_csv: str) -> None:
    archive = make_archive({"EUROFXREF-HIST.CSV": sample_csv})

    result = EurofxrefLoader().load(archive)

    assert result.entry_name == "EUROFXREF-HIST.CSV"
    assert len(result.table) == 10


def test_only_first_matching_entry_is_read(make_archive, sample_csv: str) -> None:
    archive = make_archive(
        {
            "readme.txt": "not rates",
            "eurofxref-hist.csv": sample_csv,
            "Eurofxref-Hist.csv": "Date,JPY,\r\n2021-10-15,130.0,\r\n",
        }
    )

    result = EurofxrefLoader().load(archive)

    assert result.entry_name == "eurofxref-hist.csv"
    assert result.table.currency_names() == ("USD", "GBP", "AAA")


def test_missing_entry_yields_empty_table(make_archive, caplog) -> None:
    archive = make_archive({"other.csv": "Date,USD,\r\n2021-10-15,1.1,\r\n"})

    with caplog.at_level("WARNING"):
        result = EurofxrefLoader().load(archive)

    assert not result.found_entry
    assert len(result.table) == 0
    assert result.table.currency_names() == ()
    assert "eurofxref-hist.csv" in caplog.text


def test_custom_resource_name(make_archive, sample_csv: str) -> None:
    archive = make_archive({"rates.csv": sample_csv})

    result = EurofxrefLoader(resource_name="rates.csv").load(archive)

    assert len(result.table) == 10


def test_bad_dates_are_skipped_silently_by_default(make_archive) -> None:
    archive = make_archive(
        {"eurofxref-hist.csv": "Date,USD,\n2021-10-15,1.1,\nyesterday,1.2,\n2021-10-14,1.3,\n"}
    )

    result = EurofxrefLoader().load(archive)

    assert result.table.dates() == [date(2021, 10, 15), date(2021, 10, 14)]
    assert result.rejected == []


def test_bad_rows_are_collected_on_request(make_archive) -> None:
    archive = make_archive(
        {"eurofxref-hist.csv": "Date,USD,\n2021-10-15,1.1,\nyesterday,1.2,\n2021-10-14,1.3,\n"}
    )

    result = EurofxrefLoader(on_bad_row="collect").load(archive)

    assert len(result.table) == 2
    assert len(result.rejected) == 1
    rejected = result.rejected[0]
    assert rejected.ordinal == 3
    assert rejected.fields == ("yesterday", "1.2", "")


def test_blank_lines_do_not_count_as_records(make_archive) -> None:
    archive = make_archive({"eurofxref-hist.csv": "\nDate,USD,\n\n2021-10-15,1.1,\n"})

    result = EurofxrefLoader().load(archive)

    assert result.table.currency_names() == ("USD",)
    assert result.table.rates_on(date(2021, 10, 15)) == {"USD": 1.1}


def test_header_only_file(make_archive) -> None:
    result = EurofxrefLoader().load(make_archive({"eurofxref-hist.csv": "Date,USD,GBP,\n"}))

    assert result.table.currency_names() == ("USD", "GBP")
    assert len(result.table) == 0


def test_duplicate_dates_keep_last_row(make_archive) -> None:
    archive = make_archive(
        {"eurofxref-hist.csv": "Date,USD,\n2021-10-15,1.1,\n2021-10-15,1.2,\n"}
    )

    result = EurofxrefLoader().load(archive)

    assert len(result.table) == 1
    assert result.table.rates_on(date(2021, 10, 15)) == {"USD": 1.2}


def test_extra_trailing_fields_are_ignored(make_archive) -> None:
    archive = make_archive({"eurofxref-hist.csv": "Date,USD,GBP,\n2021-10-15,1.1602,0.84368,,\n"})

    result = EurofxrefLoader(on_bad_row="collect").load(archive)

    assert len(result.table) == 1
    assert result.rejected == []
    assert result.table.rates_on(date(2021, 10, 15)) == {"USD": 1.1602, "GBP": 0.84368}


def test_duplicate_header_currency_raises_rate_source_error(make_archive) -> None:
    archive = make_archive({"eurofxref-hist.csv": "Date,USD,USD,\n2021-10-15,1.1,1.2,\n"})

    with pytest.raises(RateSourceError, match="Malformed rate table header") as excinfo:
        EurofxrefLoader().load(archive)

    assert isinstance(excinfo.value.__cause__, ValueError)


def test_loading_twice_yields_identical_independent_tables(sample_archive: bytes) -> None:
    loader = EurofxrefLoader()

    first = loader.load(io.BytesIO(sample_archive)).table
    second = loader.load(io.BytesIO(sample_archive)).table

    assert first == second
    assert first is not second


def test_not_a_zip_raises_rate_source_error() -> None:
    with pytest.raises(RateSourceError):
        EurofxrefLoader().load(b"Date,USD,\n2021-10-15,1.1,\n")


def test_unreadable_stream_raises_rate_source_error() -> None:
    with pytest.raises(RateSourceError) as excinfo:
        EurofxrefLoader().load(_BrokenStream())

    assert isinstance(excinfo.value, OSError)
    assert isinstance(excinfo.value.__cause__, OSError)


def test_undecodable_entry_raises_rate_source_error() -> None:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        archive.writestr("eurofxref-hist.csv", b"Date,USD,\n\xff\xfe\xfa,1.1,\n")

    with pytest.raises(RateSourceError):
        EurofxrefLoader().load(buffer.getvalue())


def test_invalid_bad_row_policy() -> None:
    with pytest.raises(ValueError, match="on_bad_row"):
        EurofxrefLoader(on_bad_row="explode")  # type: ignore[arg-type]


def test_stream_is_left_open_for_caller(sample_archive: bytes) -> None:
    stream = io.BytesIO(sample_archive)

    EurofxrefLoader().load(stream)

    assert not stream.closed
