from __future__ import annotations

import io
import zipfile

import pytest

from eurofx import EuroFx

SAMPLE_CSV = (
    "Date,USD,GBP,AAA,\r\n"
    "2021-10-15,1.1602,0.84368,1,\r\n"
    "2021-10-14,1.1602,0.84618,1,\r\n"
    "2021-10-13,1.1562,0.84898,1,\r\n"
    "2021-10-12,1.1555,0.84755,1,\r\n"
    "2021-10-11,1.1574,0.84878,1,\r\n"
    "2021-10-08,1.1569,0.8489,N/A,\r\n"
    "2021-10-07,1.1562,0.85023,N/A,\r\n"
    "2021-10-06,1.1542,0.8497,N/A,\r\n"
    "2021-10-05,1.1602,0.85173,N/A,\r\n"
    "2021-10-04,1.1636,0.8553,N/A,"
)


def build_archive(entries: dict[str, str]) -> bytes:
    """Return zip bytes holding ``entries`` (name -> text) in insertion order."""

    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        for name, text in entries.items():
            archive.writestr(name, text)
    return buffer.getvalue()


@pytest.fixture()
def sample_archive() -> bytes:
    return build_archive({"eurofxref-hist.csv": SAMPLE_CSV})


@pytest.fixture()
def sample_fx(sample_archive: bytes) -> EuroFx:
    fx = EuroFx()
    fx.load(io.BytesIO(sample_archive))
    return fx


@pytest.fixture()
def make_archive():
    return build_archive


@pytest.fixture()
def sample_csv() -> str:
    return SAMPLE_CSV
