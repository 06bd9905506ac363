"""Local and remote sources for the ECB historical rate archive."""

from __future__ import annotations

import io
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

import requests

from eurofx.exceptions import RateSourceError
from eurofx.utils.ecb import EUROFXREF_HIST_URL
from eurofx.utils.logger import get_logger

LOGGER = get_logger(__name__)


@dataclass(slots=True)
class LocalArchiveSource:
    """Read the archive from a zip file on disk."""

    path: Path

    def open(self) -> BinaryIO:
        try:
            return Path(self.path).open("rb")
        except OSError as exc:
            raise RateSourceError(f"Unable to open rate archive {self.path}") from exc


@dataclass(slots=True)
class RemoteArchiveSource:
    """Download the archive from the ECB website."""

    url: str = EUROFXREF_HIST_URL
    timeout: int = 30
    session: requests.Session | None = None

    def open(self) -> BinaryIO:
        payload = fetch_eurofxref_archive(self.url, timeout=self.timeout, session=self.session)
        return io.BytesIO(payload)


def fetch_eurofxref_archive(
    url: str = EUROFXREF_HIST_URL,
    *,
    timeout: int = 30,
    session: requests.Session | None = None,
) -> bytes:
    """Download the historical reference-rate archive and return its bytes.

    A caller-supplied ``session`` is left open; a session created here is
    closed before returning.
    """

    if session is None:
        with requests.Session() as owned:
            return _download(owned, url, timeout)
    return _download(session, url, timeout)


def _download(session: requests.Session, url: str, timeout: int) -> bytes:
    session.headers.setdefault("User-Agent", "eurofx-ingestor/1.0")
    try:
        response = session.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as exc:
        raise RateSourceError(f"Unable to download rate archive from {url}") from exc
    LOGGER.info("Fetched %s bytes from %s", len(response.content), url)
    return response.content


__all__ = ["LocalArchiveSource", "RemoteArchiveSource", "fetch_eurofxref_archive"]
