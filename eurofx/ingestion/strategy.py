"""Abstractions for pluggable archive sources."""

from __future__ import annotations

from typing import BinaryIO, Protocol


class ArchiveSource(Protocol):
    """Contract for acquiring the raw ``eurofxref-hist.zip`` bytes.

    Implementations return a binary stream positioned at the start of the
    archive. Callers own the stream and are responsible for closing it.
    """

    def open(self) -> BinaryIO:
        ...  # pragma: no cover - protocol definition


__all__ = ["ArchiveSource"]
