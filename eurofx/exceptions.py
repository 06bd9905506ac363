"""Exception hierarchy raised by the eurofx package."""

from __future__ import annotations


class EuroFxError(Exception):
    """Base class for every error raised by eurofx."""


class CurrencyUnavailableError(EuroFxError, LookupError):
    """Raised when a currency has no usable rate for a date or date range."""

    def __init__(self, currency: str, message: str | None = None) -> None:
        self.currency = currency
        self.message = message or f"{currency} not available"
        super().__init__(self.message)


class RateSourceError(EuroFxError, OSError):
    """Raised when the rate archive cannot be acquired or read."""


__all__ = ["EuroFxError", "CurrencyUnavailableError", "RateSourceError"]
