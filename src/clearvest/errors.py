"""Exception types raised while ingesting portfolio data."""
from __future__ import annotations

from typing import Optional


class FormatError(ValueError):
    """Portfolio input could not be turned into holdings."""


class ParseError(FormatError):
    """The tabular input is syntactically broken."""


class ValidationError(FormatError):
    """The input parsed but a column or value is missing or invalid."""

    def __init__(self, message: str, row: Optional[int] = None, column: Optional[str] = None) -> None:
        super().__init__(message)
        self.row = row
        self.column = column


class MarketDataError(RuntimeError):
    """A market quote could not be fetched or decoded."""
