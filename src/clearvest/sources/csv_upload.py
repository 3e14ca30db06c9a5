"""Portfolio CSV ingestion.

Expected layout: a header row containing at least ``Asset``, ``Amount`` and
``Broker`` (other columns are ignored), then one holding per row.
"""
from __future__ import annotations

import asyncio
import csv
import io
import logging
import math
from pathlib import Path
from typing import List, Union

from ..errors import ParseError, ValidationError
from ..models import RawHolding

logger = logging.getLogger(__name__)

ASSET_COLUMN = "Asset"
AMOUNT_COLUMN = "Amount"
BROKER_COLUMN = "Broker"
REQUIRED_COLUMNS = (ASSET_COLUMN, AMOUNT_COLUMN, BROKER_COLUMN)

_EXTRA_FIELDS = "__extra__"


def _decode(contents: Union[str, bytes]) -> str:
    if isinstance(contents, bytes):
        try:
            return contents.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise ParseError(f"Error parsing CSV: file is not valid UTF-8 ({exc.reason})") from exc
    return contents.lstrip("\ufeff")


def _is_blank(row: dict) -> bool:
    return all(value is None or not str(value).strip() for key, value in row.items() if key != _EXTRA_FIELDS)


def _parse_amount(raw: str, line: int) -> float:
    try:
        amount = float(raw)
    except ValueError:
        amount = None
    if amount is None or not math.isfinite(amount) or amount <= 0:
        raise ValidationError(
            f'Row {line}: Amount "{raw}" is not a valid positive number.',
            row=line,
            column=AMOUNT_COLUMN,
        )
    return amount


def _normalize_row(row: dict, line: int) -> RawHolding:
    values = {column: (row.get(column) or "").strip() for column in REQUIRED_COLUMNS}
    empty = [column for column in REQUIRED_COLUMNS if not values[column]]
    if empty:
        raise ValidationError(
            f"Row {line} has empty required fields ({', '.join(empty)}). "
            "All rows must have Asset, Amount, and Broker values.",
            row=line,
            column=empty[0],
        )

    return RawHolding(
        symbol=values[ASSET_COLUMN],
        amount=_parse_amount(values[AMOUNT_COLUMN], line),
        broker_name=values[BROKER_COLUMN],
    )


def parse_portfolio_csv(contents: Union[str, bytes]) -> List[RawHolding]:
    """Parse CSV text into raw holdings.

    Raises:
        ParseError: the CSV itself is malformed (bad quoting, a row with more or
            fewer fields than the header, undecodable bytes, no header row).
        ValidationError: a required column is missing, a row has an empty
            required value or a non-positive amount, or there are no data rows.
    """
    reader = csv.DictReader(
        io.StringIO(_decode(contents), newline=""),
        restkey=_EXTRA_FIELDS,
        restval=None,
        strict=True,
    )

    holdings: List[RawHolding] = []
    try:
        if not reader.fieldnames:
            raise ParseError("Error parsing CSV: no header row found")
        fieldnames = [name.strip() for name in reader.fieldnames]
        reader.fieldnames = fieldnames

        missing = [column for column in REQUIRED_COLUMNS if column not in fieldnames]
        if missing:
            raise ValidationError(
                f"Missing required columns: {', '.join(missing)}. "
                "Please ensure your CSV has columns: Asset, Amount, Broker",
                column=missing[0],
            )

        for row in reader:
            line = reader.line_num
            if _is_blank(row):
                continue
            if row.get(_EXTRA_FIELDS):
                raise ParseError(f"Error parsing CSV: row {line} has more fields than the header")
            if any(value is None for value in row.values()):
                raise ParseError(f"Error parsing CSV: row {line} has fewer fields than the header")
            holdings.append(_normalize_row(row, line))
    except csv.Error as exc:
        raise ParseError(f"Error parsing CSV: {exc}") from exc

    if not holdings:
        raise ValidationError("No valid portfolio data found in CSV file.")

    logger.debug(f"Parsed {len(holdings)} holdings from CSV")
    return holdings


async def read_portfolio_csv(path: Union[str, Path]) -> List[RawHolding]:
    """Read and parse a portfolio CSV file without blocking the event loop.

    Resolves with the complete list or raises a single error; there are no
    partial results.
    """
    contents = await asyncio.to_thread(Path(path).read_bytes)
    return parse_portfolio_csv(contents)
