"""Reading transactions from CSV files."""

from __future__ import annotations

import csv
import glob
import logging
import re
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path
from typing import Sequence

from salesinsight.models import ZERO_TIME, Transaction

logger = logging.getLogger(__name__)

DEFAULT_PATTERN = "data/split/chunk_*.csv"

_FIELD_COUNT = 13
_INT_RE = re.compile(r"[+-]?[0-9]+")
_DECIMAL_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
_INT64_MAX = 2**63 - 1
_INT64_MIN = -(2**63)


def _parse_int(text: str) -> int:
    if not _INT_RE.fullmatch(text):
        return 0
    return max(_INT64_MIN, min(_INT64_MAX, int(text)))


def _parse_decimal(text: str) -> Decimal:
    if not _DECIMAL_RE.fullmatch(text):
        return Decimal(0)
    return Decimal(text)


def _parse_date(text: str) -> datetime:
    if not _DATE_RE.fullmatch(text):
        return ZERO_TIME
    try:
        return datetime.strptime(text, "%Y-%m-%d").replace(tzinfo=timezone.utc)
    except ValueError:
        return ZERO_TIME


def parse_record(record: Sequence[str]) -> Transaction:
    """Build a transaction from one CSV row; unparsable values become zero."""
    if len(record) < _FIELD_COUNT:
        raise ValueError(
            f"record has {len(record)} fields, expected at least {_FIELD_COUNT}"
        )
    return Transaction(
        transaction_id=record[0],
        transaction_date=_parse_date(record[1]),
        user_id=record[2],
        country=record[3],
        region=record[4],
        product_id=record[5],
        product_name=record[6],
        category=record[7],
        price=_parse_decimal(record[8]),
        quantity=_parse_int(record[9]),
        total_price=_parse_decimal(record[10]),
        stock_quantity=_parse_int(record[11]),
        added_date=_parse_date(record[12]),
    )


def load_csv_file(path: str | Path) -> list[Transaction]:
    """Read every transaction from one CSV file, skipping its header row.

    Rows whose field count differs from the header's are logged and skipped.
    """
    with open(path, newline="", encoding="utf-8") as handle:
        reader = csv.reader(handle)
        header = next((row for row in reader if row), None)
        if header is None:
            raise ValueError(f"{path}: no header row")
        transactions = []
        for row in reader:
            if not row:
                continue
            if len(row) != len(header):
                logger.warning(
                    "Error occurred while reading csv, line %d: wrong number of fields",
                    reader.line_num,
                )
                continue
            transactions.append(parse_record(row))
    return transactions


def load_csv_data(pattern: str = DEFAULT_PATTERN) -> list[Transaction]:
    """Load transactions from every file matching ``pattern``.

    Files that cannot be read are logged and left out.
    """
    transactions: list[Transaction] = []
    for path in sorted(glob.glob(pattern)):
        try:
            transactions.extend(load_csv_file(path))
        except (OSError, ValueError) as exc:
            logger.error(
                "Error occurred while loading transactions from file, file path : %s, error : %s",
                path,
                exc,
            )
    return transactions