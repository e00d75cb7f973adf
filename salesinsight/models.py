"""Record types for transactions and the summaries built from them."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal

ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)
"""The instant used when a date is missing or cannot be parsed."""


class AggregatorKind(enum.IntEnum):
    """The summaries the application keeps."""

    COUNTRY_REVENUE = 0
    MONTHLY_SALES = 1
    PRODUCT_FREQUENCY = 2
    REGION_REVENUE = 3


def format_decimal(value: Decimal) -> str:
    """Render a decimal in plain notation without trailing zeros."""
    if value == 0:
        return "0"
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_time(value: datetime) -> str:
    """Render an instant in RFC 3339 form, using ``Z`` for UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    text = value.isoformat()
    if value.utcoffset() == timezone.utc.utcoffset(None):
        text = text[: -len("+00:00")] + "Z"
    return text


@dataclass(frozen=True, kw_only=True)
class Transaction:
    """One sale as read from the transaction files."""

    transaction_id: str = ""
    transaction_date: datetime = ZERO_TIME
    user_id: str = ""
    country: str = ""
    region: str = ""
    product_id: str = ""
    product_name: str = ""
    category: str = ""
    price: Decimal = Decimal(0)
    quantity: int = 0
    total_price: Decimal = Decimal(0)
    stock_quantity: int = 0
    added_date: datetime = ZERO_TIME


@dataclass
class CountryRevenueSummary:
    """Revenue of one product within one country."""

    country: str = ""
    product_id: str = ""
    product_name: str = ""
    revenue: Decimal = Decimal(0)
    transaction_count: int = 0

    def to_dict(self) -> dict:
        return {
            "country": self.country,
            "product_id": self.product_id,
            "product_name": self.product_name,
            "revenue": format_decimal(self.revenue),
            "transaction_count": self.transaction_count,
        }


@dataclass
class MonthlySales:
    """Units sold in one calendar month."""

    month: str = ""
    total_sales: int = 0

    def to_dict(self) -> dict:
        return {"month": self.month, "total_sales": self.total_sales}


@dataclass
class ProductFrequency:
    """How often a product sells and how much stock it has left."""

    product_id: str = ""
    product_name: str = ""
    transaction_count: int = 0
    available_stock_quantity: int = 0
    units_sold: int = 0
    stock_added_date: datetime = ZERO_TIME

    def to_dict(self) -> dict:
        return {
            "product_id": self.product_id,
            "product_name": self.product_name,
            "transaction_count": self.transaction_count,
            "available_stock_quantity": self.available_stock_quantity,
            "units_sold": self.units_sold,
            "stock_added_date": format_time(self.stock_added_date),
        }


@dataclass
class RegionRevenueSummary:
    """Revenue and items sold within one region."""

    region: str = ""
    total_revenue: Decimal = Decimal(0)
    total_items_sold: int = 0

    def to_dict(self) -> dict:
        return {
            "region": self.region,
            "total_revenue": format_decimal(self.total_revenue),
            "total_items_sold": self.total_items_sold,
        }