"""Aggregators that fold transactions into summaries and report them."""

from __future__ import annotations

import abc
import logging
import re
import time
from operator import attrgetter
from typing import Any, Mapping, Optional

from salesinsight.models import (
    CountryRevenueSummary,
    MonthlySales,
    ProductFrequency,
    RegionRevenueSummary,
    Transaction,
)

logger = logging.getLogger(__name__)

Query = Optional[Mapping[str, Any]]

_INT_RE = re.compile(r"[+-]?[0-9]+")
_INT64_MAX = 2**63 - 1
_MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


def _query_value(query: Query, name: str) -> str:
    if not query:
        return ""
    value = query.get(name)
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        value = value[0] if value else ""
    return str(value)


def _positive_int(query: Query, name: str, default: int) -> int:
    """Read a positive integer parameter, falling back to ``default``."""
    text = _query_value(query, name)
    if not _INT_RE.fullmatch(text):
        return default
    number = int(text)
    return number if 0 < number <= _INT64_MAX else default


class Aggregator(abc.ABC):
    """Folds transactions into summaries and reports them on request."""

    @abc.abstractmethod
    def process_transaction(self, tx: Transaction) -> None:
        """Add one transaction to the running summaries."""

    @abc.abstractmethod
    def results(self, query: Query = None) -> list:
        """Return the summaries, ordered and limited as ``query`` asks."""


class CountryRevenueAggregator(Aggregator):
    """Revenue per product per country, paged with ``limit`` and ``page``."""

    DEFAULT_LIMIT = 20

    def __init__(self) -> None:
        self.data: dict[str, dict[str, CountryRevenueSummary]] = {}

    def process_transaction(self, tx: Transaction) -> None:
        products = self.data.setdefault(tx.country, {})
        summary = products.get(tx.product_id)
        if summary is None:
            summary = products[tx.product_id] = CountryRevenueSummary(
                country=tx.country,
                product_id=tx.product_id,
                product_name=tx.product_name,
            )
        summary.transaction_count += 1
        summary.revenue += tx.total_price

    def results(self, query: Query = None) -> list[CountryRevenueSummary]:
        started = time.perf_counter()
        rows = [s for products in self.data.values() for s in products.values()]
        rows.sort(key=attrgetter("revenue"), reverse=True)
        limit = _positive_int(query, "limit", self.DEFAULT_LIMIT)
        page = _positive_int(query, "page", 1)
        start = (page - 1) * limit
        rows = rows[start:start + limit]
        logger.info("Country revenue request took %.6fs", time.perf_counter() - started)
        return rows


class MonthlySalesAggregator(Aggregator):
    """Units sold per calendar month, across all years."""

    def __init__(self) -> None:
        self.data: dict[str, MonthlySales] = {}

    def process_transaction(self, tx: Transaction) -> None:
        month = _MONTHS[tx.transaction_date.month - 1]
        summary = self.data.get(month)
        if summary is None:
            summary = self.data[month] = MonthlySales(month=month)
        summary.total_sales += tx.quantity

    def results(self, query: Query = None) -> list[MonthlySales]:
        started = time.perf_counter()
        rows = sorted(self.data.values(), key=attrgetter("total_sales"), reverse=True)
        logger.info("Monthly sales request took %.6fs", time.perf_counter() - started)
        return rows


class ProductFrequencyAggregator(Aggregator):
    """Best-selling products with the stock of their latest restock."""

    DEFAULT_LIMIT = 20

    def __init__(self) -> None:
        self.data: dict[str, ProductFrequency] = {}

    def process_transaction(self, tx: Transaction) -> None:
        summary = self.data.get(tx.product_id)
        if summary is None:
            summary = self.data[tx.product_id] = ProductFrequency(
                product_id=tx.product_id,
                product_name=tx.product_name,
            )
        if tx.added_date > summary.stock_added_date:
            summary.stock_added_date = tx.added_date
            summary.available_stock_quantity = tx.stock_quantity
        summary.transaction_count += 1
        summary.units_sold += tx.quantity

    def results(self, query: Query = None) -> list[ProductFrequency]:
        started = time.perf_counter()
        rows = sorted(self.data.values(), key=attrgetter("units_sold"), reverse=True)
        rows = rows[:_positive_int(query, "limit", self.DEFAULT_LIMIT)]
        logger.info("Product frequency request took %.6fs", time.perf_counter() - started)
        return rows


class RegionRevenueAggregator(Aggregator):
    """Revenue and items sold per region."""

    DEFAULT_LIMIT = 30

    def __init__(self) -> None:
        self.data: dict[str, RegionRevenueSummary] = {}

    def process_transaction(self, tx: Transaction) -> None:
        summary = self.data.get(tx.region)
        if summary is None:
            summary = self.data[tx.region] = RegionRevenueSummary(region=tx.region)
        summary.total_items_sold += tx.quantity
        summary.total_revenue += tx.total_price

    def results(self, query: Query = None) -> list[RegionRevenueSummary]:
        started = time.perf_counter()
        rows = sorted(self.data.values(), key=attrgetter("total_revenue"), reverse=True)
        rows = rows[:_positive_int(query, "limit", self.DEFAULT_LIMIT)]
        logger.info("Region revenue request took %.6fs", time.perf_counter() - started)
        return rows