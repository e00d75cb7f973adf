"""The application: fans transactions out to every aggregator and answers queries."""

from __future__ import annotations

import logging
import queue
import threading
from typing import Iterable

from salesinsight.aggregators import (
    Aggregator,
    CountryRevenueAggregator,
    MonthlySalesAggregator,
    ProductFrequencyAggregator,
    Query,
    RegionRevenueAggregator,
)
from salesinsight.models import (
    AggregatorKind,
    CountryRevenueSummary,
    MonthlySales,
    ProductFrequency,
    RegionRevenueSummary,
    Transaction,
)

logger = logging.getLogger(__name__)

WORKER_COUNT = 8
QUEUE_SIZE = 10000

_STOP = object()


class App:
    """Holds one aggregator per summary kind and feeds them transactions."""

    def __init__(self) -> None:
        self._aggregators: dict[AggregatorKind, Aggregator] = {
            AggregatorKind.COUNTRY_REVENUE: CountryRevenueAggregator(),
            AggregatorKind.MONTHLY_SALES: MonthlySalesAggregator(),
            AggregatorKind.PRODUCT_FREQUENCY: ProductFrequencyAggregator(),
            AggregatorKind.REGION_REVENUE: RegionRevenueAggregator(),
        }
        self._locks = {kind: threading.Lock() for kind in self._aggregators}

    def process_data(self, transactions: Iterable[Transaction]) -> None:
        """Feed every transaction to every aggregator using worker threads.

        The first error raised by an aggregator is raised again once all
        workers have finished.
        """
        work: queue.Queue = queue.Queue(maxsize=QUEUE_SIZE)
        errors: list[BaseException] = []
        errors_lock = threading.Lock()

        def worker() -> None:
            while True:
                tx = work.get()
                if tx is _STOP:
                    return
                for kind, aggregator in self._aggregators.items():
                    with self._locks[kind]:
                        try:
                            aggregator.process_transaction(tx)
                        except Exception as exc:
                            logger.error(
                                "Error occurred while trying to aggregate the values for "
                                "aggregator %d, txn : %s, error : %s",
                                kind,
                                getattr(tx, "transaction_id", ""),
                                exc,
                            )
                            with errors_lock:
                                errors.append(exc)

        threads = [
            threading.Thread(target=worker, daemon=True) for _ in range(WORKER_COUNT)
        ]
        for thread in threads:
            thread.start()
        try:
            for tx in transactions:
                work.put(tx)
        finally:
            for _ in threads:
                work.put(_STOP)
            for thread in threads:
                thread.join()

        if errors:
            raise errors[0]

    def revenue_by_country(self, query: Query = None) -> list[CountryRevenueSummary]:
        """Revenue per product per country, paged by ``limit`` and ``page``."""
        return self._aggregators[AggregatorKind.COUNTRY_REVENUE].results(query)

    def revenue_by_region(self, query: Query = None) -> list[RegionRevenueSummary]:
        """Revenue per region, limited by ``limit``."""
        return self._aggregators[AggregatorKind.REGION_REVENUE].results(query)

    def product_frequency(self, query: Query = None) -> list[ProductFrequency]:
        """Best-selling products, limited by ``limit``."""
        return self._aggregators[AggregatorKind.PRODUCT_FREQUENCY].results(query)

    def monthly_sales(self, query: Query = None) -> list[MonthlySales]:
        """Units sold per month, highest first."""
        return self._aggregators[AggregatorKind.MONTHLY_SALES].results(query)