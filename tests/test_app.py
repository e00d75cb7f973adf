from datetime import datetime, timezone
from decimal import Decimal

import pytest

from salesinsight.app import App
from salesinsight.models import Transaction


def _transactions():
    date = datetime(2021, 3, 1, tzinfo=timezone.utc)
    return [
        Transaction(
            transaction_id="1",
            transaction_date=date,
            country="USA",
            region="California",
            product_id="P001",
            product_name="Product 1",
            quantity=2,
            total_price=Decimal("120.50"),
            stock_quantity=150,
        ),
        Transaction(
            transaction_id="2",
            transaction_date=date,
            country="India",
            region="Mumbai",
            product_id="P002",
            product_name="Product 2",
            quantity=5,
            total_price=Decimal("110.50"),
            stock_quantity=200,
        ),
    ]


@pytest.fixture
def app():
    application = App()
    application.process_data(_transactions())
    return application


def test_process_data_fills_every_aggregator(app):
    assert {r.country for r in app.revenue_by_country()} == {"USA", "India"}
    assert {r.region for r in app.revenue_by_region()} == {"California", "Mumbai"}
    assert {r.product_id for r in app.product_frequency()} == {"P001", "P002"}
    assert [(m.month, m.total_sales) for m in app.monthly_sales()] == [("March", 7)]


def test_revenue_by_country_page_beyond_end(app):
    assert app.revenue_by_country({"limit": "2", "page": "10"}) == []


def test_revenue_by_region_ignores_page(app):
    rows = app.revenue_by_region({"limit": "2", "page": "10"})
    assert [r.region for r in rows] == ["California", "Mumbai"]
    assert rows[0].total_revenue == Decimal("120.50")
    assert rows[0].total_items_sold == 2


def test_product_frequency_sorted_by_units(app):
    rows = app.product_frequency({"limit": "2", "page": "10"})
    assert [r.product_id for r in rows] == ["P002", "P001"]
    assert [r.units_sold for r in rows] == [5, 2]


def test_monthly_sales_ignores_query(app):
    rows = app.monthly_sales({"limit": "2", "page": "10"})
    assert len(rows) == 1
    assert rows[0].month == "March"


def test_many_transactions_totals_are_consistent():
    application = App()
    txs = [
        Transaction(
            transaction_id=str(i),
            transaction_date=datetime(2021, 1 + i % 12, 1, tzinfo=timezone.utc),
            country="USA",
            region="California",
            product_id="P001",
            product_name="Product 1",
            quantity=1,
            total_price=Decimal("1.25"),
        )
        for i in range(1200)
    ]
    application.process_data(txs)
    country = application.revenue_by_country()
    assert len(country) == 1
    assert country[0].transaction_count == 1200
    assert country[0].revenue == Decimal("1.25") * 1200
    assert sum(m.total_sales for m in application.monthly_sales()) == 1200
    assert application.product_frequency()[0].transaction_count == 1200


def test_process_data_raises_aggregator_error():
    application = App()
    bad = Transaction(transaction_id="x", country="USA", total_price=None)
    with pytest.raises(TypeError):
        application.process_data([bad])