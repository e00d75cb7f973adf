from datetime import datetime, timezone
from decimal import Decimal

import pytest

from salesinsight.loader import load_csv_data, load_csv_file, parse_record
from salesinsight.models import ZERO_TIME

HEADER = (
    "transaction_id,transaction_date,user_id,country,region,product_id,"
    "product_name,category,price,quantity,total_price,stock_quantity,added_date"
)

ROW_1 = ["1", "2021-03-01", "U1", "USA", "California", "P001", "Product 1",
         "Books", "60.25", "2", "120.50", "150", "2020-12-31"]
ROW_2 = ["2", "2021-11-15", "U2", "India", "Mumbai", "P002", "Product 2",
         "Toys", "22.10", "5", "110.50", "200", "2021-01-05"]


def _write(path, rows):
    lines = [HEADER] + [",".join(row) for row in rows]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def test_parse_record_fields():
    tx = parse_record(ROW_1)
    assert tx.transaction_id == "1"
    assert tx.transaction_date == datetime(2021, 3, 1, tzinfo=timezone.utc)
    assert tx.user_id == "U1"
    assert tx.country == "USA"
    assert tx.region == "California"
    assert tx.product_id == "P001"
    assert tx.product_name == "Product 1"
    assert tx.category == "Books"
    assert tx.price == Decimal("60.25")
    assert tx.quantity == 2
    assert tx.total_price == Decimal("120.50")
    assert tx.stock_quantity == 150
    assert tx.added_date == datetime(2020, 12, 31, tzinfo=timezone.utc)


def test_parse_record_bad_values_become_zero():
    row = list(ROW_1)
    row[1] = "not-a-date"
    row[8] = "abc"
    row[9] = "2.5"
    row[12] = "2021-02-30"
    tx = parse_record(row)
    assert tx.transaction_date == ZERO_TIME
    assert tx.price == Decimal(0)
    assert tx.quantity == 0
    assert tx.added_date == ZERO_TIME


def test_parse_record_clamps_out_of_range_integers():
    row = list(ROW_1)
    row[11] = "99999999999999999999"
    assert parse_record(row).stock_quantity == 2**63 - 1


def test_parse_record_too_short():
    with pytest.raises(ValueError):
        parse_record(ROW_1[:5])


def test_load_csv_file_reads_rows(tmp_path):
    path = _write(tmp_path / "chunk_1.csv", [ROW_1, ROW_2])
    txs = load_csv_file(path)
    assert [tx.transaction_id for tx in txs] == ["1", "2"]
    assert txs[1].region == "Mumbai"
    assert txs[1].quantity == 5


def test_load_csv_file_skips_rows_with_wrong_field_count(tmp_path):
    path = _write(tmp_path / "chunk_1.csv", [ROW_1, ["3", "2021-01-01"], ROW_2])
    txs = load_csv_file(path)
    assert [tx.transaction_id for tx in txs] == ["1", "2"]


def test_load_csv_file_header_only(tmp_path):
    path = _write(tmp_path / "chunk_1.csv", [])
    assert load_csv_file(path) == []


def test_load_csv_file_empty_file(tmp_path):
    path = tmp_path / "chunk_1.csv"
    path.write_text("", encoding="utf-8")
    with pytest.raises(ValueError):
        load_csv_file(path)


def test_load_csv_file_missing_file(tmp_path):
    with pytest.raises(OSError):
        load_csv_file(tmp_path / "absent.csv")


def test_load_csv_data_collects_all_chunks(tmp_path):
    _write(tmp_path / "chunk_1.csv", [ROW_1])
    _write(tmp_path / "chunk_2.csv", [ROW_2])
    _write(tmp_path / "other.csv", [ROW_1])
    txs = load_csv_data(str(tmp_path / "chunk_*.csv"))
    assert sorted(tx.transaction_id for tx in txs) == ["1", "2"]


def test_load_csv_data_skips_unreadable_files(tmp_path):
    _write(tmp_path / "chunk_1.csv", [ROW_1])
    (tmp_path / "chunk_2.csv").write_text("", encoding="utf-8")
    txs = load_csv_data(str(tmp_path / "chunk_*.csv"))
    assert [tx.transaction_id for tx in txs] == ["1"]


def test_load_csv_data_no_matches(tmp_path):
    assert load_csv_data(str(tmp_path / "chunk_*.csv")) == []