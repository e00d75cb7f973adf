# salesinsight

`salesinsight` reads sales transactions from a set of CSV files, aggregates
them in memory and serves the summaries as JSON over HTTP. Any path that is not
an API route is served from a directory of static files.

It needs nothing beyond the Python standard library (3.10 or later).

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Input data

By default transactions are read from every file matching
`data/split/chunk_*.csv`, in sorted file-name order. Each file starts with a
header row, followed by rows with these columns, in this order:

```
transaction_id, transaction_date, user_id, country, region, product_id,
product_name, category, price, quantity, total_price, stock_quantity, added_date
```

- Dates use the `YYYY-MM-DD` format and are taken as UTC.
- `price` and `total_price` are read as exact decimals; `quantity` and
  `stock_quantity` as integers.
- A value that cannot be parsed becomes zero (for dates, year 1).
- Rows whose number of fields differs from the header are logged and skipped;
  blank lines are ignored.
- A file that cannot be opened, or has no header row, is logged and left out.

## Running the server

```
salesinsight
```

The command loads and aggregates the transactions, prints how long each step
took, then listens on port 8080 until interrupted. Options:

| Option      | Default                  | Meaning                         |
|-------------|--------------------------|---------------------------------|
| `--data`    | `data/split/chunk_*.csv` | glob of CSV files to load       |
| `--host`    | all interfaces           | address to bind                 |
| `--port`    | `8080`                   | port to listen on               |
| `--static`  | `static`                 | directory served for other paths |

## Endpoints

Each endpoint answers `GET` (and `POST`) with a JSON array and the content type
`application/json`.

| Path                      | Content                                                                 | Query parameters                          |
|---------------------------|-------------------------------------------------------------------------|-------------------------------------------|
| `/api/revenue-by-country` | Revenue and transaction count per country and product, highest revenue first | `limit` (default 20), `page` (default 1) |
| `/api/frequent-products`  | Units sold, transaction count and stock level per product, most units first | `limit` (default 20)                 |
| `/api/monthly-sales`      | Units sold per calendar month (all years together), highest first      | none                                      |
| `/api/revenue-by-region`  | Revenue and items sold per region, highest revenue first               | `limit` (default 30)                      |

Values for `limit` and `page` that are not positive integers are ignored and
the default applies. A page beyond the end of the data gives an empty list.

Revenue values are written as decimal strings (for example `"120.5"`). The
stock level of a product is the `stock_quantity` of its transaction with the
latest `added_date`, which is reported as `stock_added_date` in RFC 3339 form.

## Using it from Python

```python
from salesinsight.app import App
from salesinsight.loader import load_csv_data

app = App()
app.process_data(load_csv_data("data/split/chunk_*.csv"))
for row in app.revenue_by_region({"limit": "5"}):
    print(row.to_dict())
```

- `salesinsight.loader` has `load_csv_data(pattern)`, `load_csv_file(path)` and
  `parse_record(record)`.
- `salesinsight.app.App` feeds transactions to its aggregators with worker
  threads (`process_data`) and answers `revenue_by_country`,
  `revenue_by_region`, `product_frequency` and `monthly_sales`, each taking an
  optional query mapping.
- `salesinsight.aggregators` holds the four aggregator classes, each with
  `process_transaction(tx)` and `results(query)`.
- `salesinsight.models` holds `Transaction` and the summary dataclasses, whose
  `to_dict()` gives the JSON form.
- `salesinsight.server.create_server(app, host, port, static_dir)` returns a
  standard-library `ThreadingHTTPServer` ready for `serve_forever()`;
  `make_handler(app, static_dir)` gives just its request handler class.

## Limits

All data lives in memory and is loaded once at start-up: there is no storage,
no way to add or reload transactions while the server runs, and no
authentication on the endpoints.