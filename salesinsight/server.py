"""HTTP service exposing the summaries as JSON and serving static files."""

from __future__ import annotations

import argparse
import json
import logging
import os
import time
from http.server import SimpleHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from typing import Callable, Sequence
from urllib.parse import parse_qs, urlsplit

from salesinsight.app import App
from salesinsight.loader import DEFAULT_PATTERN, load_csv_data

logger = logging.getLogger(__name__)

DEFAULT_PORT = 8080
DEFAULT_STATIC_DIR = "static"

_HTML_ESCAPES = {"<": "\\u003c", ">": "\\u003e", "&": "\\u0026"}


def _encode_rows(rows: list) -> bytes:
    text = json.dumps(
        [row.to_dict() for row in rows], separators=(",", ":"), ensure_ascii=False
    )
    for char, escaped in _HTML_ESCAPES.items():
        text = text.replace(char, escaped)
    return (text + "\n").encode("utf-8")


def make_handler(app: App, static_dir: str | Path = DEFAULT_STATIC_DIR):
    """Build a request handler class answering the API routes of ``app``."""
    routes: dict[str, Callable] = {
        "/api/revenue-by-country": app.revenue_by_country,
        "/api/frequent-products": app.product_frequency,
        "/api/monthly-sales": app.monthly_sales,
        "/api/revenue-by-region": app.revenue_by_region,
    }
    directory = os.fspath(static_dir)

    class Handler(SimpleHTTPRequestHandler):
        def __init__(self, *args, **kwargs):
            super().__init__(*args, directory=directory, **kwargs)

        def do_GET(self) -> None:
            if not self._serve_api():
                super().do_GET()

        def do_POST(self) -> None:
            if not self._serve_api():
                self.send_error(501, "Unsupported method")

        def _serve_api(self) -> bool:
            parts = urlsplit(self.path)
            route = routes.get(parts.path)
            if route is None:
                return False
            body = _encode_rows(route(parse_qs(parts.query, keep_blank_values=True)))
            self.send_response(200)
            self.send_header("Content-Type", "application/json")
            self.send_header("Content-Length", str(len(body)))
            self.end_headers()
            self.wfile.write(body)
            return True

        def log_message(self, format: str, *args) -> None:
            logger.info("%s - %s", self.address_string(), format % args)

    return Handler


def create_server(
    app: App,
    host: str = "",
    port: int = DEFAULT_PORT,
    static_dir: str | Path = DEFAULT_STATIC_DIR,
) -> ThreadingHTTPServer:
    """Bind a threaded HTTP server for ``app``; the caller runs it."""
    return ThreadingHTTPServer((host, port), make_handler(app, static_dir))


def main(argv: Sequence[str] | None = None) -> int:
    """Load the transactions, aggregate them and serve the results."""
    parser = argparse.ArgumentParser(description="Serve sales summaries over HTTP.")
    parser.add_argument("--data", default=DEFAULT_PATTERN, help="glob of CSV files")
    parser.add_argument("--host", default="")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument("--static", default=DEFAULT_STATIC_DIR, help="static file root")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)

    started = time.perf_counter()
    transactions = load_csv_data(args.data)
    loaded = time.perf_counter()
    print(f"Loaded transactions in {loaded - started:.2f} seconds")

    app = App()
    app.process_data(transactions)
    print(f"Process time : {time.perf_counter() - loaded:.2f} seconds")

    server = create_server(app, args.host, args.port, args.static)
    print(f"Server starting at {args.host}:{args.port}")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        pass
    finally:
        server.server_close()
    return 0