"""Aggregate sales transactions from CSV files and serve summaries as JSON over HTTP."""

__version__ = "0.1.0"