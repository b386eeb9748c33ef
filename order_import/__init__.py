"""Bulk order import pipeline (CSV / Excel / Shopify exports -> validated order rows)."""

__version__ = "0.1.0"
