"""Command line entry point (`python -m order_import.cli`)."""

from .__main__ import main

__all__ = ["main"]
