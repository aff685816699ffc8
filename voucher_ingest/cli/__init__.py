"""Command line interface for voucher-ingest."""

from .__main__ import main

__all__ = ["main"]
