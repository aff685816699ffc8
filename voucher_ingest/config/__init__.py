"""Configuration loading for voucher-ingest."""
