"""Workbook and CSV reading."""
