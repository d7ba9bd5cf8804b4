"""Inventory items and stock records on SQLite, with schema-validated metadata."""

__version__ = "0.1.0"