"""Catalog identifier codec and resolution cascade for music items."""

__version__ = "0.1.0"
