"""Ethical rent-pricing engine for rental listings."""

__version__ = "0.1.0"
