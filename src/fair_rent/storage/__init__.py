"""Report exports for batch pricing runs."""

from .export import export_csv, export_json

__all__ = [
    "export_csv",
    "export_json",
]
