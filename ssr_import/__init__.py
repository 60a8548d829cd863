"""Schedule of Standard Rates (SSR) spreadsheet importer."""

__version__ = "0.1.0"
