"""Request dashboard: table view engine, record sources and courier proxy."""

__version__ = "0.1.0"
