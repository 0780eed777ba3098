"""
Google Sheets ledger adapter.
"""

from .client import GoogleSheetsLedger, load_credentials

__all__ = ["GoogleSheetsLedger", "load_credentials"]
