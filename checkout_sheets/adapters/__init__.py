"""
Adapters for checkout-sheets.

This module contains the concrete implementations of port interfaces
that handle external I/O.
"""

from .sheets import GoogleSheetsLedger

__all__ = ["GoogleSheetsLedger"]
