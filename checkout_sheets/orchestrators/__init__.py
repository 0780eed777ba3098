"""
Orchestrators for checkout-sheets.
"""

from .relay import SheetsRelay, RelayResult

__all__ = ["SheetsRelay", "RelayResult"]
