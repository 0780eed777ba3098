"""
Port interfaces for checkout-sheets.

This module defines the port interfaces (Protocols) that define
the contracts between the core relay and external adapters.
"""

from .ledger import LedgerPort

__all__ = ["LedgerPort"]
