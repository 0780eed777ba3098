"""checkout-sheets: relays checkout transaction events to a Google Sheets ledger."""

__version__ = "0.1.0"
