"""
HTTP surface for checkout-sheets.
"""

from .app import create_app

__all__ = ["create_app"]
