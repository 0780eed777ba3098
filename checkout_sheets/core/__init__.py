"""
Core domain models and pure functions for checkout-sheets.

This module contains the event models, row shaping, timestamp codec and
duplicate predicate, independent of HTTP and spreadsheet I/O.
"""

from .errors import (
    RelayError, MalformedBody, IncompleteData, InvalidType,
    ConfigurationMissing, RemoteFailure,
)
from .events import (
    CheckoutEvent, PixGenerated, CardEntered, Row, ROW_WIDTH,
    decode_body, parse_event, build_row,
)
from .timestamps import TimestampCodec
from .dedup import is_duplicate, DUPLICATE_WINDOW_MS

__all__ = [
    "RelayError", "MalformedBody", "IncompleteData", "InvalidType",
    "ConfigurationMissing", "RemoteFailure",
    "CheckoutEvent", "PixGenerated", "CardEntered", "Row", "ROW_WIDTH",
    "decode_body", "parse_event", "build_row",
    "TimestampCodec", "is_duplicate", "DUPLICATE_WINDOW_MS",
]
