"""
Metrics definitions for checkout-sheets.

This module defines Prometheus metrics for monitoring
the relay from checkout events to the spreadsheet ledger.
"""

from prometheus_client import Counter, Histogram

# contadores
events_received = Counter(
    "relay_events_received_total",
    "Number of checkout events accepted for processing",
    ["tipo"]
)

events_appended = Counter(
    "relay_events_appended_total",
    "Number of rows appended to the ledger",
    ["tipo"]
)

events_duplicate = Counter(
    "relay_events_duplicate_total",
    "Number of events skipped by the duplicate window",
    ["tipo"]
)

events_rejected = Counter(
    "relay_events_rejected_total",
    "Number of requests rejected before reaching the ledger",
    ["reason"]
)

ledger_errors = Counter(
    "ledger_errors_total",
    "Failed calls to the spreadsheet API",
    ["operation"]
)

# histogramas
ledger_call_seconds = Histogram(
    "ledger_call_duration_seconds",
    "Latency of spreadsheet API calls",
    ["operation"],
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0]
)
