"""Personal betting ledger: balance reconciliation and dashboard statistics."""

__version__ = "0.1.0"
