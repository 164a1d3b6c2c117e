"""Personal finance ledger with balance reconciliation and pluggable sync."""

__version__ = "0.1.0"
