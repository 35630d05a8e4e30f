"""Ordered record sources."""
from stablepage.repositories.base import BaseRecordSource, OrderedRecordSource, ScanResult
from stablepage.repositories.memory_source import InMemoryRecordSource

__all__ = [
    "BaseRecordSource",
    "InMemoryRecordSource",
    "OrderedRecordSource",
    "ScanResult",
]
