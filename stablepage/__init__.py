"""Stable, bidirectional cursor pagination over ordered record stores."""
from stablepage.core.builder import PageBuilder, fetch_page
from stablepage.core.exceptions import (
    ConfigurationError,
    DomainError,
    InvalidTokenError,
    SourceUnavailableError,
)
from stablepage.core.ordering import Record, SortDirection, SortField, SortSpecification
from stablepage.core.page import Page, PageEntry, equals, reverse
from stablepage.core.session import PaginationSession
from stablepage.core.tokens import PositionToken, TokenCodec
from stablepage.repositories.base import OrderedRecordSource, ScanResult
from stablepage.repositories.memory_source import InMemoryRecordSource
from stablepage.schemas.pagination import FetchOptions

__all__ = [
    "ConfigurationError",
    "DomainError",
    "FetchOptions",
    "InMemoryRecordSource",
    "InvalidTokenError",
    "OrderedRecordSource",
    "Page",
    "PageBuilder",
    "PageEntry",
    "PaginationSession",
    "PositionToken",
    "Record",
    "ScanResult",
    "SortDirection",
    "SortField",
    "SortSpecification",
    "SourceUnavailableError",
    "TokenCodec",
    "equals",
    "fetch_page",
    "reverse",
]
