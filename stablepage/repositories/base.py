"""
Ordered record source contract.

A source runs one sorted, bounded range scan per call and issues position
tokens for the first and last record it returns. Reverse paging is a fresh
scan under ``sort_spec.reversed()``, never an inverse walk of an earlier
scan. Sources must reject tokens issued under an incompatible
specification with ``InvalidTokenError``.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from stablepage.core.ordering import Record, SortSpecification
from stablepage.core.tokens import PositionToken, TokenCodec


@dataclass(frozen=True)
class ScanResult:
    records: tuple[Record, ...]
    first_token: PositionToken | None = None
    last_token: PositionToken | None = None

    @classmethod
    def empty(cls) -> ScanResult:
        return cls(records=())


@runtime_checkable
class OrderedRecordSource(Protocol):
    async def scan(
        self,
        sort_spec: SortSpecification,
        start: PositionToken | None,
        limit: int,
    ) -> ScanResult: ...


class BaseRecordSource(ABC):
    """Shared token handling for concrete sources."""

    def __init__(self, token_codec: TokenCodec | None = None):
        self._codec = token_codec or TokenCodec()

    @abstractmethod
    async def scan(
        self,
        sort_spec: SortSpecification,
        start: PositionToken | None,
        limit: int,
    ) -> ScanResult:
        ...

    def _result(self, sort_spec: SortSpecification, records: list[Record]) -> ScanResult:
        if not records:
            return ScanResult.empty()
        return ScanResult(
            records=tuple(records),
            first_token=self._codec.issue(sort_spec, records[0]),
            last_token=self._codec.issue(sort_spec, records[-1]),
        )
