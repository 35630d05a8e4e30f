from __future__ import annotations

import threading
from typing import Iterable

from stablepage.core.exceptions import ConfigurationError
from stablepage.core.logging import get_logger
from stablepage.core.ordering import Record, SortSpecification
from stablepage.core.tokens import PositionToken, TokenCodec
from stablepage.repositories.base import BaseRecordSource, ScanResult

logger = get_logger(__name__)


class InMemoryRecordSource(BaseRecordSource):
    """Ordered record source over an in-process record set.

    Each scan sorts a snapshot of the records, so forward and reversed
    scans may interleave freely.
    """

    def __init__(self, records: Iterable[Record] = (), *, token_codec: TokenCodec | None = None):
        super().__init__(token_codec)
        self._lock = threading.Lock()
        self._records: dict[str, Record] = {}
        self.extend(records)

    def add(self, record: Record) -> None:
        with self._lock:
            if record.identifier in self._records:
                raise ConfigurationError(
                    "identifier",
                    f"duplicate record identifier {record.identifier!r}",
                    {"field": "identifier", "identifier": record.identifier},
                )
            self._records[record.identifier] = record

    def extend(self, records: Iterable[Record]) -> None:
        for record in records:
            self.add(record)

    def __len__(self) -> int:
        return len(self._records)

    async def scan(
        self,
        sort_spec: SortSpecification,
        start: PositionToken | None,
        limit: int,
    ) -> ScanResult:
        with self._lock:
            snapshot = list(self._records.values())

        ordered = sorted((r for r in snapshot if sort_spec.includes(r)), key=sort_spec.sort_key)

        if start is not None:
            anchor = self._codec.resolve(start, sort_spec)
            ordered = [r for r in ordered if sort_spec.compare_keys(sort_spec.key_of(r), anchor.key) > 0]

        records = ordered[:limit]
        logger.debug(
            "memory_scan",
            sort=str(sort_spec),
            start=start.label if start else None,
            limit=limit,
            returned=len(records),
        )
        return self._result(sort_spec, records)
