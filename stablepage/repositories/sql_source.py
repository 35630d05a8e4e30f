"""
SQLAlchemy keyset record source.

Translates a sort specification into ``ORDER BY primary, id`` and a position
token into a keyset predicate. For an ascending scan resuming after anchor
``(v, i)``::

    WHERE primary > v OR (primary = v AND id > i)

Descending scans flip both comparisons. Rows with a NULL primary value are
excluded, matching the in-memory source. Non-string identifier columns are
cast to strings for both the predicate and the ORDER BY.
"""
from __future__ import annotations

from typing import Any, Mapping

from sqlalchemy import String, and_, cast, inspect, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from stablepage.config.settings import get_settings
from stablepage.core.exceptions import ConfigurationError, SourceUnavailableError
from stablepage.core.logging import get_logger
from stablepage.core.ordering import Record, SortDirection, SortSpecification
from stablepage.core.tokens import PositionToken, TokenCodec
from stablepage.models.record import RecordRow
from stablepage.repositories.base import BaseRecordSource, ScanResult

logger = get_logger(__name__)


class SqlRecordSource(BaseRecordSource):
    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        model: type = RecordRow,
        *,
        filters: Mapping[str, Any] | None = None,
        field_map: Mapping[str, str] | None = None,
        token_codec: TokenCodec | None = None,
    ):
        """
        Args:
            session_factory: Opens one session per scan.
            model: Mapped class to scan.
            filters: Equality filters applied to every scan, e.g. ``{"kind": "Person"}``.
            field_map: Sort field name to model attribute name. The identifier
                field maps to the model's ``id`` attribute unless overridden.
            token_codec: Codec used to issue and resolve position tokens.
        """
        super().__init__(token_codec)
        self._session_factory = session_factory
        self._model = model
        self._filters = dict(filters or {})
        self._field_map = {get_settings().identifier_field: "id", **(field_map or {})}
        self._columns = [attr.key for attr in inspect(model).column_attrs]

    def _column(self, name: str):
        attr = self._field_map.get(name, name)
        if attr not in self._columns:
            raise ConfigurationError(
                "sort",
                f"{self._model.__name__} has no column for sort field {name!r}",
                {"field": "sort", "sort_field": name, "attribute": attr},
            )
        return getattr(self._model, attr)

    def _statement(self, sort_spec: SortSpecification, start: PositionToken | None, limit: int):
        primary = self._column(sort_spec.primary.name)
        identifier = self._column(sort_spec.identifier.name)
        if not isinstance(identifier.type, String):
            # identifiers order by their string form, as in the comparator
            identifier = cast(identifier, String)

        query = select(self._model).where(primary.is_not(None))
        for name, value in self._filters.items():
            query = query.where(self._column(name) == value)

        descending = sort_spec.direction is SortDirection.DESCENDING
        if start is not None:
            anchor = self._codec.resolve(start, sort_spec)
            if descending:
                query = query.where(
                    or_(primary < anchor.value, and_(primary == anchor.value, identifier < anchor.identifier))
                )
            else:
                query = query.where(
                    or_(primary > anchor.value, and_(primary == anchor.value, identifier > anchor.identifier))
                )

        if descending:
            query = query.order_by(primary.desc(), identifier.desc())
        else:
            query = query.order_by(primary.asc(), identifier.asc())
        return query.limit(limit)

    def _to_record(self, sort_spec: SortSpecification, row: Any) -> Record:
        values = {key: getattr(row, key) for key in self._columns}
        primary_attr = self._field_map.get(sort_spec.primary.name, sort_spec.primary.name)
        values[sort_spec.primary.name] = getattr(row, primary_attr)
        identifier_attr = self._field_map.get(sort_spec.identifier.name, sort_spec.identifier.name)
        return Record(getattr(row, identifier_attr), values)

    async def scan(
        self,
        sort_spec: SortSpecification,
        start: PositionToken | None,
        limit: int,
    ) -> ScanResult:
        query = self._statement(sort_spec, start, limit)
        try:
            async with self._session_factory() as session:
                result = await session.execute(query)
                rows = result.scalars().all()
        except (SQLAlchemyError, OSError) as exc:
            logger.warning("sql_scan_failed", sort=str(sort_spec), error=str(exc))
            raise SourceUnavailableError(
                "Record store is unavailable",
                details={"sort": str(sort_spec), "error": str(exc)},
            ) from exc

        records = [self._to_record(sort_spec, row) for row in rows]
        logger.debug(
            "sql_scan",
            sort=str(sort_spec),
            start=start.label if start else None,
            limit=limit,
            returned=len(records),
        )
        return self._result(sort_spec, records)
