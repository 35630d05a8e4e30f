"""
Page builder.

Runs exactly one bounded scan per fetch and assembles an immutable Page from
it. The scan result is validated before any Page exists, so a Page's tokens
always describe the content it carries.
"""
from __future__ import annotations

from stablepage.core.exceptions import DomainError, SourceUnavailableError
from stablepage.core.logging import get_logger
from stablepage.core.ordering import Record, SortSpecification
from stablepage.core.page import Page, PageEntry
from stablepage.core.tokens import PositionToken
from stablepage.repositories.base import OrderedRecordSource, ScanResult
from stablepage.schemas.pagination import FetchOptions

logger = get_logger(__name__)


class PageBuilder:
    def __init__(self, source: OrderedRecordSource):
        self._source = source

    async def fetch_page(self, sort_spec: SortSpecification, options: FetchOptions) -> Page:
        try:
            result = await self._source.scan(sort_spec, options.start_token, options.limit)
        except DomainError as exc:
            logger.warning("page_fetch_failed", sort=str(sort_spec), code=exc.code, error=exc.message)
            raise
        except Exception as exc:
            logger.warning("page_fetch_failed", sort=str(sort_spec), error=str(exc))
            raise SourceUnavailableError(
                f"Record source failed: {exc}",
                details={"sort": str(sort_spec), "limit": options.limit},
            ) from exc

        self._validate(sort_spec, options, result)
        page = self._assemble(sort_spec, result)

        logger.debug(
            "page_fetched",
            field=sort_spec.primary.name,
            direction=sort_spec.direction.value,
            limit=options.limit,
            start=options.start_token.label if options.start_token else None,
            count=len(page.content),
            prev=page.backward_token.label if page.backward_token else None,
            next=page.forward_token.label if page.forward_token else None,
        )
        return page

    def _validate(self, sort_spec: SortSpecification, options: FetchOptions, result: ScanResult) -> None:
        records = result.records
        if len(records) > options.limit:
            raise SourceUnavailableError(
                f"Record source returned {len(records)} records for limit {options.limit}",
                code="SRC_002",
                details={"limit": options.limit, "returned": len(records)},
            )
        if records and (result.first_token is None or result.last_token is None):
            raise SourceUnavailableError(
                "Record source returned records without boundary tokens",
                code="SRC_002",
            )
        for previous, current in zip(records, records[1:]):
            if sort_spec.compare(previous, current) >= 0:
                raise SourceUnavailableError(
                    "Record source returned records out of sort order",
                    code="SRC_002",
                    details={
                        "sort": str(sort_spec),
                        "previous": previous.identifier,
                        "current": current.identifier,
                    },
                )

    def _assemble(self, sort_spec: SortSpecification, result: ScanResult) -> Page:
        if not result.records:
            return Page.empty()
        return Page(
            content=tuple(self._entry(sort_spec, record) for record in result.records),
            forward_token=result.last_token,
            backward_token=result.first_token,
        )

    @staticmethod
    def _entry(sort_spec: SortSpecification, record: Record) -> PageEntry:
        return PageEntry(record.value_of(sort_spec.primary.name), record.identifier)


async def fetch_page(
    source: OrderedRecordSource,
    sort_spec: SortSpecification,
    start_token: PositionToken | None = None,
    page_size: int | None = None,
) -> Page:
    """Fetch one page; ``page_size`` defaults to the configured page size."""
    options = FetchOptions.create(limit=page_size, start_token=start_token)
    return await PageBuilder(source).fetch_page(sort_spec, options)
