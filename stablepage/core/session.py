"""
Pagination session: one sort specification and its token chain.

Forward pages come from the session's specification. Backward pages are
fetched under the fully reversed specification starting from the current
page's backward token, then reverse-normalized into forward order. No
iterator state is shared between the two directions.
"""
from __future__ import annotations

import uuid
from typing import AsyncIterator

from stablepage.core.builder import PageBuilder
from stablepage.core.logging import add_log_context, get_logger
from stablepage.core.ordering import SortSpecification
from stablepage.core.page import Page, PageEntry, reverse
from stablepage.core.tokens import PositionToken
from stablepage.repositories.base import OrderedRecordSource
from stablepage.schemas.pagination import FetchOptions

logger = get_logger(__name__)


class PaginationSession:
    """Walks pages forward and backward. Confine each session to one task."""

    def __init__(
        self,
        source: OrderedRecordSource,
        sort_spec: SortSpecification,
        page_size: int | None = None,
    ):
        self.sort_spec = sort_spec
        self.page_size = FetchOptions.create(limit=page_size).limit
        self.session_id = uuid.uuid4().hex
        self._builder = PageBuilder(source)

    async def _fetch(self, sort_spec: SortSpecification, start: PositionToken | None) -> Page:
        add_log_context(pagination_session=self.session_id)
        options = FetchOptions.create(limit=self.page_size, start_token=start)
        return await self._builder.fetch_page(sort_spec, options)

    async def first(self) -> Page:
        return await self._fetch(self.sort_spec, None)

    async def next(self, page: Page) -> Page:
        if page.forward_token is None:
            return Page.empty()
        return await self._fetch(self.sort_spec, page.forward_token)

    async def previous(self, page: Page) -> Page:
        """The page preceding ``page``, in forward order."""
        if page.backward_token is None:
            return Page.empty()
        fetched = await self._fetch(self.sort_spec.reversed(), page.backward_token)
        logger.debug("previous_page_fetched", count=len(fetched.content))
        return reverse(fetched)

    async def pages(self) -> AsyncIterator[Page]:
        page = await self.first()
        while page.content:
            yield page
            if len(page.content) < self.page_size:
                break
            page = await self.next(page)

    async def collect(self) -> list[PageEntry]:
        entries: list[PageEntry] = []
        async for page in self.pages():
            entries.extend(page.content)
        return entries
