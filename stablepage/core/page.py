"""Page value object plus reverse-normalization and content equivalence."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from stablepage.core.tokens import PositionToken


@dataclass(frozen=True)
class PageEntry:
    value: Any
    identifier: str

    @property
    def key(self) -> tuple[Any, str]:
        return self.value, self.identifier

    @property
    def display(self) -> str:
        """``value-identifier``, for human verification only."""
        return f"{self.value}-{self.identifier}"


@dataclass(frozen=True, eq=False)
class Page:
    """One fetched window of ordered entries plus its two boundary tokens.

    ``forward_token`` resumes after the last entry and ``backward_token``
    anchors the first entry. Both are ``None`` for an empty page.
    """

    content: tuple[PageEntry, ...] = ()
    forward_token: PositionToken | None = None
    backward_token: PositionToken | None = None

    @classmethod
    def empty(cls) -> Page:
        return cls()

    @property
    def first(self) -> PageEntry | None:
        return self.content[0] if self.content else None

    @property
    def last(self) -> PageEntry | None:
        return self.content[-1] if self.content else None

    @property
    def labels(self) -> list[str]:
        return [entry.display for entry in self.content]

    def __len__(self) -> int:
        return len(self.content)

    def __bool__(self) -> bool:
        return bool(self.content)

    def reverse(self) -> Page:
        return reverse(self)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Page):
            return NotImplemented
        return equals(self, other)

    def __hash__(self) -> int:
        return hash(self.content)

    def describe(self) -> str:
        """Content plus token labels, for logs."""
        prev_label = self.backward_token.label if self.backward_token else ""
        next_label = self.forward_token.label if self.forward_token else ""
        return f"content: {self.labels}\nprev: {prev_label}\nnext: {next_label}\n"


def reverse(page: Page) -> Page:
    """Reverse content order and swap the boundary tokens.

    Used to bring a page fetched under the reversed sort specification back
    into canonical order. Tokens are swapped, never recomputed.
    """
    if not page.content:
        return page
    return Page(
        content=tuple(reversed(page.content)),
        forward_token=page.backward_token,
        backward_token=page.forward_token,
    )


def equals(a: Page, b: Page) -> bool:
    """Pages are equivalent when their content sequences match entry for entry."""
    return a.content == b.content
