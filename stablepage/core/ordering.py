"""
Sort specifications and the record total order.

A sort is always a primary field followed by the unique identifier field in
the same direction, so two distinct records never compare equal. Identifiers
are compared in their string form everywhere, which keeps the in-memory
comparator and every record source in agreement.
"""
from __future__ import annotations

import functools
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

from stablepage.config.settings import get_settings
from stablepage.core.exceptions import ConfigurationError


class SortDirection(str, Enum):
    ASCENDING = "asc"
    DESCENDING = "desc"

    def inverted(self) -> SortDirection:
        if self is SortDirection.ASCENDING:
            return SortDirection.DESCENDING
        return SortDirection.ASCENDING

    @classmethod
    def parse(cls, value: SortDirection | str) -> SortDirection:
        """Accept the enum or one of asc/ascending/desc/descending."""
        if isinstance(value, SortDirection):
            return value
        aliases = {
            "asc": cls.ASCENDING,
            "ascending": cls.ASCENDING,
            "desc": cls.DESCENDING,
            "descending": cls.DESCENDING,
        }
        normalized = str(value).strip().lower()
        if normalized not in aliases:
            raise ConfigurationError(
                "direction",
                f"unknown sort direction {value!r}",
                {"field": "direction", "value": str(value)},
            )
        return aliases[normalized]


@dataclass(frozen=True)
class Record:
    """An immutable fetched record: a string identifier plus named values."""

    identifier: str
    values: Mapping[str, Any]

    def __init__(self, identifier: str | int, values: Mapping[str, Any] | None = None):
        object.__setattr__(self, "identifier", str(identifier))
        object.__setattr__(self, "values", MappingProxyType(dict(values or {})))

    def has(self, name: str) -> bool:
        return name in self.values and self.values[name] is not None

    def value_of(self, name: str, identifier_field: str | None = None) -> Any:
        if name == identifier_field:
            return self.identifier
        return self.values.get(name)


@dataclass(frozen=True)
class SortField:
    name: str
    direction: SortDirection

    def inverted(self) -> SortField:
        return SortField(self.name, self.direction.inverted())


def _compare_values(a: Any, b: Any) -> int:
    if a == b:
        return 0
    return -1 if a < b else 1


@dataclass(frozen=True)
class SortSpecification:
    """Primary field plus identifier tie-breaker, both in the same direction."""

    fields: tuple[SortField, ...]

    def __post_init__(self):
        if not self.fields:
            raise ConfigurationError("sort", "sort specification must not be empty")
        if len(self.fields) != 2:
            raise ConfigurationError(
                "sort",
                "sort specification must be a primary field plus the identifier field",
                {"field": "sort", "fields": [f.name for f in self.fields]},
            )
        primary, identifier = self.fields
        if primary.name == identifier.name:
            raise ConfigurationError(
                "sort",
                f"primary field {primary.name!r} is the identifier field",
                {"field": "sort", "fields": [primary.name, identifier.name]},
            )
        directions = [SortDirection.parse(f.direction) for f in self.fields]
        if directions[0] is not directions[1]:
            raise ConfigurationError(
                "sort",
                "identifier field must share the primary field's direction",
                {"field": "sort", "directions": [d.value for d in directions]},
            )

    @classmethod
    def from_signature(cls, names, directions) -> SortSpecification:
        """Rebuild a specification from ``signature`` parts."""
        if len(names) != len(directions):
            raise ConfigurationError("sort", "field names and directions differ in length")
        return cls(tuple(SortField(n, SortDirection.parse(d)) for n, d in zip(names, directions)))

    @classmethod
    def build(
        cls,
        primary_field: str,
        direction: SortDirection | str = SortDirection.ASCENDING,
        identifier_field: str | None = None,
    ) -> SortSpecification:
        identifier_field = identifier_field or get_settings().identifier_field
        if not primary_field or not primary_field.strip():
            raise ConfigurationError("primary_field", "primary field name must not be empty")
        if primary_field == identifier_field:
            raise ConfigurationError(
                "primary_field",
                f"primary field {primary_field!r} is the identifier field",
                {"field": "primary_field", "identifier_field": identifier_field},
            )
        parsed = SortDirection.parse(direction)
        return cls((SortField(primary_field, parsed), SortField(identifier_field, parsed)))

    @property
    def primary(self) -> SortField:
        return self.fields[0]

    @property
    def identifier(self) -> SortField:
        return self.fields[-1]

    @property
    def direction(self) -> SortDirection:
        return self.primary.direction

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(f.name for f in self.fields)

    @property
    def signature(self) -> tuple[tuple[str, ...], tuple[str, ...]]:
        return self.field_names, tuple(f.direction.value for f in self.fields)

    def reversed(self) -> SortSpecification:
        """Same fields with every direction inverted."""
        return SortSpecification(tuple(f.inverted() for f in self.fields))

    def is_compatible(self, other: SortSpecification) -> bool:
        """Same fields, and directions either identical or fully inverted."""
        return other == self or other == self.reversed()

    def key_of(self, record: Record) -> tuple[Any, ...]:
        return tuple(record.value_of(f.name, self.identifier.name) for f in self.fields)

    def compare_keys(self, a: tuple[Any, ...], b: tuple[Any, ...]) -> int:
        for sort_field, left, right in zip(self.fields, a, b):
            result = _compare_values(left, right)
            if result:
                return -result if sort_field.direction is SortDirection.DESCENDING else result
        return 0

    def compare(self, a: Record, b: Record) -> int:
        return self.compare_keys(self.key_of(a), self.key_of(b))

    @property
    def sort_key(self):
        """Key function for ``sorted`` following this order."""
        return functools.cmp_to_key(self.compare)

    def includes(self, record: Record) -> bool:
        """Records without a primary value are not part of the ordered set."""
        return record.has(self.primary.name)

    def __str__(self) -> str:
        return ", ".join(f"{f.name} {f.direction.value}" for f in self.fields)
