"""
Opaque position tokens.

A token anchors one record of an ordered scan. Resuming from a token yields
the records strictly after the anchor in the order of the specification the
scan runs under. A token issued under a specification is accepted by that
specification and by its full reversal, where "after the anchor" in reversed
order is "before the anchor" in the original order. Every other
specification rejects it.

Wire layout of ``PositionToken.raw``::

    <json payload> "." <urlsafe-b64 HMAC-SHA256 digest, truncated>

Only ``TokenCodec`` reads the payload. Everything else treats tokens as
opaque, apart from the ``label`` display accessor.
"""
from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import json
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any
from uuid import UUID

from stablepage.config.settings import get_settings
from stablepage.core.exceptions import ConfigurationError, InvalidTokenError
from stablepage.core.ordering import Record, SortSpecification

_SEPARATOR = b"."
_PLAIN_TYPES = (str, int, float, bool)

# datetime precedes date: every datetime is also a date
_TAGGED_TYPES = (
    ("$dt", datetime, datetime.isoformat, datetime.fromisoformat),
    ("$date", date, date.isoformat, date.fromisoformat),
    ("$dec", Decimal, str, Decimal),
    ("$uuid", UUID, str, UUID),
)


def _payload_of(raw: bytes) -> bytes:
    payload, separator, _ = raw.rpartition(_SEPARATOR)
    if not separator:
        raise InvalidTokenError("Malformed position token", code="TOK_002")
    return payload


def _encode_value(value: Any) -> Any:
    if isinstance(value, _PLAIN_TYPES):
        return value
    for tag, kind, encode, _ in _TAGGED_TYPES:
        if isinstance(value, kind):
            return {tag: encode(value)}
    raise ConfigurationError(
        "primary_field",
        f"values of type {type(value).__name__} cannot be stored in a position token",
        {"field": "primary_field", "type": type(value).__name__},
    )


def _decode_value(value: Any) -> Any:
    if isinstance(value, dict) and len(value) == 1:
        for tag, _, _, decode in _TAGGED_TYPES:
            if tag in value:
                return decode(value[tag])
    return value


@dataclass(frozen=True)
class PositionToken:
    """Opaque resumption point produced by a record source."""

    raw: bytes

    @property
    def label(self) -> str:
        """Primary value of the anchor record, for logs and debugging only."""
        try:
            payload = json.loads(_payload_of(self.raw))
            return str(_decode_value(payload["v"]))
        except (InvalidTokenError, ValueError, ArithmeticError, KeyError, TypeError):
            return ""

    def encode(self) -> str:
        """Serialize to a URL-safe string for persisting token chains."""
        return base64.urlsafe_b64encode(self.raw).decode().rstrip("=")

    @classmethod
    def decode(cls, text: str) -> PositionToken:
        padded = text + "=" * ((4 - len(text) % 4) % 4)
        try:
            return cls(base64.urlsafe_b64decode(padded.encode()))
        except (binascii.Error, ValueError) as exc:
            raise InvalidTokenError(
                "Position token is not valid base64", code="TOK_002"
            ) from exc

    def __repr__(self) -> str:
        return f"PositionToken(label={self.label!r})"


@dataclass(frozen=True)
class Anchor:
    """Decoded token: the sort key of the anchor record."""

    value: Any
    identifier: str

    @property
    def key(self) -> tuple[Any, str]:
        return self.value, self.identifier


class TokenCodec:
    """Issues and resolves signed position tokens for record sources."""

    def __init__(self, secret: str | None = None, digest_size: int | None = None):
        settings = get_settings()
        self._secret = (secret or settings.token_secret).encode()
        self._digest_size = digest_size or settings.token_digest_size

    def _digest(self, payload: bytes) -> bytes:
        digest = hmac.new(self._secret, payload, hashlib.sha256).digest()[: self._digest_size]
        return base64.urlsafe_b64encode(digest).rstrip(b"=")

    def issue(self, sort_spec: SortSpecification, record: Record) -> PositionToken:
        names, directions = sort_spec.signature
        payload = json.dumps(
            {
                "f": list(names),
                "d": list(directions),
                "v": _encode_value(record.value_of(sort_spec.primary.name)),
                "i": record.identifier,
            },
            separators=(",", ":"),
            sort_keys=True,
        ).encode()
        return PositionToken(payload + _SEPARATOR + self._digest(payload))

    def resolve(self, token: PositionToken, sort_spec: SortSpecification) -> Anchor:
        """Verify ``token`` and check it against ``sort_spec``.

        Raises:
            InvalidTokenError: TOK_002 when the token is corrupt, TOK_001 when
                it was issued under an incompatible sort specification.
        """
        payload = _payload_of(token.raw)
        digest = token.raw[len(payload) + len(_SEPARATOR):]
        if not hmac.compare_digest(digest, self._digest(payload)):
            raise InvalidTokenError("Position token signature mismatch", code="TOK_002")
        try:
            data = json.loads(payload)
            issued = SortSpecification.from_signature(tuple(data["f"]), tuple(data["d"]))
            anchor = Anchor(_decode_value(data["v"]), str(data["i"]))
        except (ConfigurationError, ValueError, ArithmeticError, KeyError, TypeError) as exc:
            raise InvalidTokenError("Position token payload is unreadable", code="TOK_002") from exc

        if not sort_spec.is_compatible(issued):
            raise InvalidTokenError(
                "Position token was issued under an incompatible sort specification",
                details={
                    "token_fields": list(issued.field_names),
                    "token_directions": [f.direction.value for f in issued.fields],
                    "sort": str(sort_spec),
                },
            )
        return anchor
