from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from stablepage.config.settings import get_settings
from stablepage.core.exceptions import ConfigurationError
from stablepage.core.tokens import PositionToken


class FetchOptions(BaseModel):
    """Per-call fetch configuration, built fresh for every fetch."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    limit: int = Field(default=20, ge=1)
    start_token: Optional[PositionToken] = None

    @classmethod
    def create(cls, limit: int | None = None, start_token: PositionToken | None = None) -> FetchOptions:
        """Validate ``limit`` against the configured bounds."""
        settings = get_settings()
        if limit is None:
            limit = settings.default_page_size
        if isinstance(limit, int) and limit > settings.max_page_size:
            raise ConfigurationError(
                "limit",
                f"page size {limit} exceeds maximum {settings.max_page_size}",
                {"field": "limit", "max_page_size": settings.max_page_size},
            )
        try:
            return cls(limit=limit, start_token=start_token)
        except PydanticValidationError as exc:
            raise ConfigurationError(
                "limit", "page size must be a positive integer", {"field": "limit", "value": limit}
            ) from exc
