"""Configuration module.

- **settings.py**: Environment-based settings (Pydantic BaseSettings)
  - Page size bounds, tie-break identifier field, token signing secret
  - Database URL for the SQL record source
  - Loaded from .env file via pydantic-settings, prefixed ``STABLEPAGE_``
"""
from stablepage.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
