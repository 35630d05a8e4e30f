"""Database package for the SQL record source."""
from stablepage.db.database import (
    Base,
    create_engine,
    create_session_factory,
    dispose_engine,
    init_db,
)

__all__ = [
    "Base",
    "create_engine",
    "create_session_factory",
    "dispose_engine",
    "init_db",
]
