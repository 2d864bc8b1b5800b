"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin, UTCDateTime, utc_now: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(): Connection management

Models live in explorely.boundary.db.models, CRUD singletons in
explorely.boundary.db.CRUD.

Dependencies: sqlalchemy, explorely.configs
System role: Database adapter providing persistent storage for every
domain entity and the session store.
"""

from explorely.boundary.db.base import Base, TimestampMixin, UTCDateTime, UUIDMixin, utc_now
from explorely.boundary.db.connection import (
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)

__all__ = [
    # Base classes
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    "UTCDateTime",
    "utc_now",
    # Connection
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
]
