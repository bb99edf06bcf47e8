"""Database infrastructure - async engine construction for the SQL store."""

from infrastructure.database.engines import build_async_url, create_store_engine

__all__ = [
    "build_async_url",
    "create_store_engine",
]
