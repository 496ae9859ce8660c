"""Database module exports."""

from .connection import (
    Base,
    get_async_engine,
    get_async_session_factory,
    get_async_db,
    create_tables,
    drop_tables,
    dispose_engine,
)
from .models import (
    BatchStatus,
    BridgeBatch,
)

__all__ = [
    "Base",
    "get_async_engine",
    "get_async_session_factory",
    "get_async_db",
    "create_tables",
    "drop_tables",
    "dispose_engine",
    "BatchStatus",
    "BridgeBatch",
]
