"""Database utilities - engine, session, unit of work."""

from src.projectdesk.core.db.engine import (
    create_engine_for_url,
    dispose_engine,
    get_engine,
    is_sqlite_url,
)
from src.projectdesk.core.db.session import create_all_tables, get_session
from src.projectdesk.core.db.unit_of_work import UnitOfWork

__all__ = [
    # Engine
    "create_engine_for_url",
    "dispose_engine",
    "get_engine",
    "is_sqlite_url",
    # Session
    "create_all_tables",
    "get_session",
    # Transactions
    "UnitOfWork",
]
