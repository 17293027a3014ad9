"""
Dialect helpers shared by repositories.
"""

from datetime import datetime, timezone

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession


def insert_ignoring_conflicts(session: AsyncSession, model, index_elements: list):
    """
    Build INSERT ... ON CONFLICT DO NOTHING for the session's backend.

    Args:
        session: Session whose bind decides the dialect
        model: ORM model to insert into
        index_elements: Columns of the unique constraint to ignore

    Returns:
        Insert statement; call .values() on it before executing
    """
    dialect_name = session.get_bind().dialect.name
    if dialect_name == "postgresql":
        stmt = postgresql.insert(model)
    elif dialect_name == "sqlite":
        stmt = sqlite.insert(model)
    else:
        raise NotImplementedError(f"Unsupported database dialect: {dialect_name}")
    return stmt.on_conflict_do_nothing(index_elements=index_elements)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive timestamps read back from SQLite."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
