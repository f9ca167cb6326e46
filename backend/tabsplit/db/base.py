"""SQLAlchemy Declarative Base — shared base class for the snapshot table.

Invariants:
    - All models inherit from Base
    - Base is the single source of truth for table metadata (Alembic reads it)

Design Decisions:
    - Separate file for Base: models and migrations import it without importing each other
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all TabSplit ORM models."""
    pass
