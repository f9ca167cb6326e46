"""Infrastructure Layer — persistence and cross-cutting concerns.

Invariants:
    - Implements core/ protocols; never adds domain rules of its own
    - All SQLAlchemy failures mapped to StoreError

Design Decisions:
    - Thin adapters over raw clients (ADR: single responsibility)
"""
