"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Snapshot persistence accessed only through ExpenseSnapshotStore
    - Each store call is atomic from the caller's point of view (no partial writes visible)
    - Concurrent upserts to the same id resolve last-writer-wins; the store does not merge

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: implementations do IO, but the pure allocation and codec
      functions that feed them are never async — the shell orchestrates around them
"""

from typing import Protocol

from tabsplit.core.expense_schema import ExpenseSnapshot


class ExpenseSnapshotStore(Protocol):
    """Contract for expense snapshot persistence — implemented by shell."""
    async def get(self, snapshot_id: str) -> ExpenseSnapshot | None: ...
    async def upsert(self, snapshot: ExpenseSnapshot) -> None: ...
    async def remove(self, snapshot_id: str) -> None: ...
    async def list(self) -> list[ExpenseSnapshot]: ...
