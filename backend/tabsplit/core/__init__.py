"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are pure and deterministic (invite signing included)

Design Decisions:
    - Functional core separated from imperative shell (ADR: impureim sandwich)
"""
