"""Services Layer — orchestrates store IO around the pure core.

Invariants:
    - Services call core/ functions and the ExpenseSnapshotStore protocol only
    - No HTTP concerns here (routes translate requests and responses)

Design Decisions:
    - One module per workflow: invites (sign/accept) and shares (allocate/settle)
"""
