"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are pure and deterministic given their inputs (the clock is a parameter)

Design Decisions:
    - Functional core separated from imperative shell: the service awaits the
      gateway around calls into these pure functions
"""
