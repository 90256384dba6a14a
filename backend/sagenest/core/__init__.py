"""Core Layer — pure domain logic, no IO, no async, no network.

Invariants:
    - No module in core/ imports from api/, infrastructure/, schemas/ or config
    - All functions are pure and deterministic; "today" is always a parameter

Design Decisions:
    - Functional core separated from imperative shell (ADR: impureim sandwich)
"""
