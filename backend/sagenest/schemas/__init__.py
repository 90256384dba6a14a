"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (form input, rendered output)
    - Domain types from core/ used for enum fields

Design Decisions:
    - Range rules (cycle length, embryo age) are NOT pydantic constraints: they
      are domain validation with user-facing messages, enforced in core/calculator
"""
