"""Infrastructure Layer — process-level concerns: logging setup and the wall clock.

Invariants:
    - Nothing here is imported by core/
"""
