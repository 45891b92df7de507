"""Core Layer — pure domain rules, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Rule functions raise TownsquareError subclasses at the point of detection

Design Decisions:
    - Functional core separated from imperative shell (services/ and api/)
"""
