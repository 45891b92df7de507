"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (user input, API responses)
    - Response field names keep the legacy wire format (id, author, date, commentId)

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
