"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (request bodies, API responses)
    - Domain User from core/ converted to/from schemas in routes only

Design Decisions:
    - Separate from core: schemas are API contracts, User is the stored value (ADR: DDD boundary)
"""
