"""Pydantic Schemas — request bodies and response envelopes for API endpoints.

Invariants:
    - Schemas check JSON shape at the boundary; business rules belong to services

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
