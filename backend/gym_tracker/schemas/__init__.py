"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (user input, query strings)
    - Domain types from core/ used for enum fields
    - Incoming datetimes normalized to UTC before reaching services

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
