"""Pydantic Schemas - request/response contracts for API endpoints.

Invariants:
    - Schemas validate at the system boundary; invalid requests never reach a handler
    - Response schemas never expose credential fields

Design Decisions:
    - Separate from models/: schemas are API contracts, models are persistence
"""
