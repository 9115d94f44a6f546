"""Pydantic Schemas: validation for API endpoints and persisted save blobs.

Invariants:
    - Schemas validate at system boundary (HTTP input, API responses, save slot contents)
    - Domain types from core/ used for enum fields

Design Decisions:
    - Separate from models: schemas are contracts, models are persistence (ADR: DDD boundary)
"""
