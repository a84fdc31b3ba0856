"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas check presence and shape only; identifier rules live in core/
      so their failures carry registry error codes (INVALID_FORMAT, RESERVED)
    - Domain enums from core/ used for enum fields

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
