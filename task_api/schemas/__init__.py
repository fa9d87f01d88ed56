"""Pydantic Schemas — response contracts for API endpoints.

Invariants:
    - Schemas describe what leaves the system; request input is checked by core/enforce_fields.py

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
