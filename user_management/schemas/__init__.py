"""Pydantic Schemas — request/response shapes for API endpoints.

Invariants:
    - Request schemas only deserialize (types); business rules live in core/validate_user.py
    - Response schemas mirror core.user_aggregate.to_response exactly
"""
