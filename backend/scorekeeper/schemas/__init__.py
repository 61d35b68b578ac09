"""
Scorekeeper Backend — Pydantic Request/Response Schemas
=========================================================

Schemas are separate from the SQLAlchemy models: they decide exactly which
fields cross the API boundary (a user's password hash never does).
"""
