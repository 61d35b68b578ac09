"""
Scorekeeper Backend — Application Package
===========================================

Layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← uniqueness, cascades, scoring
    ├─────────────────────────────────────┤
    │     Repositories (Persistence GW)   │  ← CRUD + atomic increments
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
