"""
Trazure Backend — Application Package
=======================================

REST backend of the Trazure travel-footprints map: users light up the
places they have visited and the API stores and returns them.

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns, identity
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← ownership, defaults, validation
    ├─────────────────────────────────────┤
    │            Repositories             │  ← narrow per-entity queries
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
