"""
VeggieFresh Admin API — Application Package
=============================================

Layered architecture:

    ┌─────────────────────────────────────┐
    │   Routes + Dependencies (API)       │  ← HTTP concerns, auth guard
    ├─────────────────────────────────────┤
    │   Services (Business Logic)         │  ← rules, queries, mutations
    ├─────────────────────────────────────┤
    │   Models & Schemas (Data)           │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │   Database (Persistence)            │  ← async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
