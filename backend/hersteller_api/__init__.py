"""
Hersteller Service — Application Package Initializer
====================================================

What: Marks the `hersteller_api` directory as a Python package.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    The backend follows a layered architecture:

    ┌─────────────────────────────────────┐
    │   Routes (REST + GraphQL adapters)  │  ← status codes, headers, HAL links
    ├─────────────────────────────────────┤
    │   Services (Reader / Writer core)   │  ← validation gates, optimistic locking
    ├─────────────────────────────────────┤
    │   Models & Schemas (Data)           │  ← SQLAlchemy ORM + Pydantic payloads
    ├─────────────────────────────────────┤
    │   Database (Persistence)            │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Routes translate the tagged outcomes returned by the services into
    transport responses; services never know which transport called them.
"""

__version__ = "1.0.0"
