"""
Bookmarks API - Application Package Initializer
================================================

What: Marks the `bookmarks_api` directory as a Python package.
Who:  Imported by uvicorn, Alembic, pytest and the package entry point.

Architecture Note:
    The backend follows a layered layout:

    ┌─────────────────────────────────────┐
    │   Routes (auth, users, bookmarks)   │  <- HTTP concerns only
    ├─────────────────────────────────────┤
    │   Dependencies (bearer token auth)  │  <- Resolves the caller
    ├─────────────────────────────────────┤
    │   Services (business rules)         │  <- Ownership, uniqueness, patches
    ├─────────────────────────────────────┤
    │   Models & Schemas (data)           │  <- SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │   Database (persistence)            │  <- Async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
