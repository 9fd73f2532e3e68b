"""
Person API — Application Package Initializer
=============================================

What: Marks the `person_api` directory as a Python package.
Who:  Imported by uvicorn (`person_api.main:app`), pytest, and the modules below.

Architecture Note:
    The service follows a layered layout:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     Services (Resource Handler)     │  ← id/name resolution, not-found
    ├─────────────────────────────────────┤
    │    Store (document-style access)    │  ← insert/find/update/delete
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy engine
    └─────────────────────────────────────┘
"""

__version__ = "0.1.0"
