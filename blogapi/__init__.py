"""
Blog API Backend: Application Package Initializer
=================================================

What: Marks the `blogapi` directory as a Python package.
Who:  Used by uvicorn (`blogapi.main:app`), pytest, and the service modules.

Architecture Note:
    The backend keeps a layered layout:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (Post Request Handler)   │  ← existence / ownership checks
    ├─────────────────────────────────────┤
    │  Repositories (Persistence Gateway) │  ← queries, staged writes, commit
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Identity extraction (`blogapi.auth`) sits beside the routes as a
    FastAPI dependency and hands the services a plain integer user id.
"""

__version__ = "1.0.0"
