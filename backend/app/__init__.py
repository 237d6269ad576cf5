"""
AquaGuard Backend — Application Package Initializer
=====================================================

Layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Login, location CRUD, Gemini
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Database handle on app.state
    └─────────────────────────────────────┘

`app.client` talks to the routes over HTTP, the way the browser UI does.
"""

__version__ = "1.0.0"
