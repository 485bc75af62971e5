"""
Wardrobe Backend — Application Package Initializer
===================================================

What: Marks the `wardrobe` directory as a Python package.
Why:  Enables module imports like `from wardrobe.config import Settings`.
Who:  Used by uvicorn (`uvicorn wardrobe.main:app`) and pytest.

Architecture Note:
    The backend keeps the same layered split for every resource:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns, status codes, headers
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← validation, existence checks, conflicts
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← pooled async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Resources: garments (binary content), comments, labels,
    garment↔label associations and users.
"""

__version__ = "1.0.0"
