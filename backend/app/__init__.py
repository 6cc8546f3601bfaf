"""
Catalog API — Application Package Initializer
===============================================

Layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     Services (CRUD Business Logic)  │  ← Query building, validation, merge
    ├─────────────────────────────────────┤
    │    Models & Schemas (Data)          │  ← Resource definitions + Pydantic
    ├─────────────────────────────────────┤
    │      Database (Document Store)      │  ← Async MongoDB client
    └─────────────────────────────────────┘

Routes receive the store collection through FastAPI dependencies, so
services can be exercised against a mock collection without HTTP or MongoDB.
"""

__version__ = "1.0.0"
