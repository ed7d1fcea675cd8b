"""
Notekeeper.

- api/: FastAPI routers (notes, auth, system, health)
- core/: Configuration, logging, database, security, error handling
- models/: SQLAlchemy models
- repositories/: Data access layer
- schemas/: Pydantic request/response schemas
- services/: Note access policy and business rules
"""

__version__ = "1.0.0"
