"""
Base repositories package.

Provides the generic repository with CRUD, criteria queries and
transaction handling.
"""

from app.repositories.base.base_repository import BaseRepository, ModelType

__all__ = [
    "BaseRepository",
    "ModelType",
]
