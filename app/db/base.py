"""SQLAlchemy Base class for all models."""
from app.models.base.base_model import Base


def import_models():
    """Import all models to register them with SQLAlchemy."""
    from app.models import transport  # noqa: F401


import_models()
