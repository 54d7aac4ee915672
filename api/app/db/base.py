"""Import all models here for Alembic autogenerate."""

from app.db.base_class import Base
from app.models import profile, recommendation, record  # noqa: F401

__all__ = ["Base"]
