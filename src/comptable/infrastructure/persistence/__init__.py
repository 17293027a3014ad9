"""Persistence layer."""

from comptable.infrastructure.persistence.database import Database
from comptable.infrastructure.persistence.models import Base

__all__ = ["Base", "Database"]
