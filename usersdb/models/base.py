"""
Base Model
==========

Provides common functionality for all database models.
"""

from typing import Any, Dict

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass


class SerializationMixin:
    """Mixin that adds to_dict() serialization method."""

    def to_dict(self, exclude: set = None) -> Dict[str, Any]:
        """Convert model instance to dictionary."""
        exclude = exclude or set()
        return {
            column.name: getattr(self, column.key)
            for column in self.__table__.columns
            if column.name not in exclude
        }


def create_all_tables(engine) -> None:
    """Create every table that does not exist yet."""
    Base.metadata.create_all(bind=engine)


def drop_all_tables(engine) -> None:
    """Drop every table known to the metadata."""
    Base.metadata.drop_all(bind=engine)
