"""
User model.

The Users table is the whole schema:

    Users(id INTEGER PRIMARY KEY AUTOINCREMENT, name TEXT, age INTEGER)

AUTOINCREMENT keeps ids strictly increasing and stops SQLite from handing a
deleted row's id to a new row.
"""

from typing import Optional

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from usersdb.core.constants import USERS_TABLE
from usersdb.models.base import Base, SerializationMixin


class User(SerializationMixin, Base):
    """
    A stored user.

    Attributes:
        id: Store-assigned primary key
        name: Free text, may be empty or NULL
        age: Integer, no range validation

    Example:
        user = User(name="Alice", age=30)
        db.add(user)
        db.commit()
    """

    __tablename__ = USERS_TABLE
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    name: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    age: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, name={self.name!r}, age={self.age})>"

    def __str__(self) -> str:
        return f"#{self.id} {self.name} ({self.age})"
