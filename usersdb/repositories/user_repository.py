"""
User repository.

One statement per method, every value passed as a bound parameter. The
repository does not commit and does not catch database errors; the caller
owns the transaction (see usersdb.database.session.session_scope).
"""

from typing import List

from sqlalchemy.orm import Session

from usersdb.models.user import User


class UserRepository:
    """
    Queries against the Users table.

    Example:
        with session_scope(SessionLocal) as db:
            repo = UserRepository(db)
            new_id = repo.insert("Alice", 30)
            users = repo.fetch_all()
    """

    def __init__(self, db: Session):
        self.db = db

    def insert(self, name: str, age: int) -> int:
        """
        Add a user.

        Returns:
            The id the store assigned to the new row
        """
        user = User(name=name, age=age)
        self.db.add(user)
        self.db.flush()  # Get the ID without committing the transaction
        return user.id

    def fetch_all(self) -> List[User]:
        """Every user, oldest first."""
        return self.db.query(User).order_by(User.id).all()

    def update(self, user_id: int, name: str, age: int) -> int:
        """
        Replace name and age of one user.

        Returns:
            Number of rows matched (0 or 1)
        """
        return (
            self.db.query(User)
            .filter(User.id == user_id)
            .update({User.name: name, User.age: age}, synchronize_session=False)
        )

    def delete(self, user_id: int) -> int:
        """
        Remove one user.

        Returns:
            Number of rows removed (0 or 1)
        """
        return (
            self.db.query(User)
            .filter(User.id == user_id)
            .delete(synchronize_session=False)
        )

    def count(self) -> int:
        return self.db.query(User).count()
