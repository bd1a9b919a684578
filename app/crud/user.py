"""
CRUD operations for User model.
"""

from typing import Optional
from sqlalchemy.orm import Session
from app.models.user import User


def get_by_email(db: Session, email: str) -> Optional[User]:
    """Look up a user by email (exact, case-sensitive match)."""
    return db.query(User).filter(User.email == email).first()


def create(db: Session, email: str, hashed_password: str) -> User:
    """
    Persist a new user.

    Raises:
        sqlalchemy.exc.IntegrityError: If the email is already taken
    """
    db_user = User(email=email, hashed_password=hashed_password)

    db.add(db_user)
    db.commit()
    db.refresh(db_user)

    return db_user
