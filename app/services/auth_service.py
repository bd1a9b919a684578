"""
Registration and login.

Passwords are stored only as bcrypt hashes. Login failures never reveal
whether the email or the password was wrong.
"""

import logging
from typing import Optional
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import AuthError, ConflictError, InternalError, ValidationError
from app.core.security import create_access_token, dummy_verify_password, get_password_hash, verify_password
from app.crud import user as user_crud
from app.models.user import User

logger = logging.getLogger(__name__)


class AuthService:
    """Auth operations bound to one database session."""

    def __init__(self, db: Session):
        self.db = db

    def register(self, email: Optional[str], password: Optional[str]) -> User:
        """
        Create a new user account.

        Raises:
            ValidationError: If email or password is missing
            ConflictError: If the email is already registered
            InternalError: On any other database failure
        """
        if not email or not password:
            raise ValidationError("Email and password required")

        # bcrypt cannot hash NUL bytes
        if "\x00" in password:
            raise ValidationError("Password cannot contain null characters")

        try:
            if user_crud.get_by_email(self.db, email):
                raise ConflictError("User already exists")

            user = user_crud.create(self.db, email, get_password_hash(password))
        except IntegrityError:
            # Lost a race with a concurrent registration for the same email
            self.db.rollback()
            raise ConflictError("User already exists")
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception(f"Database error registering {email}")
            raise InternalError()

        logger.info(f"New user registered: {user.email} (id: {user.id})")
        return user

    def login(self, email: Optional[str], password: Optional[str]) -> str:
        """
        Authenticate a user and issue an access token.

        Returns:
            Signed JWT carrying the user's id, valid for ACCESS_TOKEN_EXPIRE_MINUTES

        Raises:
            ValidationError: If email or password is missing
            AuthError: If the email is unknown or the password is wrong
            InternalError: On database failure
        """
        if not email or not password:
            raise ValidationError("Email and password required")

        try:
            user = user_crud.get_by_email(self.db, email)
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception(f"Database error during login for {email}")
            raise InternalError()

        if user is None:
            dummy_verify_password()
            logger.info(f"Failed login for {email}")
            raise AuthError("Invalid credentials")

        if not verify_password(password, user.hashed_password):
            logger.info(f"Failed login for {email}")
            raise AuthError("Invalid credentials")

        logger.info(f"User logged in: {user.email}")
        return create_access_token(user.id)
