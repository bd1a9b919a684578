"""
Security utilities for JWT authentication and password hashing.

Implements stateless JWT authentication using HS256 with a server-held secret.
Passwords are hashed using bcrypt for security.

Token verification is a pure function: it checks the signature and expiry
and returns the user id carried in the token, without touching the database.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext
from passlib.exc import PasswordValueError
from app.core.config import settings
from app.core.exceptions import AuthError

BEARER_PREFIX = "Bearer "

# Password hashing context (bcrypt)
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a hashed password.

    A password bcrypt refuses to process (e.g. one containing NUL bytes)
    simply does not match.
    """
    # Bcrypt has a 72-byte limit - truncate if necessary
    password_bytes = plain_password.encode('utf-8')[:72]
    try:
        return pwd_context.verify(password_bytes, hashed_password)
    except PasswordValueError:
        return False


def dummy_verify_password() -> None:
    """
    Spend the same time as a real verification.

    Called when a login names an unknown email, so that response timing does
    not reveal whether the account exists.
    """
    pwd_context.dummy_verify()


def get_password_hash(password: str) -> str:
    """
    Hash a password using bcrypt.

    Note: Bcrypt has a 72-byte limit. Passwords longer than 72 bytes
    are automatically truncated to comply with this limitation.
    """
    # Bcrypt has a 72-byte limit - truncate if necessary
    password_bytes = password.encode('utf-8')[:72]
    return pwd_context.hash(password_bytes)


def create_access_token(user_id: int, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a JWT access token.

    Args:
        user_id: Id of the authenticated user, stored as the only claim besides "exp"
        expires_delta: Optional expiration time delta (default: ACCESS_TOKEN_EXPIRE_MINUTES)

    Returns:
        Encoded JWT token as a string
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode = {
        "userId": user_id,
        "exp": datetime.now(timezone.utc) + expires_delta,
    }
    return jwt.encode(to_encode, settings.JWT_SECRET, algorithm=settings.ALGORITHM)


def verify_token(token: str) -> int:
    """
    Decode and validate a JWT token.

    Args:
        token: The raw JWT (without the "Bearer " prefix)

    Returns:
        The user id encoded in the token

    Raises:
        AuthError: If the signature is invalid, the token has expired,
            or the userId claim is missing or malformed
    """
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.ALGORITHM])
    except ExpiredSignatureError:
        raise AuthError("Token expired")
    except JWTError:
        raise AuthError("Invalid token")

    user_id = payload.get("userId")
    # bool is an int subclass, so exclude it explicitly
    if not isinstance(user_id, int) or isinstance(user_id, bool):
        raise AuthError("Invalid token")

    return user_id


def verify_authorization_header(header_value: Optional[str]) -> int:
    """
    Validate a raw Authorization header value and resolve the caller's user id.

    Raises:
        AuthError: If the header is absent, is not a Bearer credential,
            or carries a token that fails verification
    """
    if not header_value or not header_value.startswith(BEARER_PREFIX):
        raise AuthError("No token provided")

    token = header_value[len(BEARER_PREFIX):].strip()
    if not token:
        raise AuthError("No token provided")

    return verify_token(token)
