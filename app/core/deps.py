"""
FastAPI dependencies for authentication and service construction.

These dependencies are used to protect endpoints and hand each request
its own services bound to the request's database session.
"""

from typing import Optional
from fastapi import Depends, Header
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.security import verify_authorization_header
from app.services.auth_service import AuthService
from app.services.job_service import JobService


def get_current_user_id(
    authorization: Optional[str] = Header(None)
) -> int:
    """
    Resolve the calling user's id from the Authorization header.

    Runs before every job endpoint. Only the token's signature and expiry
    are checked; the database is not consulted.

    Raises:
        AuthError (401): If the header is missing, malformed, invalid or expired
    """
    return verify_authorization_header(authorization)


def get_auth_service(db: Session = Depends(get_db)) -> AuthService:
    return AuthService(db)


def get_job_service(db: Session = Depends(get_db)) -> JobService:
    return JobService(db)
