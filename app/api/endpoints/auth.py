"""
Authentication endpoints for user registration and login.

Implements JWT-based stateless authentication:
- POST /register: Create new user account
- POST /login: Authenticate and receive a JWT access token
"""

from fastapi import APIRouter, Depends

from app.core.deps import get_auth_service
from app.schemas.user import TokenResponse, UserLoginRequest, UserRegisterRequest, UserResponse
from app.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register", status_code=201, response_model=UserResponse)
def register(
    request: UserRegisterRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Register a new user account.

    Returns the new user's id and email. The password hash is never returned.
    Responds 409 if the email is already registered.
    """
    return auth_service.register(request.email, request.password)


@router.post("/login", response_model=TokenResponse)
def login(
    request: UserLoginRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Authenticate user and return a JWT access token valid for one hour.

    Unknown email and wrong password both return 401 "Invalid credentials".
    """
    token = auth_service.login(request.email, request.password)
    return TokenResponse(token=token)
