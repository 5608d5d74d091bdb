"""Authentication endpoints for the Loop API."""

from fastapi import APIRouter, status

from loop_forum.api.v1.dependencies import CurrentUserDep, SessionDep
from loop_forum.core.security import create_access_token
from loop_forum.schemas.user import (
    AuthResponse,
    LoginRequest,
    SignupRequest,
    UserResponse,
    VerifyResponse,
)
from loop_forum.services.users import authenticate, register_user

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def signup(body: SignupRequest, db: SessionDep) -> AuthResponse:
    """Register a new account and return an access token for it."""
    user = register_user(db, body.username, body.email, body.password)
    return AuthResponse(
        token=create_access_token(user.id, user.username),
        user=UserResponse.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
async def login(body: LoginRequest, db: SessionDep) -> AuthResponse:
    """Exchange email and password for an access token."""
    user = authenticate(db, body.email, body.password)
    return AuthResponse(
        token=create_access_token(user.id, user.username),
        user=UserResponse.model_validate(user),
    )


@router.get("/verify", response_model=VerifyResponse)
async def verify(current_user: CurrentUserDep) -> VerifyResponse:
    """Return the user the bearer token belongs to."""
    return VerifyResponse(user=UserResponse.model_validate(current_user))
