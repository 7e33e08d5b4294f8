"""Registration and login endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.auth import get_app_settings
from app.core.config import Settings
from app.core.database import get_db
from app.core.exceptions import NotFoundError, ValidationError
from app.core.security import create_access_token
from app.schemas.auth import AuthResponse, LoginRequest, RegisterRequest
from app.services.users import find_user_by_email, register_user, verify_user_password

logger = logging.getLogger(__name__)
router = APIRouter()


def _issue_token(user_id: int, settings: Settings) -> str:
    return create_access_token(
        user_id,
        settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
        expire_days=settings.JWT_EXPIRE_DAYS,
    )


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> AuthResponse:
    """Create an account and return a token for it."""
    user = register_user(
        db,
        body.username,
        body.email,
        body.password,
        rounds=settings.BCRYPT_ROUNDS,
    )
    return AuthResponse(
        message="User registered successfully",
        token=_issue_token(user.id, settings),
    )


@router.post("/login", response_model=AuthResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> AuthResponse:
    """
    Authenticate with email and password; returns a JWT.
    Include the token in the Authorization header as: Bearer <token>
    """
    user = find_user_by_email(db, body.email)
    if user is None:
        logger.info("Login failed", extra={"reason": "unknown_email"})
        raise NotFoundError("User not found")
    if not verify_user_password(user, body.password):
        logger.info("Login failed", extra={"reason": "bad_password", "user_id": user.id})
        raise ValidationError("Invalid credentials")
    return AuthResponse(message="Login successful", token=_issue_token(user.id, settings))
