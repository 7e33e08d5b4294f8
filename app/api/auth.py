"""Auth gateway: bearer-token dependency that resolves the calling user."""

import logging
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.config import Settings
from app.core.database import get_db
from app.core.exceptions import AuthError, InvalidTokenError
from app.core.security import decode_access_token
from app.schemas.auth import CurrentUser
from app.services.users import find_user_by_id

logger = logging.getLogger(__name__)
security = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    """Dependency: settings the app was built with."""
    return request.app.state.settings


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> CurrentUser:
    """Dependency: require a valid Bearer JWT and return the current user. Raises 401 otherwise."""
    if credentials is None:
        raise AuthError("No token, authorization denied")
    try:
        user_id = decode_access_token(
            credentials.credentials,
            settings.JWT_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
        )
    except InvalidTokenError:
        logger.debug("Rejected bearer token")
        raise
    user = find_user_by_id(db, user_id)
    if user is None:
        # Token outlived its user
        raise AuthError("User not found")
    return CurrentUser.model_validate(user)
