"""FastAPI dependencies for authentication, services and database."""

import uuid
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from src.config import get_settings
from src.database import get_db
from src.exceptions import NotFoundError, UnauthorizedError
from src.models.user import User
from src.services.auth import AuthService
from src.services.character_service import CharacterService
from src.services.tokens import TokenService

# Missing credentials are turned into a 401 below rather than FastAPI's default
security = HTTPBearer(auto_error=False)


def get_token_service() -> TokenService:
    """Get token service configured with the process-wide secret."""
    return TokenService.from_settings(get_settings())


def get_auth_service(
    db: Annotated[Session, Depends(get_db)],
    token_service: Annotated[TokenService, Depends(get_token_service)],
) -> AuthService:
    """Get auth service with dependencies."""
    return AuthService(db, token_service)


def get_character_service(
    db: Annotated[Session, Depends(get_db)],
) -> CharacterService:
    """Get character service with dependencies."""
    return CharacterService(db)


def get_current_user_id(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    token_service: Annotated[TokenService, Depends(get_token_service)],
) -> uuid.UUID:
    """Verify the bearer token and return its subject user id."""
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return token_service.verify(credentials.credentials)


def get_current_user(
    user_id: Annotated[uuid.UUID, Depends(get_current_user_id)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> User:
    """Resolve the authenticated user from a verified token."""
    try:
        return auth_service.get_by_id(user_id)
    except NotFoundError:
        raise UnauthorizedError("User not found") from None
