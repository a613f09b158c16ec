"""Pydantic schemas for API requests and responses."""

from src.schemas.auth import AuthResponse, UserLogin, UserRegister, UserResponse
from src.schemas.character import (
    CharacterCreate,
    CharacterResponse,
    CharacterUpdate,
    MessageResponse,
)

__all__ = [
    "UserRegister",
    "UserLogin",
    "UserResponse",
    "AuthResponse",
    "CharacterCreate",
    "CharacterUpdate",
    "CharacterResponse",
    "MessageResponse",
]
