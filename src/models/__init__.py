"""SQLAlchemy models."""

from src.models.character import Character
from src.models.user import User

__all__ = [
    "User",
    "Character",
]
