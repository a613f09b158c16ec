"""Character sheet API endpoints."""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_character_service, get_current_user_id
from src.schemas.character import (
    CharacterCreate,
    CharacterResponse,
    CharacterUpdate,
    MessageResponse,
)
from src.services.character_service import CharacterService

router = APIRouter(prefix="/api/characters", tags=["characters"])


@router.get("", response_model=list[CharacterResponse])
def list_characters(
    user_id: Annotated[uuid.UUID, Depends(get_current_user_id)],
    service: Annotated[CharacterService, Depends(get_character_service)],
):
    """List the current user's characters, newest first."""
    return service.list_characters(user_id)


@router.post("", response_model=CharacterResponse, status_code=status.HTTP_201_CREATED)
def create_character(
    character_data: CharacterCreate,
    user_id: Annotated[uuid.UUID, Depends(get_current_user_id)],
    service: Annotated[CharacterService, Depends(get_character_service)],
):
    """Create a character owned by the current user."""
    return service.create_character(user_id, character_data)


@router.get("/{character_id}", response_model=CharacterResponse)
def get_character(
    character_id: uuid.UUID,
    user_id: Annotated[uuid.UUID, Depends(get_current_user_id)],
    service: Annotated[CharacterService, Depends(get_character_service)],
):
    """Get one of the current user's characters."""
    return service.get_character(character_id, user_id)


@router.put("/{character_id}", response_model=CharacterResponse)
def update_character(
    character_id: uuid.UUID,
    character_data: CharacterUpdate,
    user_id: Annotated[uuid.UUID, Depends(get_current_user_id)],
    service: Annotated[CharacterService, Depends(get_character_service)],
):
    """Update only the fields present in the request body."""
    return service.update_character(character_id, user_id, character_data)


@router.delete("/{character_id}", response_model=MessageResponse)
def delete_character(
    character_id: uuid.UUID,
    user_id: Annotated[uuid.UUID, Depends(get_current_user_id)],
    service: Annotated[CharacterService, Depends(get_character_service)],
):
    """Delete one of the current user's characters."""
    service.delete_character(character_id, user_id)
    return MessageResponse(message="Character deleted successfully")
