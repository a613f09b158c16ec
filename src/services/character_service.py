"""Character service for ownership-scoped CRUD over character sheets."""

import logging
import uuid
from datetime import UTC, datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.exceptions import InternalError, NotFoundError
from src.models.character import Character
from src.schemas.character import CharacterCreate, CharacterUpdate

logger = logging.getLogger(__name__)

CHARACTER_NOT_FOUND = "Character not found"


class CharacterService:
    """Service for character sheet operations.

    Every query is filtered on both the character id and the owner id, so a
    character belonging to someone else behaves exactly like a missing one.
    """

    def __init__(self, db: Session):
        self.db = db

    def list_characters(self, owner_id: uuid.UUID) -> list[Character]:
        """List the owner's characters, newest first."""
        try:
            return (
                self.db.query(Character)
                .filter(Character.user_id == owner_id)
                .order_by(Character.created_at.desc(), Character.id.desc())
                .all()
            )
        except SQLAlchemyError as e:
            logger.error(f"Failed to list characters for user {owner_id}: {e}")
            raise InternalError() from e

    def get_character(self, character_id: uuid.UUID, owner_id: uuid.UUID) -> Character:
        """Get one character owned by the given user."""
        try:
            character = (
                self.db.query(Character)
                .filter(
                    Character.id == character_id,
                    Character.user_id == owner_id,
                )
                .first()
            )
        except SQLAlchemyError as e:
            logger.error(f"Failed to get character {character_id}: {e}")
            raise InternalError() from e

        if character is None:
            raise NotFoundError(CHARACTER_NOT_FOUND)
        return character

    def create_character(self, owner_id: uuid.UUID, data: CharacterCreate) -> Character:
        """Create a character bound to its owner."""
        character = Character(user_id=owner_id, **data.model_dump())
        self.db.add(character)
        self._commit(f"create character for user {owner_id}")
        self.db.refresh(character)

        logger.info(f"Created character {character.id} for user {owner_id}")
        return character

    def update_character(
        self,
        character_id: uuid.UUID,
        owner_id: uuid.UUID,
        data: CharacterUpdate,
    ) -> Character:
        """Merge the explicitly supplied fields into an owned character.

        No version check is made: concurrent updates are last-writer-wins.
        """
        character = self.get_character(character_id, owner_id)

        changes = data.changes()
        for field_name, value in changes.items():
            setattr(character, field_name, value)
        character.updated_at = datetime.now(UTC)

        self._commit(f"update character {character_id}")
        self.db.refresh(character)

        logger.info(f"Updated character {character_id}: {sorted(changes)}")
        return character

    def delete_character(self, character_id: uuid.UUID, owner_id: uuid.UUID) -> None:
        """Delete an owned character; nothing deleted means not found."""
        try:
            deleted = (
                self.db.query(Character)
                .filter(
                    Character.id == character_id,
                    Character.user_id == owner_id,
                )
                .delete(synchronize_session=False)
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to delete character {character_id}: {e}")
            raise InternalError() from e

        if deleted == 0:
            raise NotFoundError(CHARACTER_NOT_FOUND)
        logger.info(f"Deleted character {character_id}")

    def _commit(self, action: str) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to {action}: {e}")
            raise InternalError() from e
