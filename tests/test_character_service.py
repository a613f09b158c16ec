"""Character service tests."""

import uuid
from unittest.mock import patch

import pytest
from pydantic import ValidationError
from sqlalchemy.exc import OperationalError

from src.exceptions import InternalError, NotFoundError
from src.models.character import Character
from src.schemas.character import CharacterCreate, CharacterUpdate

ABILITY_SCORES = (
    "strength",
    "dexterity",
    "constitution",
    "intelligence",
    "wisdom",
    "charisma",
)


@pytest.fixture
def owner(auth_service):
    user, _ = auth_service.register("Owner", "owner@example.com", "ownerpass")
    return user


@pytest.fixture
def stranger(auth_service):
    user, _ = auth_service.register("Stranger", "stranger@example.com", "strangerpass")
    return user


@pytest.fixture
def create_data(character_payload):
    return CharacterCreate(**character_payload, max_hp=40, current_hp=32, armor_class=16)


def test_create_binds_owner(character_service, owner, create_data):
    """Test the owner is bound at creation."""
    character = character_service.create_character(owner.id, create_data)

    assert character.user_id == owner.id
    assert character.character_class == "Ranger"
    assert character.max_hp == 40
    assert character.created_at is not None


def test_get_foreign_character_not_found(character_service, owner, stranger, create_data):
    """Test ownership mismatch looks exactly like absence."""
    character = character_service.create_character(owner.id, create_data)

    with pytest.raises(NotFoundError) as foreign:
        character_service.get_character(character.id, stranger.id)
    with pytest.raises(NotFoundError) as missing:
        character_service.get_character(uuid.uuid4(), owner.id)

    assert foreign.value.message == missing.value.message


def test_list_only_owner(character_service, owner, stranger, create_data):
    """Test listing never crosses owners."""
    mine = character_service.create_character(owner.id, create_data)
    character_service.create_character(stranger.id, create_data)

    assert [c.id for c in character_service.list_characters(owner.id)] == [mine.id]


def test_update_merges_only_present_fields(character_service, owner, create_data):
    """Test fields missing from the update keep their stored values."""
    character = character_service.create_character(owner.id, create_data)
    before = {name: getattr(character, name) for name in ABILITY_SCORES}
    created_at = character.created_at

    updated = character_service.update_character(
        character.id, owner.id, CharacterUpdate(level=6, current_hp=12)
    )

    assert updated.level == 6
    assert updated.current_hp == 12
    assert updated.max_hp == 40
    assert updated.armor_class == 16
    assert updated.name == "Aragorn"
    assert {name: getattr(updated, name) for name in ABILITY_SCORES} == before
    assert updated.created_at == created_at
    assert updated.updated_at >= created_at


def test_update_does_not_infer_absence_from_zero(character_service, owner, create_data):
    """Test an explicit zero is applied rather than treated as unset."""
    character = character_service.create_character(owner.id, create_data)

    updated = character_service.update_character(
        character.id, owner.id, CharacterUpdate(current_hp=0)
    )
    assert updated.current_hp == 0


def test_update_foreign_character_not_found(character_service, owner, stranger, create_data):
    """Test a stranger cannot update the record."""
    character = character_service.create_character(owner.id, create_data)

    with pytest.raises(NotFoundError):
        character_service.update_character(character.id, stranger.id, CharacterUpdate(level=20))
    assert character_service.get_character(character.id, owner.id).level == 5


def test_last_writer_wins(character_service, owner, create_data):
    """Test sequential updates to the same field keep the latest value."""
    character = character_service.create_character(owner.id, create_data)

    character_service.update_character(character.id, owner.id, CharacterUpdate(notes="first"))
    character_service.update_character(character.id, owner.id, CharacterUpdate(notes="second"))

    assert character_service.get_character(character.id, owner.id).notes == "second"


def test_delete(character_service, owner, stranger, create_data, db):
    """Test delete is scoped to the owner and removes the row."""
    character_id = character_service.create_character(owner.id, create_data).id

    with pytest.raises(NotFoundError):
        character_service.delete_character(character_id, stranger.id)

    character_service.delete_character(character_id, owner.id)
    assert db.query(Character).count() == 0

    with pytest.raises(NotFoundError):
        character_service.get_character(character_id, owner.id)
    with pytest.raises(NotFoundError):
        character_service.delete_character(character_id, owner.id)


def test_update_store_failure_is_internal(character_service, owner, create_data, db):
    """Test a failed commit surfaces as an internal error."""
    character = character_service.create_character(owner.id, create_data)

    failure = OperationalError("UPDATE", {}, Exception("deadlock"))
    with patch.object(db, "commit", side_effect=failure):
        with pytest.raises(InternalError):
            character_service.update_character(character.id, owner.id, CharacterUpdate(level=7))


def test_update_schema_tracks_presence():
    """Test the update schema distinguishes unset from explicit null."""
    assert CharacterUpdate().changes() == {}
    assert CharacterUpdate(notes=None).changes() == {"notes": None}
    assert CharacterUpdate.model_validate({"class": "Bard"}).changes() == {
        "character_class": "Bard"
    }

    with pytest.raises(ValidationError):
        CharacterUpdate(level=None)
    with pytest.raises(ValidationError):
        CharacterUpdate(strength=21)
