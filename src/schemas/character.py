"""Character sheet schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator

# "class" on the wire, character_class in Python
CLASS_FIELD_ALIASES = {
    "validation_alias": AliasChoices("class", "character_class"),
    "serialization_alias": "class",
}


class CharacterCreate(BaseModel):
    """Create a character sheet. Every core field is required."""

    name: str = Field(..., min_length=1, max_length=255)
    race: str = Field(..., min_length=1, max_length=100)
    character_class: str = Field(..., min_length=1, max_length=100, **CLASS_FIELD_ALIASES)
    level: int = Field(..., ge=1, le=20)
    background: str = Field(..., min_length=1, max_length=100)

    strength: int = Field(..., ge=1, le=20)
    dexterity: int = Field(..., ge=1, le=20)
    constitution: int = Field(..., ge=1, le=20)
    intelligence: int = Field(..., ge=1, le=20)
    wisdom: int = Field(..., ge=1, le=20)
    charisma: int = Field(..., ge=1, le=20)

    max_hp: int | None = Field(None, ge=0)
    current_hp: int | None = Field(None, ge=0)
    armor_class: int | None = Field(None, ge=0)
    notes: str | None = None


class CharacterUpdate(BaseModel):
    """Partial update of a character sheet.

    Only fields present in the request body are applied; ``model_fields_set``
    carries that presence. Sending ``null`` clears an optional combat stat or
    the notes, but is rejected for the core fields.
    """

    name: str | None = Field(None, min_length=1, max_length=255)
    race: str | None = Field(None, min_length=1, max_length=100)
    character_class: str | None = Field(
        None, min_length=1, max_length=100, **CLASS_FIELD_ALIASES
    )
    level: int | None = Field(None, ge=1, le=20)
    background: str | None = Field(None, min_length=1, max_length=100)

    strength: int | None = Field(None, ge=1, le=20)
    dexterity: int | None = Field(None, ge=1, le=20)
    constitution: int | None = Field(None, ge=1, le=20)
    intelligence: int | None = Field(None, ge=1, le=20)
    wisdom: int | None = Field(None, ge=1, le=20)
    charisma: int | None = Field(None, ge=1, le=20)

    max_hp: int | None = Field(None, ge=0)
    current_hp: int | None = Field(None, ge=0)
    armor_class: int | None = Field(None, ge=0)
    notes: str | None = None

    @model_validator(mode="after")
    def reject_null_required_fields(self) -> "CharacterUpdate":
        """Core fields may be omitted but never set to null."""
        nullable = {"max_hp", "current_hp", "armor_class", "notes"}
        for field_name in self.model_fields_set - nullable:
            if getattr(self, field_name) is None:
                raise ValueError(f"{field_name} cannot be null")
        return self

    def changes(self) -> dict:
        """Return only the explicitly supplied fields, keyed by attribute name."""
        return self.model_dump(exclude_unset=True)


class CharacterResponse(BaseModel):
    """Character sheet response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    name: str
    race: str
    character_class: str = Field(..., **CLASS_FIELD_ALIASES)
    level: int
    background: str

    strength: int
    dexterity: int
    constitution: int
    intelligence: int
    wisdom: int
    charisma: int

    max_hp: int | None
    current_hp: int | None
    armor_class: int | None
    notes: str | None

    created_at: datetime
    updated_at: datetime


class MessageResponse(BaseModel):
    """Plain confirmation message."""

    message: str
