"""Character sheet model."""

import uuid

from sqlalchemy import Column, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.mixins import TimestampMixin


class Character(Base, TimestampMixin):
    """A character sheet owned by a single user."""

    __tablename__ = "characters"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(String(255), nullable=False)
    race = Column(String(100), nullable=False)
    # "class" is reserved in Python, the column keeps its natural name
    character_class = Column("class", String(100), nullable=False)
    level = Column(Integer, nullable=False, default=1)
    background = Column(String(100), nullable=False)

    # Ability scores
    strength = Column(Integer, nullable=False, default=10)
    dexterity = Column(Integer, nullable=False, default=10)
    constitution = Column(Integer, nullable=False, default=10)
    intelligence = Column(Integer, nullable=False, default=10)
    wisdom = Column(Integer, nullable=False, default=10)
    charisma = Column(Integer, nullable=False, default=10)

    # Combat stats
    max_hp = Column(Integer, nullable=True)
    current_hp = Column(Integer, nullable=True)
    armor_class = Column(Integer, nullable=True)

    notes = Column(Text, nullable=True)

    # Relationships
    user = relationship("User", backref="characters")
