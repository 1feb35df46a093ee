from datetime import datetime

from sqlalchemy import Column, Integer, String, Text, DateTime, CheckConstraint
from sqlalchemy.orm import relationship

from encyclopedia.database import Base


class FamilyMember(Base):
    """
    A person in the encyclopedia.
    Owns its relationship edges and its articles.
    """

    __tablename__ = "family_members"

    id = Column(Integer, primary_key=True, index=True)

    name = Column(String(255), nullable=False, index=True)

    birth_year = Column(Integer, nullable=True)
    death_year = Column(Integer, nullable=True)

    birth_place = Column(String(255), nullable=True)
    occupation = Column(String(255), nullable=True)
    short_bio = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # -------------------------------------------------------
    # RELATIONSHIPS
    # -------------------------------------------------------
    articles = relationship(
        "Article",
        back_populates="family_member",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        CheckConstraint(
            "death_year IS NULL OR birth_year IS NULL OR death_year >= birth_year",
            name="ck_family_members_death_after_birth",
        ),
    )
