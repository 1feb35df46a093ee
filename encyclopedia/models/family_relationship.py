from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, CheckConstraint

from encyclopedia.database import Base


class FamilyRelationship(Base):
    """
    One asserted edge: "related_member is member's <relationship_type>".

    Stored once. The inverse direction is never written as a second row.
    """

    __tablename__ = "family_relationships"

    id = Column(Integer, primary_key=True)

    # ------------------------------------
    # The two endpoints
    # ------------------------------------
    member_id = Column(
        Integer,
        ForeignKey("family_members.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    related_member_id = Column(
        Integer,
        ForeignKey("family_members.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # ------------------------------------
    # Relationship semantics
    # ------------------------------------
    # one of RelationshipType values
    relationship_type = Column(String(50), nullable=False)

    # ------------------------------------
    # Metadata
    # ------------------------------------
    created_by = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    __table_args__ = (
        CheckConstraint(
            "member_id != related_member_id",
            name="ck_family_relationships_not_self",
        ),
    )
