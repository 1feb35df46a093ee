from datetime import datetime

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from encyclopedia.database import Base


class Article(Base):
    """
    The canonical article for a family member in one language.
    """

    __tablename__ = "articles"

    id = Column(Integer, primary_key=True, index=True)

    family_member_id = Column(
        Integer,
        ForeignKey("family_members.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    language = Column(String(10), nullable=False, default="sr")

    # rich text (HTML)
    content = Column(Text, nullable=True)

    created_by = Column(String, nullable=True)
    updated_by = Column(String, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # -------------------------------------------------------
    # RELATIONSHIPS
    # -------------------------------------------------------
    family_member = relationship("FamilyMember", back_populates="articles")

    translations = relationship(
        "ArticleTranslation",
        back_populates="article",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ArticleTranslation.language",
    )

    __table_args__ = (
        UniqueConstraint(
            "family_member_id",
            "language",
            name="uq_articles_member_language",
        ),
    )
