from datetime import datetime

from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    Boolean,
    DateTime,
    ForeignKey,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from encyclopedia.database import Base


class ArticleTranslation(Base):
    """
    A secondary language variant of a canonical article.
    Machine output and human edits share the table, told apart by is_auto_translated.
    """

    __tablename__ = "article_translations"

    id = Column(Integer, primary_key=True, index=True)

    article_id = Column(
        Integer,
        ForeignKey("articles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    language = Column(String(10), nullable=False)

    title = Column(String(255), nullable=True)
    content = Column(Text, nullable=True)

    is_auto_translated = Column(Boolean, default=False, nullable=False)

    created_by = Column(String, nullable=True)
    updated_by = Column(String, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    article = relationship("Article", back_populates="translations")

    __table_args__ = (
        UniqueConstraint(
            "article_id",
            "language",
            name="uq_article_translations_article_language",
        ),
    )
