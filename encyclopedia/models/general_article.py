from datetime import datetime

from sqlalchemy import Column, Integer, String, Text, DateTime

from encyclopedia.database import Base


class GeneralArticle(Base):
    """
    A standalone article (history, places, traditions) not tied to a family member.
    """

    __tablename__ = "general_articles"

    id = Column(Integer, primary_key=True, index=True)

    title = Column(String(255), nullable=False, index=True)
    category = Column(String(100), nullable=True, index=True)

    # rich text (HTML)
    content = Column(Text, nullable=False)

    created_by = Column(String, nullable=True)
    updated_by = Column(String, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
