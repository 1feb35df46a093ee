from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, JSON, Index

from encyclopedia.database import Base


class AuditLog(Base):
    """
    Append-only change record. Written after the primary change commits.
    """

    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True)

    actor_id = Column(String, nullable=True, index=True)

    table_name = Column(String(100), nullable=False)
    record_id = Column(Integer, nullable=False)

    # INSERT | UPDATE | DELETE
    action = Column(String(50), nullable=False)

    old_values = Column(JSON, nullable=True)
    new_values = Column(JSON, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, index=True)

    __table_args__ = (
        Index("ix_audit_logs_table_record", "table_name", "record_id"),
    )
