from datetime import date, datetime
from typing import Any, Optional

from sqlalchemy import inspect
from sqlalchemy.orm import Session

from encyclopedia.database import SessionLocal
from encyclopedia.log import get_logger
from encyclopedia.models.audit_log import AuditLog

logger = get_logger(__name__)


def snapshot(row) -> Optional[dict[str, Any]]:
    """
    Column values of an ORM row as a JSON-safe dict.
    """
    if row is None:
        return None

    values: dict[str, Any] = {}
    for attr in inspect(row).mapper.column_attrs:
        value = getattr(row, attr.key)
        if isinstance(value, (datetime, date)):
            value = value.isoformat()
        values[attr.key] = value
    return values


class AuditSink:
    """
    Best-effort change log.

    Writes through its own session so a failed audit write can never touch
    the caller's transaction, and never raises.
    """

    def __init__(self, session_factory=SessionLocal):
        self.session_factory = session_factory

    def record(
        self,
        actor_id: Optional[str],
        table_name: str,
        record_id: int,
        action: str,
        before: Optional[dict] = None,
        after: Optional[dict] = None,
    ) -> None:
        try:
            db = self.session_factory()
            try:
                db.add(AuditLog(
                    actor_id=str(actor_id) if actor_id is not None else None,
                    table_name=table_name,
                    record_id=record_id,
                    action=action,
                    old_values=before,
                    new_values=after,
                ))
                db.commit()
            finally:
                db.close()
        except Exception:
            logger.exception(
                "audit_write_failed",
                table_name=table_name,
                record_id=record_id,
                action=action,
            )


def get_audit_sink() -> AuditSink:
    return AuditSink()


def audit_history(db: Session, table_name: str, record_id: int) -> list[AuditLog]:
    """Entries for one record, newest first."""
    return (
        db.query(AuditLog)
        .filter(
            AuditLog.table_name == table_name,
            AuditLog.record_id == record_id,
        )
        .order_by(AuditLog.created_at.desc(), AuditLog.id.desc())
        .all()
    )
