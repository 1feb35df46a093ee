from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from encyclopedia.auth import Actor, require_admin
from encyclopedia.core.audit import audit_history
from encyclopedia.database import get_db
from encyclopedia.schemas.article_schema import AuditEntryOut

router = APIRouter(prefix="/audit", tags=["Audit"])


@router.get("/{table_name}/{record_id}", response_model=list[AuditEntryOut])
def get_audit_history(
    table_name: str,
    record_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_admin),
):
    return audit_history(db, table_name, record_id)
