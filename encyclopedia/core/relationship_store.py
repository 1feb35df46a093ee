from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from encyclopedia.core.audit import AuditSink, snapshot
from encyclopedia.core.relationship_types import RelationshipType
from encyclopedia.database import transaction
from encyclopedia.errors import InvalidRelationship, NotFound
from encyclopedia.log import get_logger
from encyclopedia.models.family_member import FamilyMember
from encyclopedia.models.family_relationship import FamilyRelationship

logger = get_logger(__name__)


def _touching(member_id: int):
    return or_(
        FamilyRelationship.member_id == member_id,
        FamilyRelationship.related_member_id == member_id,
    )


def create_edge(
    db: Session,
    member_id: int,
    related_member_id: int,
    relationship_type: RelationshipType | str,
    actor_id: Optional[str] = None,
    audit: Optional[AuditSink] = None,
) -> FamilyRelationship:
    """
    Store "related_member is member's <relationship_type>".

    Duplicate edges are accepted as-is.
    """
    if member_id == related_member_id:
        raise InvalidRelationship("Cannot relate a family member to themselves")

    found = (
        db.query(FamilyMember.id)
        .filter(FamilyMember.id.in_([member_id, related_member_id]))
        .count()
    )
    if found != 2:
        raise NotFound("One or both family members not found")

    edge = FamilyRelationship(
        member_id=member_id,
        related_member_id=related_member_id,
        relationship_type=RelationshipType.parse(relationship_type).value,
        created_by=str(actor_id) if actor_id is not None else None,
    )

    with transaction(db):
        db.add(edge)
    db.refresh(edge)

    logger.info(
        "relationship_created",
        relationship_id=edge.id,
        member_id=member_id,
        related_member_id=related_member_id,
        relationship_type=edge.relationship_type,
    )
    if audit:
        audit.record(actor_id, "family_relationships", edge.id, "INSERT", None, snapshot(edge))
    return edge


def edges_touching(db: Session, member_id: int) -> list[FamilyRelationship]:
    """Every edge with the member on either end, oldest first."""
    return (
        db.query(FamilyRelationship)
        .filter(_touching(member_id))
        .order_by(FamilyRelationship.id.asc())
        .all()
    )


def delete_edges_touching(db: Session, member_id: int) -> int:
    """
    Remove every edge touching the member. Safe to repeat.

    Does not commit: runs inside the caller's transaction.
    """
    return (
        db.query(FamilyRelationship)
        .filter(_touching(member_id))
        .delete(synchronize_session=False)
    )


def delete_edge(
    db: Session,
    member_id: int,
    relationship_id: int,
    actor_id: Optional[str] = None,
    audit: Optional[AuditSink] = None,
) -> None:
    edge = (
        db.query(FamilyRelationship)
        .filter(
            FamilyRelationship.id == relationship_id,
            _touching(member_id),
        )
        .first()
    )
    if not edge:
        raise NotFound("Relationship not found")

    before = snapshot(edge)

    with transaction(db):
        db.delete(edge)

    if audit:
        audit.record(actor_id, "family_relationships", relationship_id, "DELETE", before, None)
