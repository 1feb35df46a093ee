from typing import Any, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from encyclopedia.core.audit import AuditSink, snapshot
from encyclopedia.core.relationship_store import delete_edges_touching, edges_touching
from encyclopedia.database import transaction
from encyclopedia.errors import InvalidFamilyMember, NotFound
from encyclopedia.log import get_logger
from encyclopedia.models.article import Article
from encyclopedia.models.article_translation import ArticleTranslation
from encyclopedia.models.family_member import FamilyMember

logger = get_logger(__name__)

EDITABLE_FIELDS = (
    "name",
    "birth_year",
    "death_year",
    "birth_place",
    "occupation",
    "short_bio",
)


def _check_years(birth_year: Optional[int], death_year: Optional[int]):
    if birth_year is not None and death_year is not None and death_year < birth_year:
        raise InvalidFamilyMember("Death year cannot be before birth year")


# ============================================================
# READ
# ============================================================

def get_member(db: Session, member_id: int) -> FamilyMember:
    member = db.query(FamilyMember).filter(FamilyMember.id == member_id).first()
    if not member:
        raise NotFound("Family member not found")
    return member


def list_members(
    db: Session,
    name: Optional[str] = None,
    birth_year: Optional[int] = None,
) -> list[FamilyMember]:
    query = db.query(FamilyMember)

    if name:
        query = query.filter(FamilyMember.name.icontains(name, autoescape=True))
    if birth_year is not None:
        query = query.filter(FamilyMember.birth_year == birth_year)

    return query.order_by(FamilyMember.name.asc()).all()


def search_members(db: Session, term: str) -> list[FamilyMember]:
    """Substring match on name or short biography."""
    term = term.strip()
    return (
        db.query(FamilyMember)
        .filter(
            or_(
                FamilyMember.name.icontains(term, autoescape=True),
                FamilyMember.short_bio.icontains(term, autoescape=True),
            )
        )
        .order_by(FamilyMember.name.asc())
        .all()
    )


def member_relationships(db: Session, member_id: int) -> list[dict[str, Any]]:
    """
    Flat list of everyone connected to the member, in either direction,
    labelled with the stored relationship type.
    """
    edges = edges_touching(db, member_id)

    other_ids = {
        e.related_member_id if e.member_id == member_id else e.member_id
        for e in edges
    }
    others = {
        m.id: m
        for m in db.query(FamilyMember).filter(FamilyMember.id.in_(other_ids)).all()
    } if other_ids else {}

    out = []
    for e in edges:
        other_id = e.related_member_id if e.member_id == member_id else e.member_id
        other = others.get(other_id)
        if not other:
            continue
        out.append({
            "relationship_id": e.id,
            "id": other.id,
            "name": other.name,
            "relationship_type": e.relationship_type,
        })
    return out


# ============================================================
# WRITE
# ============================================================

def create_member(
    db: Session,
    data: dict[str, Any],
    actor_id: Optional[str] = None,
    audit: Optional[AuditSink] = None,
) -> FamilyMember:
    fields = {k: data.get(k) for k in EDITABLE_FIELDS}
    _check_years(fields["birth_year"], fields["death_year"])

    member = FamilyMember(**fields)

    with transaction(db):
        db.add(member)
    db.refresh(member)

    logger.info("family_member_created", member_id=member.id, actor_id=actor_id)
    if audit:
        audit.record(actor_id, "family_members", member.id, "INSERT", None, snapshot(member))
    return member


def update_member(
    db: Session,
    member_id: int,
    changes: dict[str, Any],
    actor_id: Optional[str] = None,
    audit: Optional[AuditSink] = None,
) -> FamilyMember:
    member = get_member(db, member_id)
    before = snapshot(member)

    changes = {k: v for k, v in changes.items() if k in EDITABLE_FIELDS}

    # years are checked against the merged record, not just the payload
    _check_years(
        changes.get("birth_year", member.birth_year),
        changes.get("death_year", member.death_year),
    )

    with transaction(db):
        for key, value in changes.items():
            setattr(member, key, value)
    db.refresh(member)

    if audit:
        audit.record(actor_id, "family_members", member.id, "UPDATE", before, snapshot(member))
    return member


def delete_member(
    db: Session,
    member_id: int,
    actor_id: Optional[str] = None,
    audit: Optional[AuditSink] = None,
) -> None:
    """
    Removes the member with its edges, articles and translations as one unit.
    """
    member = get_member(db, member_id)
    before = snapshot(member)

    with transaction(db):
        removed_edges = delete_edges_touching(db, member_id)

        article_ids = db.query(Article.id).filter(Article.family_member_id == member_id)
        db.query(ArticleTranslation).filter(
            ArticleTranslation.article_id.in_(article_ids.scalar_subquery())
        ).delete(synchronize_session=False)
        db.query(Article).filter(
            Article.family_member_id == member_id
        ).delete(synchronize_session=False)

        db.delete(member)

    logger.info(
        "family_member_deleted",
        member_id=member_id,
        removed_edges=removed_edges,
        actor_id=actor_id,
    )
    if audit:
        audit.record(actor_id, "family_members", member_id, "DELETE", before, None)
