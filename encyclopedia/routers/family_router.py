from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from encyclopedia.auth import Actor, require_editor
from encyclopedia.config import settings
from encyclopedia.core import family_members, relationship_store
from encyclopedia.core.audit import AuditSink, get_audit_sink
from encyclopedia.core.tree_classifier import VIEWS, classify
from encyclopedia.database import get_db
from encyclopedia.schemas.family_member_schema import (
    FamilyMemberCreate,
    FamilyMemberDetail,
    FamilyMemberList,
    FamilyMemberOut,
    FamilyMemberUpdate,
    FamilyTreeOut,
    RelationshipCreate,
    RelationshipOut,
)

router = APIRouter(prefix="/family-members", tags=["Family Members"])


# ============================================================
# LIST (optional filters: name, birth_year)
# ============================================================

@router.get("", response_model=FamilyMemberList)
def list_family_members(
    name: Optional[str] = None,
    birth_year: Optional[int] = None,
    db: Session = Depends(get_db),
):
    members = family_members.list_members(db, name=name, birth_year=birth_year)
    return {"count": len(members), "members": members}


# ============================================================
# SEARCH (name or short bio)
# ============================================================

@router.get("/search", response_model=FamilyMemberList)
def search_family_members(
    q: str = "",
    db: Session = Depends(get_db),
):
    if len(q.strip()) < 2:
        raise HTTPException(400, "Search query must be at least 2 characters")

    members = family_members.search_members(db, q)
    return {"count": len(members), "members": members}


# ============================================================
# MEMBER PAGE
# ============================================================

@router.get("/{member_id}", response_model=FamilyMemberDetail)
def get_family_member(
    member_id: int,
    db: Session = Depends(get_db),
):
    member = family_members.get_member(db, member_id)

    out = FamilyMemberOut.model_validate(member).model_dump()
    out["relationships"] = family_members.member_relationships(db, member_id)
    return out


# ============================================================
# TREE (parents / spouse / children / siblings / relatives)
# ============================================================

@router.get("/{member_id}/tree", response_model=FamilyTreeOut)
def get_family_tree(
    member_id: int,
    view: Optional[str] = Query(default=None),
    db: Session = Depends(get_db),
):
    # classifier does not check existence
    member = family_members.get_member(db, member_id)

    view = view or settings.RELATIONSHIP_VIEW
    if view not in VIEWS:
        raise HTTPException(400, f"view must be one of: {', '.join(VIEWS)}")

    tree = classify(db, member.id, view=view)

    return {
        "member_id": member.id,
        "member_name": member.name,
        "view": view,
        **tree,
    }


# ============================================================
# RAW EDGES
# ============================================================

@router.get("/{member_id}/relationships", response_model=list[RelationshipOut])
def list_relationships(
    member_id: int,
    db: Session = Depends(get_db),
):
    family_members.get_member(db, member_id)
    return relationship_store.edges_touching(db, member_id)


# ============================================================
# CREATE / UPDATE / DELETE MEMBER (editor+)
# ============================================================

@router.post("", response_model=FamilyMemberOut, status_code=201)
def create_family_member(
    payload: FamilyMemberCreate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_editor),
    audit: AuditSink = Depends(get_audit_sink),
):
    return family_members.create_member(
        db, payload.model_dump(), actor_id=actor.id, audit=audit
    )


@router.put("/{member_id}", response_model=FamilyMemberOut)
def update_family_member(
    member_id: int,
    payload: FamilyMemberUpdate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_editor),
    audit: AuditSink = Depends(get_audit_sink),
):
    changes = payload.model_dump(exclude_unset=True)

    if "name" in changes and changes["name"] is None:
        raise HTTPException(400, "Name cannot be empty")

    if not changes:
        raise HTTPException(400, "Nothing to update")

    return family_members.update_member(
        db, member_id, changes, actor_id=actor.id, audit=audit
    )


@router.delete("/{member_id}")
def delete_family_member(
    member_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_editor),
    audit: AuditSink = Depends(get_audit_sink),
):
    family_members.delete_member(db, member_id, actor_id=actor.id, audit=audit)
    return {"status": "deleted"}


# ============================================================
# RELATIONSHIPS (editor+)
# ============================================================

@router.post("/{member_id}/relationships", response_model=RelationshipOut, status_code=201)
def create_relationship(
    member_id: int,
    payload: RelationshipCreate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_editor),
    audit: AuditSink = Depends(get_audit_sink),
):
    return relationship_store.create_edge(
        db,
        member_id,
        payload.related_member_id,
        payload.relationship_type,
        actor_id=actor.id,
        audit=audit,
    )


@router.delete("/{member_id}/relationships/{relationship_id}")
def delete_relationship(
    member_id: int,
    relationship_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_editor),
    audit: AuditSink = Depends(get_audit_sink),
):
    relationship_store.delete_edge(
        db, member_id, relationship_id, actor_id=actor.id, audit=audit
    )
    return {"status": "deleted"}
