"""
Family tree buckets for one member's profile page.

Edges are stored once, in the direction the editor asserted them:
``(member, related_member, type)`` reads "related_member is member's type".

Two views of the same edge list are supported:

``asserted``
    Legacy behaviour. The asserting member sees the stored type; the related
    member only sees the asserting member under ``relatives``.

``symmetric``
    The related member sees the inverse type when one exists (parent/child,
    grandparent/grandchild, spouse, sibling, cousin). Types whose inverse
    depends on gender still land in ``relatives``.

Neither view infers anything beyond a single edge.
"""
from __future__ import annotations

from typing import Any, Iterable, Optional

from sqlalchemy.orm import Session

from encyclopedia.config import settings
from encyclopedia.core.relationship_store import edges_touching
from encyclopedia.core.relationship_types import (
    INVERSE_TYPES,
    Bucket,
    RelationshipType,
    bucket_for,
)
from encyclopedia.models.family_member import FamilyMember
from encyclopedia.models.family_relationship import FamilyRelationship

ASSERTED = "asserted"
SYMMETRIC = "symmetric"
VIEWS = (ASSERTED, SYMMETRIC)


def empty_tree() -> dict[str, Any]:
    return {
        Bucket.PARENTS.value: [],
        Bucket.SPOUSE.value: None,
        Bucket.CHILDREN.value: [],
        Bucket.SIBLINGS.value: [],
        Bucket.RELATIVES.value: [],
    }


def relation_from(
    edge: FamilyRelationship,
    member_id: int,
    view: str = ASSERTED,
) -> tuple[int, Bucket, RelationshipType, bool]:
    """
    Returns (other_member_id, bucket, relationship_type, is_inverse) for the
    edge as seen by ``member_id``.
    """
    stored = RelationshipType.parse(edge.relationship_type)

    if edge.member_id == member_id:
        return edge.related_member_id, bucket_for(stored), stored, False

    if view == SYMMETRIC:
        inverse = INVERSE_TYPES.get(stored)
        if inverse is not None:
            return edge.member_id, bucket_for(inverse), inverse, True

    # the detailed (asserted) type is kept on the entry
    return edge.member_id, Bucket.RELATIVES, stored, True


def _entry(member: FamilyMember, relationship_type: RelationshipType, is_inverse: bool):
    return {
        "id": member.id,
        "name": member.name,
        "birth_year": member.birth_year,
        "death_year": member.death_year,
        "relationship_type": relationship_type.value,
        "is_inverse": is_inverse,
    }


def classify_edges(
    member_id: int,
    edges: Iterable[FamilyRelationship],
    members_by_id: dict[int, FamilyMember],
    view: str = ASSERTED,
) -> dict[str, Any]:
    """
    Sort edges into display buckets.

    Edges are taken in the order given; the spouse slot keeps the last one.
    Edges pointing at members missing from ``members_by_id`` are skipped.
    """
    if view not in VIEWS:
        raise ValueError(f"Unknown relationship view: {view}")

    tree = empty_tree()

    for edge in edges:
        other_id, bucket, rel_type, is_inverse = relation_from(edge, member_id, view)

        other = members_by_id.get(other_id)
        if other is None:
            continue

        entry = _entry(other, rel_type, is_inverse)

        if bucket is Bucket.SPOUSE:
            tree[Bucket.SPOUSE.value] = entry
        else:
            tree[bucket.value].append(entry)

    return tree


def classify(db: Session, member_id: int, view: Optional[str] = None) -> dict[str, Any]:
    """
    Build the tree buckets for a member.

    Does not check that the member exists. Callers fetch the member first.
    """
    edges = edges_touching(db, member_id)
    if not edges:
        return empty_tree()

    other_ids = {
        e.related_member_id if e.member_id == member_id else e.member_id
        for e in edges
    }
    members_by_id = {
        m.id: m
        for m in db.query(FamilyMember).filter(FamilyMember.id.in_(other_ids)).all()
    }

    return classify_edges(member_id, edges, members_by_id, view or settings.RELATIONSHIP_VIEW)
