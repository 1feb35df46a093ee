from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from encyclopedia.auth import Actor, require_admin
from encyclopedia.core import general_articles
from encyclopedia.core.audit import AuditSink, get_audit_sink
from encyclopedia.database import get_db
from encyclopedia.schemas.general_article_schema import (
    CategoryList,
    GeneralArticleCreate,
    GeneralArticleList,
    GeneralArticleOut,
    GeneralArticleUpdate,
)

router = APIRouter(prefix="/general-articles", tags=["General Articles"])


# =====================================================================
# LIST (optional category, sort_by, order)
# =====================================================================
@router.get("", response_model=GeneralArticleList)
def list_general_articles(
    category: Optional[str] = None,
    sort_by: str = "created_at",
    order: str = "desc",
    db: Session = Depends(get_db),
):
    if sort_by not in general_articles.SORT_COLUMNS:
        raise HTTPException(
            400, f"sort_by must be one of: {', '.join(general_articles.SORT_COLUMNS)}"
        )
    if order.lower() not in ("asc", "desc"):
        raise HTTPException(400, "order must be asc or desc")

    articles = general_articles.list_general_articles(
        db, category=category, sort_by=sort_by, order=order
    )
    return {"articles": articles}


# =====================================================================
# CATEGORIES
# =====================================================================
@router.get("/categories", response_model=CategoryList)
def list_categories(db: Session = Depends(get_db)):
    return {"categories": general_articles.list_categories(db)}


# =====================================================================
# SINGLE ARTICLE
# =====================================================================
@router.get("/{article_id}", response_model=GeneralArticleOut)
def get_general_article(
    article_id: int,
    db: Session = Depends(get_db),
):
    return general_articles.get_general_article(db, article_id)


# =====================================================================
# CREATE / UPDATE / DELETE (admin)
# =====================================================================
@router.post("", response_model=GeneralArticleOut, status_code=201)
def create_general_article(
    payload: GeneralArticleCreate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_admin),
    audit: AuditSink = Depends(get_audit_sink),
):
    return general_articles.create_general_article(
        db, payload.model_dump(), actor_id=actor.id, audit=audit
    )


@router.put("/{article_id}", response_model=GeneralArticleOut)
def update_general_article(
    article_id: int,
    payload: GeneralArticleUpdate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_admin),
    audit: AuditSink = Depends(get_audit_sink),
):
    changes = payload.model_dump(exclude_unset=True)

    # category may be cleared, title and content may not
    for field in ("title", "content"):
        if field in changes and changes[field] is None:
            raise HTTPException(400, f"{field.capitalize()} cannot be empty")

    if not changes:
        raise HTTPException(400, "Nothing to update")

    return general_articles.update_general_article(
        db, article_id, changes, actor_id=actor.id, audit=audit
    )


@router.delete("/{article_id}")
def delete_general_article(
    article_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_admin),
    audit: AuditSink = Depends(get_audit_sink),
):
    general_articles.delete_general_article(db, article_id, actor_id=actor.id, audit=audit)
    return {"message": "Article deleted successfully"}
