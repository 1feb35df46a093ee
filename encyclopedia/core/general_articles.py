from typing import Any, Optional

from sqlalchemy.orm import Session

from encyclopedia.core.audit import AuditSink, snapshot
from encyclopedia.database import transaction
from encyclopedia.errors import NotFound
from encyclopedia.log import get_logger
from encyclopedia.models.general_article import GeneralArticle

logger = get_logger(__name__)

EDITABLE_FIELDS = ("title", "category", "content")

SORT_COLUMNS = {
    "created_at": GeneralArticle.created_at,
    "updated_at": GeneralArticle.updated_at,
    "title": GeneralArticle.title,
}


def _actor(actor_id) -> Optional[str]:
    return str(actor_id) if actor_id is not None else None


# ============================================================
# READ
# ============================================================

def get_general_article(db: Session, article_id: int) -> GeneralArticle:
    article = db.query(GeneralArticle).filter(GeneralArticle.id == article_id).first()
    if not article:
        raise NotFound("Article not found")
    return article


def list_general_articles(
    db: Session,
    category: Optional[str] = None,
    sort_by: str = "created_at",
    order: str = "desc",
) -> list[GeneralArticle]:
    """
    All general articles, optionally in one category.

    ``sort_by`` is one of SORT_COLUMNS; ties are broken by id in the same direction.
    """
    column = SORT_COLUMNS.get(sort_by)
    if column is None:
        raise ValueError(f"sort_by must be one of: {', '.join(SORT_COLUMNS)}")

    if order.lower() not in ("asc", "desc"):
        raise ValueError("order must be asc or desc")

    query = db.query(GeneralArticle)
    if category:
        query = query.filter(GeneralArticle.category == category)

    if order.lower() == "asc":
        query = query.order_by(column.asc(), GeneralArticle.id.asc())
    else:
        query = query.order_by(column.desc(), GeneralArticle.id.desc())

    return query.all()


def list_categories(db: Session) -> list[str]:
    rows = (
        db.query(GeneralArticle.category)
        .filter(GeneralArticle.category.isnot(None))
        .distinct()
        .order_by(GeneralArticle.category.asc())
        .all()
    )
    return [category for (category,) in rows]


# ============================================================
# WRITE
# ============================================================

def create_general_article(
    db: Session,
    data: dict[str, Any],
    actor_id=None,
    audit: Optional[AuditSink] = None,
) -> GeneralArticle:
    article = GeneralArticle(
        title=data["title"],
        category=data.get("category"),
        content=data["content"],
        created_by=_actor(actor_id),
        updated_by=_actor(actor_id),
    )

    with transaction(db):
        db.add(article)
    db.refresh(article)

    logger.info("general_article_created", article_id=article.id, category=article.category)
    if audit:
        audit.record(actor_id, "general_articles", article.id, "INSERT", None, snapshot(article))
    return article


def update_general_article(
    db: Session,
    article_id: int,
    changes: dict[str, Any],
    actor_id=None,
    audit: Optional[AuditSink] = None,
) -> GeneralArticle:
    """Apply only the fields present in ``changes``."""
    article = get_general_article(db, article_id)
    before = snapshot(article)

    changes = {k: v for k, v in changes.items() if k in EDITABLE_FIELDS}

    with transaction(db):
        for key, value in changes.items():
            setattr(article, key, value)
        article.updated_by = _actor(actor_id)
    db.refresh(article)

    if audit:
        audit.record(actor_id, "general_articles", article.id, "UPDATE", before, snapshot(article))
    return article


def delete_general_article(
    db: Session,
    article_id: int,
    actor_id=None,
    audit: Optional[AuditSink] = None,
) -> None:
    article = get_general_article(db, article_id)
    before = snapshot(article)

    with transaction(db):
        db.delete(article)

    logger.info("general_article_deleted", article_id=article_id)
    if audit:
        audit.record(actor_id, "general_articles", article_id, "DELETE", before, None)
