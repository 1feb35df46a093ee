from typing import Optional

from sqlalchemy.orm import Session

from encyclopedia.core.article_templates import default_template
from encyclopedia.core.audit import AuditSink, snapshot
from encyclopedia.database import transaction
from encyclopedia.errors import Conflict, NotFound
from encyclopedia.languages import Language, require_supported
from encyclopedia.log import get_logger
from encyclopedia.models.article import Article
from encyclopedia.models.article_translation import ArticleTranslation
from encyclopedia.models.family_member import FamilyMember

logger = get_logger(__name__)


def _actor(actor_id) -> Optional[str]:
    return str(actor_id) if actor_id is not None else None


# ============================================================
# CANONICAL ARTICLES
# ============================================================

def get_article(db: Session, article_id: int) -> Article:
    article = db.query(Article).filter(Article.id == article_id).first()
    if not article:
        raise NotFound("Article not found")
    return article


def find_article(db: Session, member_id: int, language: Language | str) -> Optional[Article]:
    lang = require_supported(language)
    return (
        db.query(Article)
        .filter(
            Article.family_member_id == member_id,
            Article.language == lang.value,
        )
        .first()
    )


def articles_for_member(db: Session, member_id: int) -> list[Article]:
    return (
        db.query(Article)
        .filter(Article.family_member_id == member_id)
        .order_by(Article.id.asc())
        .all()
    )


def put_article(
    db: Session,
    member_id: int,
    language: Language | str,
    content: Optional[str],
    actor_id=None,
    audit: Optional[AuditSink] = None,
    template_type: Optional[str] = None,
) -> Article:
    """
    Create the canonical article for (member, language).

    Editing an existing article goes through update_article by id.
    """
    lang = require_supported(language)

    member = db.query(FamilyMember.id).filter(FamilyMember.id == member_id).first()
    if not member:
        raise NotFound("Family member not found")

    if find_article(db, member_id, lang):
        raise Conflict(f"An article in '{lang.value}' already exists for this family member")

    article = Article(
        family_member_id=member_id,
        language=lang.value,
        content=content if content is not None else default_template(template_type),
        created_by=_actor(actor_id),
        updated_by=_actor(actor_id),
    )

    with transaction(db):
        db.add(article)
    db.refresh(article)

    logger.info("article_created", article_id=article.id, member_id=member_id, language=lang.value)
    if audit:
        audit.record(actor_id, "articles", article.id, "INSERT", None, snapshot(article))
    return article


def update_article(
    db: Session,
    article_id: int,
    content: str,
    actor_id=None,
    audit: Optional[AuditSink] = None,
) -> Article:
    article = get_article(db, article_id)
    before = {"content": article.content}

    with transaction(db):
        article.content = content
        article.updated_by = _actor(actor_id)
    db.refresh(article)

    if audit:
        audit.record(actor_id, "articles", article.id, "UPDATE", before, {"content": content})
    return article


def delete_article(
    db: Session,
    article_id: int,
    actor_id=None,
    audit: Optional[AuditSink] = None,
) -> None:
    article = get_article(db, article_id)
    before = snapshot(article)

    with transaction(db):
        db.query(ArticleTranslation).filter(
            ArticleTranslation.article_id == article_id
        ).delete(synchronize_session=False)
        db.delete(article)

    logger.info("article_deleted", article_id=article_id)
    if audit:
        audit.record(actor_id, "articles", article_id, "DELETE", before, None)


# ============================================================
# TRANSLATIONS
# ============================================================

def translations_for(db: Session, article_id: int) -> list[ArticleTranslation]:
    return (
        db.query(ArticleTranslation)
        .filter(ArticleTranslation.article_id == article_id)
        .order_by(ArticleTranslation.language.asc())
        .all()
    )


def put_translation(
    db: Session,
    article_id: int,
    language: Language | str,
    content: str,
    is_auto: bool,
    actor_id=None,
    audit: Optional[AuditSink] = None,
    title: Optional[str] = None,
) -> ArticleTranslation:
    """
    Insert or overwrite the translation for (article, language).
    """
    lang = require_supported(language)
    get_article(db, article_id)

    translation = (
        db.query(ArticleTranslation)
        .filter(
            ArticleTranslation.article_id == article_id,
            ArticleTranslation.language == lang.value,
        )
        .first()
    )
    before = snapshot(translation)

    with transaction(db):
        if translation is None:
            translation = ArticleTranslation(
                article_id=article_id,
                language=lang.value,
                created_by=_actor(actor_id),
            )
            db.add(translation)

        translation.content = content
        translation.is_auto_translated = is_auto
        translation.updated_by = _actor(actor_id)
        if title is not None:
            translation.title = title
    db.refresh(translation)

    logger.info(
        "translation_saved",
        article_id=article_id,
        language=lang.value,
        is_auto=is_auto,
        overwritten=before is not None,
    )
    if audit:
        action = "UPDATE" if before else "INSERT"
        audit.record(actor_id, "article_translations", translation.id, action, before, snapshot(translation))
    return translation
