from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from encyclopedia.auth import Actor, require_admin
from encyclopedia.config import settings
from encyclopedia.core import content_store
from encyclopedia.core.audit import AuditSink, audit_history, get_audit_sink
from encyclopedia.core.content_resolver import resolve
from encyclopedia.core.family_members import get_member
from encyclopedia.core.translation import request_translation
from encyclopedia.database import get_db
from encyclopedia.languages import supported_languages
from encyclopedia.schemas.article_schema import (
    ArticleCreate,
    ArticleHistoryOut,
    ArticleOut,
    ArticleUpdate,
    LanguageOut,
    ResolvedArticleOut,
    TranslateRequest,
    TranslationOut,
    TranslationUpdate,
)
from encyclopedia.translation_provider import get_translation_provider

router = APIRouter(prefix="/articles", tags=["Articles"])


# =====================================================================
# SUPPORTED LANGUAGES
# =====================================================================
@router.get("/languages", response_model=list[LanguageOut])
def list_languages():
    return supported_languages()


# =====================================================================
# BEST ARTICLE FOR A MEMBER (exact language, else any language)
# =====================================================================
@router.get("/member/{member_id}", response_model=ResolvedArticleOut)
def get_member_article(
    member_id: int,
    lang: Optional[str] = None,
    db: Session = Depends(get_db),
):
    get_member(db, member_id)

    requested = (lang or settings.DEFAULT_LANGUAGE).strip().lower()
    article = resolve(db, member_id, requested)

    if article is None:
        raise HTTPException(status_code=404, detail="Article not found")

    out = ArticleOut.model_validate(article).model_dump()
    out["requested_language"] = requested
    out["is_fallback"] = article.language != requested
    return out


@router.get("/member/{member_id}/all", response_model=list[ArticleOut])
def list_member_articles(
    member_id: int,
    db: Session = Depends(get_db),
):
    get_member(db, member_id)
    return content_store.articles_for_member(db, member_id)


# =====================================================================
# SINGLE ARTICLE
# =====================================================================
@router.get("/{article_id}", response_model=ArticleOut)
def get_article(
    article_id: int,
    db: Session = Depends(get_db),
):
    return content_store.get_article(db, article_id)


@router.get("/{article_id}/history", response_model=ArticleHistoryOut)
def get_article_history(
    article_id: int,
    db: Session = Depends(get_db),
):
    # existence comes from the article, audit rows may be missing
    content_store.get_article(db, article_id)

    versions = audit_history(db, "articles", article_id)
    return {"article_id": article_id, "versions": versions}


@router.get("/{article_id}/translations", response_model=list[TranslationOut])
def get_article_translations(
    article_id: int,
    db: Session = Depends(get_db),
):
    content_store.get_article(db, article_id)
    return content_store.translations_for(db, article_id)


# =====================================================================
# CREATE / UPDATE / DELETE (admin)
# =====================================================================
@router.post("", response_model=ArticleOut, status_code=201)
def create_article(
    payload: ArticleCreate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_admin),
    audit: AuditSink = Depends(get_audit_sink),
):
    return content_store.put_article(
        db,
        payload.family_member_id,
        payload.language,
        payload.content,
        actor_id=actor.id,
        audit=audit,
        template_type=payload.template_type,
    )


@router.put("/{article_id}", response_model=ArticleOut)
def update_article(
    article_id: int,
    payload: ArticleUpdate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_admin),
    audit: AuditSink = Depends(get_audit_sink),
):
    return content_store.update_article(
        db, article_id, payload.content, actor_id=actor.id, audit=audit
    )


@router.delete("/{article_id}")
def delete_article(
    article_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_admin),
    audit: AuditSink = Depends(get_audit_sink),
):
    content_store.delete_article(db, article_id, actor_id=actor.id, audit=audit)
    return {"message": "Article deleted successfully"}


# =====================================================================
# TRANSLATIONS (admin)
# =====================================================================
@router.post("/{article_id}/translate", response_model=TranslationOut, status_code=201)
def translate_article(
    article_id: int,
    payload: TranslateRequest,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_admin),
    audit: AuditSink = Depends(get_audit_sink),
    provider=Depends(get_translation_provider),
):
    return request_translation(
        db,
        article_id,
        payload.target_language,
        provider,
        actor_id=actor.id,
        audit=audit,
    )


@router.put("/{article_id}/translations/{language}", response_model=TranslationOut)
def save_manual_translation(
    article_id: int,
    language: str,
    payload: TranslationUpdate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_admin),
    audit: AuditSink = Depends(get_audit_sink),
):
    return content_store.put_translation(
        db,
        article_id,
        language,
        payload.content,
        is_auto=False,
        actor_id=actor.id,
        audit=audit,
        title=payload.title,
    )
