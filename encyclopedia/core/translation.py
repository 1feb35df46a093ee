from typing import Optional

from sqlalchemy.orm import Session

from encyclopedia.core.audit import AuditSink
from encyclopedia.core.content_store import get_article, put_translation
from encyclopedia.errors import TranslationUnavailable
from encyclopedia.languages import Language, require_supported
from encyclopedia.log import get_logger
from encyclopedia.models.article_translation import ArticleTranslation
from encyclopedia.translation_provider import TranslationProviderError

logger = get_logger(__name__)


def request_translation(
    db: Session,
    article_id: int,
    target_language: Language | str,
    provider,
    actor_id=None,
    audit: Optional[AuditSink] = None,
) -> ArticleTranslation:
    """
    Machine-translate a canonical article and store it as an automatic
    translation. A provider failure aborts before anything is written.
    """
    target = require_supported(target_language)
    article = get_article(db, article_id)

    try:
        translated = provider.translate(article.content or "", article.language, target.value)
    except TranslationProviderError as e:
        logger.warning(
            "translation_unavailable",
            article_id=article_id,
            source_language=article.language,
            target_language=target.value,
            error=str(e),
        )
        raise TranslationUnavailable(str(e)) from e

    return put_translation(
        db,
        article_id,
        target,
        translated,
        is_auto=True,
        actor_id=actor_id,
        audit=audit,
    )
