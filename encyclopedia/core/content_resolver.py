from typing import Optional

from sqlalchemy.orm import Session

from encyclopedia.core.content_store import find_article
from encyclopedia.languages import Language, require_supported
from encyclopedia.models.article import Article


def resolve(db: Session, member_id: int, language: Language | str) -> Optional[Article]:
    """
    Best canonical article for a member in the requested language.

    1. the article in exactly that language
    2. otherwise the member's first article (lowest id) in its own language
    3. otherwise None

    Translations are never consulted and nothing is translated here.
    """
    lang = require_supported(language)

    exact = find_article(db, member_id, lang)
    if exact:
        return exact

    return (
        db.query(Article)
        .filter(Article.family_member_id == member_id)
        .order_by(Article.id.asc())
        .first()
    )
