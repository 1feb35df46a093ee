from datetime import datetime
from typing import Any, List, Literal, Optional

from pydantic import BaseModel

from encyclopedia.languages import Language


# ---------------------------------------------------------
# CREATE / UPDATE
# ---------------------------------------------------------
class ArticleCreate(BaseModel):
    family_member_id: int
    language: str = Language.SR.value
    content: Optional[str] = None
    template_type: Optional[Literal["basic", "infobox", "full_featured"]] = None


class ArticleUpdate(BaseModel):
    content: str


# ---------------------------------------------------------
# OUTPUT
# ---------------------------------------------------------
class ArticleOut(BaseModel):
    id: int
    family_member_id: int
    language: str
    content: Optional[str] = None

    created_by: Optional[str] = None
    updated_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True
    }


class ResolvedArticleOut(ArticleOut):
    requested_language: str
    is_fallback: bool


# ---------------------------------------------------------
# TRANSLATIONS
# ---------------------------------------------------------
class TranslateRequest(BaseModel):
    target_language: str


class TranslationUpdate(BaseModel):
    content: str
    title: Optional[str] = None


class TranslationOut(BaseModel):
    id: int
    article_id: int
    language: str
    title: Optional[str] = None
    content: Optional[str] = None
    is_auto_translated: bool

    created_by: Optional[str] = None
    updated_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True
    }


# ---------------------------------------------------------
# LANGUAGES
# ---------------------------------------------------------
class LanguageOut(BaseModel):
    code: str
    name: str
    native_name: str


# ---------------------------------------------------------
# HISTORY
# ---------------------------------------------------------
class AuditEntryOut(BaseModel):
    id: int
    actor_id: Optional[str] = None
    table_name: str
    record_id: int
    action: str
    old_values: Optional[Any] = None
    new_values: Optional[Any] = None
    created_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True
    }


class ArticleHistoryOut(BaseModel):
    article_id: int
    versions: List[AuditEntryOut]
