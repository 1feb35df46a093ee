from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


# ---------------------------------------------------------
# CREATE / UPDATE
# ---------------------------------------------------------
class GeneralArticleCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    category: Optional[str] = Field(default=None, max_length=100)
    content: str = Field(min_length=1)


class GeneralArticleUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    category: Optional[str] = Field(default=None, max_length=100)
    content: Optional[str] = Field(default=None, min_length=1)


# ---------------------------------------------------------
# OUTPUT
# ---------------------------------------------------------
class GeneralArticleOut(BaseModel):
    id: int
    title: str
    category: Optional[str] = None
    content: str

    created_by: Optional[str] = None
    updated_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True
    }


class GeneralArticleList(BaseModel):
    articles: List[GeneralArticleOut]


class CategoryList(BaseModel):
    categories: List[str]
