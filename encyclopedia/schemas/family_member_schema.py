from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from encyclopedia.core.relationship_types import RelationshipType


# ---------------------------------------------------------
# BASE
# ---------------------------------------------------------
class FamilyMemberBase(BaseModel):
    birth_year: Optional[int] = Field(default=None, ge=1800)
    death_year: Optional[int] = Field(default=None, ge=1800)
    birth_place: Optional[str] = None
    occupation: Optional[str] = None
    short_bio: Optional[str] = Field(default=None, max_length=500)

    @model_validator(mode="after")
    def check_years(self):
        if (
            self.birth_year is not None
            and self.death_year is not None
            and self.death_year < self.birth_year
        ):
            raise ValueError("Death year cannot be before birth year")

        if self.birth_year is not None and self.birth_year > datetime.utcnow().year:
            raise ValueError("Birth year cannot be in the future")
        return self


# ---------------------------------------------------------
# CREATE
# ---------------------------------------------------------
class FamilyMemberCreate(FamilyMemberBase):
    name: str = Field(min_length=2, max_length=255)


# ---------------------------------------------------------
# UPDATE (partial)
# ---------------------------------------------------------
class FamilyMemberUpdate(FamilyMemberBase):
    name: Optional[str] = Field(default=None, min_length=2, max_length=255)


# ---------------------------------------------------------
# OUTPUT
# ---------------------------------------------------------
class FamilyMemberOut(BaseModel):
    id: int
    name: str

    birth_year: Optional[int] = None
    death_year: Optional[int] = None
    birth_place: Optional[str] = None
    occupation: Optional[str] = None
    short_bio: Optional[str] = None

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True
    }


class FamilyMemberList(BaseModel):
    count: int
    members: List[FamilyMemberOut]


class RelatedMember(BaseModel):
    relationship_id: int
    id: int
    name: str
    relationship_type: str


class FamilyMemberDetail(FamilyMemberOut):
    relationships: List[RelatedMember] = []


# ---------------------------------------------------------
# RELATIONSHIPS
# ---------------------------------------------------------
class RelationshipCreate(BaseModel):
    related_member_id: int
    relationship_type: RelationshipType


class RelationshipOut(BaseModel):
    id: int
    member_id: int
    related_member_id: int
    relationship_type: str
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True
    }


# ---------------------------------------------------------
# TREE
# ---------------------------------------------------------
class TreeMember(BaseModel):
    id: int
    name: str
    birth_year: Optional[int] = None
    death_year: Optional[int] = None
    relationship_type: str
    is_inverse: bool = False


class FamilyTreeOut(BaseModel):
    member_id: int
    member_name: str
    view: str

    parents: List[TreeMember]
    spouse: Optional[TreeMember] = None
    children: List[TreeMember]
    siblings: List[TreeMember]
    relatives: List[TreeMember]
