from enum import Enum


class RelationshipType(str, Enum):
    PARENT = "parent"
    CHILD = "child"
    SPOUSE = "spouse"
    SIBLING = "sibling"
    GRANDPARENT = "grandparent"
    GRANDCHILD = "grandchild"
    UNCLE = "uncle"
    AUNT = "aunt"
    COUSIN = "cousin"
    NEPHEW = "nephew"
    NIECE = "niece"
    BROTHER_IN_LAW = "brother_in_law"
    SISTER_IN_LAW = "sister_in_law"
    FATHER_IN_LAW = "father_in_law"
    MOTHER_IN_LAW = "mother_in_law"
    OTHER = "other"

    @classmethod
    def parse(cls, value: str | None) -> "RelationshipType":
        """Stored labels outside the enumeration read back as OTHER."""
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.OTHER


class Bucket(str, Enum):
    PARENTS = "parents"
    SPOUSE = "spouse"
    CHILDREN = "children"
    SIBLINGS = "siblings"
    RELATIVES = "relatives"


BUCKET_FOR_TYPE: dict[RelationshipType, Bucket] = {
    RelationshipType.PARENT: Bucket.PARENTS,
    RelationshipType.SPOUSE: Bucket.SPOUSE,
    RelationshipType.CHILD: Bucket.CHILDREN,
    RelationshipType.SIBLING: Bucket.SIBLINGS,
}


# How the related member sees the asserting member.
# Missing keys have no inverse without knowing the member's gender.
INVERSE_TYPES: dict[RelationshipType, RelationshipType] = {
    RelationshipType.PARENT: RelationshipType.CHILD,
    RelationshipType.CHILD: RelationshipType.PARENT,
    RelationshipType.GRANDPARENT: RelationshipType.GRANDCHILD,
    RelationshipType.GRANDCHILD: RelationshipType.GRANDPARENT,
    RelationshipType.SPOUSE: RelationshipType.SPOUSE,
    RelationshipType.SIBLING: RelationshipType.SIBLING,
    RelationshipType.COUSIN: RelationshipType.COUSIN,
}


def bucket_for(relationship_type: RelationshipType) -> Bucket:
    return BUCKET_FOR_TYPE.get(relationship_type, Bucket.RELATIVES)
