"""Tests for the family member catalog and cascade deletion."""

import pytest

from encyclopedia.core.content_resolver import resolve
from encyclopedia.core.content_store import put_article, put_translation
from encyclopedia.core.family_members import (
    create_member,
    delete_member,
    get_member,
    list_members,
    member_relationships,
    search_members,
    update_member,
)
from encyclopedia.core.relationship_store import create_edge
from encyclopedia.core.relationship_types import RelationshipType
from encyclopedia.core.tree_classifier import classify, empty_tree
from encyclopedia.errors import InvalidFamilyMember, NotFound
from encyclopedia.models.article import Article
from encyclopedia.models.article_translation import ArticleTranslation
from encyclopedia.models.audit_log import AuditLog
from encyclopedia.models.family_relationship import FamilyRelationship


class TestCatalog:
    """Create, read, update."""

    def test_create_and_get(self, db, audit):
        member = create_member(
            db,
            {"name": "Hasan Kurpejović", "birth_year": 1920, "death_year": 1990, "birth_place": "Rožaje"},
            actor_id="u1",
            audit=audit,
        )

        fetched = get_member(db, member.id)
        assert fetched.name == "Hasan Kurpejović"
        assert fetched.birth_place == "Rožaje"
        assert db.query(AuditLog).filter(AuditLog.action == "INSERT").count() == 1

    def test_death_before_birth_rejected(self, db):
        with pytest.raises(InvalidFamilyMember):
            create_member(db, {"name": "Amir", "birth_year": 1950, "death_year": 1940})

    def test_update_checks_merged_years(self, db, make_member):
        member = make_member("Amir", birth_year=1950)

        with pytest.raises(InvalidFamilyMember):
            update_member(db, member.id, {"death_year": 1900})

        updated = update_member(db, member.id, {"death_year": 2001, "occupation": "carpenter"})
        assert updated.death_year == 2001
        assert updated.occupation == "carpenter"

    def test_update_ignores_unknown_fields(self, db, make_member):
        member = make_member("Amir")

        updated = update_member(db, member.id, {"id": 999, "name": "Amir K."})

        assert updated.id == member.id
        assert updated.name == "Amir K."

    def test_get_missing(self, db):
        with pytest.raises(NotFound):
            get_member(db, 1)

    def test_list_filters_and_order(self, db, make_member):
        make_member("Zora", birth_year=1930)
        make_member("Amir", birth_year=1950)
        make_member("Amela", birth_year=1930)

        assert [m.name for m in list_members(db)] == ["Amela", "Amir", "Zora"]
        assert [m.name for m in list_members(db, name="am")] == ["Amela", "Amir"]
        assert [m.name for m in list_members(db, birth_year=1930)] == ["Amela", "Zora"]

    def test_search_name_or_bio(self, db, make_member):
        make_member("Amir", short_bio="Radio kao učitelj")
        make_member("Lejla", short_bio="Doctor in Sarajevo")
        make_member("Sarah")

        assert [m.name for m in search_members(db, "sara")] == ["Lejla", "Sarah"]

    def test_wildcards_match_literally(self, db, make_member):
        make_member("Amir_K", short_bio="100% Sarajevo")
        make_member("Amir K", short_bio="Born 1950")

        assert [m.name for m in list_members(db, name="r_k")] == ["Amir_K"]
        assert [m.name for m in list_members(db, name="%")] == []
        assert [m.name for m in search_members(db, "0%")] == ["Amir_K"]
        assert [m.name for m in search_members(db, "_")] == ["Amir_K"]

    def test_member_relationships_cover_both_directions(self, db, make_member):
        me = make_member("Amir")
        dad = make_member("Hasan")
        kid = make_member("Selma")
        create_edge(db, me.id, dad.id, RelationshipType.PARENT)
        create_edge(db, kid.id, me.id, RelationshipType.PARENT)

        rels = member_relationships(db, me.id)

        assert [(r["id"], r["relationship_type"]) for r in rels] == [
            (dad.id, "parent"),
            (kid.id, "parent"),
        ]


class TestDeleteMember:
    """Deletion cascades to edges, articles and translations."""

    def test_cascade(self, db, make_member, audit):
        p1 = make_member("Amir")
        p2 = make_member("Hasan")
        p3 = make_member("Selma")
        create_edge(db, p1.id, p2.id, RelationshipType.PARENT)
        create_edge(db, p3.id, p1.id, RelationshipType.PARENT)
        create_edge(db, p3.id, p2.id, RelationshipType.GRANDPARENT)

        article = put_article(db, p1.id, "sr", "Bio SR")
        put_article(db, p1.id, "en", "Bio EN")
        put_translation(db, article.id, "de", "Bio DE", is_auto=True)
        other = put_article(db, p2.id, "sr", "Hasan SR")

        delete_member(db, p1.id, actor_id="u1", audit=audit)

        with pytest.raises(NotFound):
            get_member(db, p1.id)

        edges = db.query(FamilyRelationship).all()
        assert [(e.member_id, e.related_member_id) for e in edges] == [(p3.id, p2.id)]
        assert [a.id for a in db.query(Article).all()] == [other.id]
        assert db.query(ArticleTranslation).count() == 0

        assert classify(db, p1.id) == empty_tree()
        assert resolve(db, p1.id, "sr") is None

        entry = db.query(AuditLog).filter(AuditLog.action == "DELETE").one()
        assert entry.old_values["name"] == "Amir"

    def test_missing_member(self, db):
        with pytest.raises(NotFound):
            delete_member(db, 12)

    def test_failure_rolls_everything_back(self, db, make_member, monkeypatch):
        p1 = make_member("Amir")
        p2 = make_member("Hasan")
        create_edge(db, p1.id, p2.id, RelationshipType.SIBLING)
        put_article(db, p1.id, "sr", "Bio SR")

        def explode(obj):
            raise RuntimeError("disk full")

        monkeypatch.setattr(db, "delete", explode)

        with pytest.raises(RuntimeError):
            delete_member(db, p1.id)

        monkeypatch.undo()
        assert db.query(FamilyRelationship).count() == 1
        assert db.query(Article).count() == 1
        assert get_member(db, p1.id).name == "Amir"
