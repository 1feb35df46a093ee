"""HTTP tests for /articles and /audit."""

import pytest

from encyclopedia.core.audit import get_audit_sink
from encyclopedia.main import app


@pytest.fixture
def member_id(client, editor_headers):
    res = client.post("/family-members", json={"name": "Amir"}, headers=editor_headers)
    return res.json()["id"]


def _article(client, headers, member_id, language, content):
    res = client.post(
        "/articles",
        json={"family_member_id": member_id, "language": language, "content": content},
        headers=headers,
    )
    assert res.status_code == 201, res.text
    return res.json()


class TestArticleEndpoints:
    """Creating and reading canonical articles."""

    def test_languages(self, client):
        res = client.get("/articles/languages")
        assert res.status_code == 200
        assert len(res.json()) == 9
        assert res.json()[0] == {
            "code": "sr",
            "name": "Serbo-Croatian",
            "native_name": "Srpski/Hrvatski",
        }

    def test_editor_cannot_write_articles(self, client, editor_headers, member_id):
        res = client.post(
            "/articles",
            json={"family_member_id": member_id, "content": "Bio"},
            headers=editor_headers,
        )
        assert res.status_code == 403

    def test_resolve_exact_and_fallback(self, client, admin_headers, member_id):
        sr = _article(client, admin_headers, member_id, "sr", "Bio SR")

        res = client.get(f"/articles/member/{member_id}", params={"lang": "en"})
        assert res.status_code == 200
        assert res.json()["id"] == sr["id"]
        assert res.json()["is_fallback"] is True

        en = _article(client, admin_headers, member_id, "en", "Bio EN")

        res = client.get(f"/articles/member/{member_id}", params={"lang": "EN"})
        assert res.json()["id"] == en["id"]
        assert res.json()["requested_language"] == "en"
        assert res.json()["is_fallback"] is False

        res = client.get(f"/articles/member/{member_id}", params={"lang": "fr"})
        assert res.json()["id"] == sr["id"]

        listing = client.get(f"/articles/member/{member_id}/all").json()
        assert [a["language"] for a in listing] == ["sr", "en"]

    def test_no_article_is_404(self, client, member_id):
        res = client.get(f"/articles/member/{member_id}", params={"lang": "sr"})
        assert res.status_code == 404
        assert res.json()["detail"] == "Article not found"

    def test_unknown_member_is_404(self, client):
        assert client.get("/articles/member/321", params={"lang": "sr"}).status_code == 404

    def test_unsupported_language_is_400(self, client, admin_headers, member_id):
        res = client.get(f"/articles/member/{member_id}", params={"lang": "ja"})
        assert res.status_code == 400
        assert res.json()["detail"] == "Unsupported language: ja"

        res = client.post(
            "/articles",
            json={"family_member_id": member_id, "language": "ja", "content": "Bio"},
            headers=admin_headers,
        )
        assert res.status_code == 400

    def test_duplicate_language_is_409(self, client, admin_headers, member_id):
        _article(client, admin_headers, member_id, "sr", "Bio SR")

        res = client.post(
            "/articles",
            json={"family_member_id": member_id, "language": "sr", "content": "Again"},
            headers=admin_headers,
        )
        assert res.status_code == 409

    def test_template_when_content_missing(self, client, admin_headers, member_id):
        res = client.post(
            "/articles",
            json={"family_member_id": member_id, "template_type": "infobox"},
            headers=admin_headers,
        )
        assert res.status_code == 201
        assert "infobox" in res.json()["content"]
        assert res.json()["created_by"] == "admin-1"

    def test_update_history_and_delete(self, client, admin_headers, member_id):
        article = _article(client, admin_headers, member_id, "sr", "Bio SR")

        res = client.put(
            f"/articles/{article['id']}", json={"content": "Bio SR v2"}, headers=admin_headers
        )
        assert res.status_code == 200
        assert res.json()["content"] == "Bio SR v2"

        history = client.get(f"/articles/{article['id']}/history").json()
        assert [v["action"] for v in history["versions"]] == ["UPDATE", "INSERT"]
        assert history["versions"][0]["old_values"] == {"content": "Bio SR"}

        res = client.delete(f"/articles/{article['id']}", headers=admin_headers)
        assert res.status_code == 200
        assert client.get(f"/articles/{article['id']}").status_code == 404
        assert client.get(f"/articles/{article['id']}/history").status_code == 404

    def test_history_of_unknown_article_is_404(self, client):
        assert client.get("/articles/77/history").status_code == 404

    def test_history_survives_failed_audit(self, client, admin_headers, member_id, broken_audit):
        app.dependency_overrides[get_audit_sink] = lambda: broken_audit
        article = _article(client, admin_headers, member_id, "sr", "Bio SR")

        res = client.get(f"/articles/{article['id']}/history")
        assert res.status_code == 200
        assert res.json() == {"article_id": article["id"], "versions": []}


class TestTranslationEndpoints:
    """Automatic and manual translations."""

    def test_translate(self, client, admin_headers, member_id, provider):
        article = _article(client, admin_headers, member_id, "sr", "Bio SR")

        res = client.post(
            f"/articles/{article['id']}/translate",
            json={"target_language": "de"},
            headers=admin_headers,
        )
        assert res.status_code == 201
        assert res.json()["content"] == "[sr->de] Bio SR"
        assert res.json()["is_auto_translated"] is True
        assert provider.calls == [("Bio SR", "sr", "de")]

        listed = client.get(f"/articles/{article['id']}/translations").json()
        assert [t["language"] for t in listed] == ["de"]

    def test_translate_does_not_change_resolution(self, client, admin_headers, member_id):
        article = _article(client, admin_headers, member_id, "sr", "Bio SR")
        client.post(
            f"/articles/{article['id']}/translate",
            json={"target_language": "en"},
            headers=admin_headers,
        )

        res = client.get(f"/articles/member/{member_id}", params={"lang": "en"})
        assert res.json()["content"] == "Bio SR"
        assert res.json()["is_fallback"] is True

    def test_provider_failure_is_503(self, client, admin_headers, member_id, provider):
        article = _article(client, admin_headers, member_id, "sr", "Bio SR")
        provider.fail = True

        res = client.post(
            f"/articles/{article['id']}/translate",
            json={"target_language": "en"},
            headers=admin_headers,
        )
        assert res.status_code == 503
        assert client.get(f"/articles/{article['id']}/translations").json() == []

    def test_translate_requires_admin(self, client, editor_headers, admin_headers, member_id):
        article = _article(client, admin_headers, member_id, "sr", "Bio SR")

        res = client.post(
            f"/articles/{article['id']}/translate",
            json={"target_language": "en"},
            headers=editor_headers,
        )
        assert res.status_code == 403

    def test_manual_translation_overwrites_auto(self, client, admin_headers, member_id):
        article = _article(client, admin_headers, member_id, "sr", "Bio SR")
        client.post(
            f"/articles/{article['id']}/translate",
            json={"target_language": "en"},
            headers=admin_headers,
        )

        res = client.put(
            f"/articles/{article['id']}/translations/en",
            json={"content": "Bio EN, reviewed", "title": "Amir"},
            headers=admin_headers,
        )
        assert res.status_code == 200
        assert res.json()["is_auto_translated"] is False
        assert res.json()["title"] == "Amir"

        listed = client.get(f"/articles/{article['id']}/translations").json()
        assert len(listed) == 1
        assert listed[0]["content"] == "Bio EN, reviewed"


class TestAuditEndpoint:
    """Admin-only audit trail."""

    def test_admin_only(self, client, editor_headers, admin_headers, member_id):
        assert client.get(f"/audit/family_members/{member_id}").status_code == 401
        assert client.get(
            f"/audit/family_members/{member_id}", headers=editor_headers
        ).status_code == 403

        res = client.get(f"/audit/family_members/{member_id}", headers=admin_headers)
        assert res.status_code == 200
        assert [e["action"] for e in res.json()] == ["INSERT"]
        assert res.json()[0]["actor_id"] == "editor-1"
