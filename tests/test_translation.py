"""Tests for the translation request flow and the Google provider."""

import pytest
import requests

from encyclopedia.core.content_store import put_article, translations_for
from encyclopedia.core.translation import request_translation
from encyclopedia.errors import NotFound, TranslationUnavailable, UnsupportedLanguage
from encyclopedia.models.audit_log import AuditLog
from encyclopedia.models.article_translation import ArticleTranslation
from encyclopedia.translation_provider import (
    DisabledTranslationProvider,
    GoogleTranslateProvider,
    TranslationProviderError,
)


class TestRequestTranslation:
    """Tests for request_translation."""

    def test_stores_automatic_translation(self, db, make_member, provider, audit):
        member = make_member("Amir")
        article = put_article(db, member.id, "sr", "Bio SR")

        translation = request_translation(db, article.id, "en", provider, actor_id="u1", audit=audit)

        assert provider.calls == [("Bio SR", "sr", "en")]
        assert translation.language == "en"
        assert translation.content == "[sr->en] Bio SR"
        assert translation.is_auto_translated is True
        assert db.query(AuditLog).filter(
            AuditLog.table_name == "article_translations"
        ).count() == 1

    def test_provider_failure_writes_nothing(self, db, make_member, provider):
        member = make_member("Amir")
        article = put_article(db, member.id, "sr", "Bio SR")
        provider.fail = True

        with pytest.raises(TranslationUnavailable):
            request_translation(db, article.id, "en", provider)

        assert db.query(ArticleTranslation).count() == 0

    def test_retranslation_overwrites(self, db, make_member, provider):
        member = make_member("Amir")
        article = put_article(db, member.id, "sr", "Bio SR")

        request_translation(db, article.id, "de", provider)
        request_translation(db, article.id, "de", provider)

        assert len(translations_for(db, article.id)) == 1

    def test_missing_article(self, db, provider):
        with pytest.raises(NotFound):
            request_translation(db, 404, "en", provider)

        assert provider.calls == []

    def test_unsupported_target(self, db, make_member, provider):
        member = make_member("Amir")
        article = put_article(db, member.id, "sr", "Bio SR")

        with pytest.raises(UnsupportedLanguage):
            request_translation(db, article.id, "zz", provider)

        assert provider.calls == []

    def test_disabled_provider_maps_to_unavailable(self, db, make_member):
        member = make_member("Amir")
        article = put_article(db, member.id, "sr", "Bio SR")

        with pytest.raises(TranslationUnavailable):
            request_translation(db, article.id, "en", DisabledTranslationProvider())


class FakeResponse:
    def __init__(self, payload, status=200):
        self.payload = payload
        self.status = status

    def raise_for_status(self):
        if self.status >= 400:
            raise requests.HTTPError(f"{self.status} error")

    def json(self):
        return self.payload


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.posts = []

    def post(self, url, **kwargs):
        self.posts.append((url, kwargs))
        if self.error:
            raise self.error
        return self.response


class TestGoogleTranslateProvider:
    """Tests for the Google Cloud Translation backend."""

    def test_translates_with_mapped_codes(self):
        session = FakeSession(FakeResponse({"data": {"translations": [{"translatedText": "Hello"}]}}))
        provider = GoogleTranslateProvider(api_key="k", url="https://example.test/v2", timeout=5, session=session)

        assert provider.translate("Zdravo", "sr", "en") == "Hello"

        url, kwargs = session.posts[0]
        assert url == "https://example.test/v2"
        assert kwargs["params"] == {"key": "k"}
        assert kwargs["json"]["source"] == "hr"
        assert kwargs["json"]["target"] == "en"
        assert kwargs["timeout"] == 5

    def test_missing_key(self):
        provider = GoogleTranslateProvider(api_key="", session=FakeSession())

        with pytest.raises(TranslationProviderError):
            provider.translate("Zdravo", "sr", "en")

    def test_blank_text_skips_the_call(self):
        session = FakeSession()
        provider = GoogleTranslateProvider(api_key="k", session=session)

        assert provider.translate("   ", "sr", "en") == "   "
        assert session.posts == []

    def test_unsupported_target(self):
        provider = GoogleTranslateProvider(api_key="k", session=FakeSession())

        with pytest.raises(TranslationProviderError):
            provider.translate("Zdravo", "sr", "ja")

    def test_network_error(self):
        session = FakeSession(error=requests.ConnectionError("down"))
        provider = GoogleTranslateProvider(api_key="k", session=session)

        with pytest.raises(TranslationProviderError):
            provider.translate("Zdravo", "sr", "en")

    def test_quota_error(self):
        session = FakeSession(FakeResponse({"error": "quota"}, status=403))
        provider = GoogleTranslateProvider(api_key="k", session=session)

        with pytest.raises(TranslationProviderError):
            provider.translate("Zdravo", "sr", "en")

    def test_malformed_response(self):
        session = FakeSession(FakeResponse({"data": {}}))
        provider = GoogleTranslateProvider(api_key="k", session=session)

        with pytest.raises(TranslationProviderError):
            provider.translate("Zdravo", "sr", "en")
