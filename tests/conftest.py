"""Shared fixtures: a throwaway SQLite database per test and an API client wired to it."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from encyclopedia.auth import Role, create_access_token
from encyclopedia.core.audit import AuditSink, get_audit_sink
from encyclopedia.database import Base, get_db
from encyclopedia.main import app
from encyclopedia.models.family_member import FamilyMember
from encyclopedia.translation_provider import TranslationProviderError, get_translation_provider


class FakeTranslationProvider:
    """Records calls and returns a tagged copy of the text."""

    def __init__(self):
        self.calls = []
        self.fail = False

    def translate(self, text, source_language, target_language):
        self.calls.append((text, source_language, target_language))
        if self.fail:
            raise TranslationProviderError("quota exceeded")
        return f"[{source_language}->{target_language}] {text}"


class BrokenAuditSession:
    def add(self, row):
        raise RuntimeError("audit database is down")

    def commit(self):
        pass

    def close(self):
        pass


@pytest.fixture
def session_factory(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'test.db'}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield factory
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def audit(session_factory):
    return AuditSink(session_factory)


@pytest.fixture
def broken_audit():
    return AuditSink(BrokenAuditSession)


@pytest.fixture
def provider():
    return FakeTranslationProvider()


@pytest.fixture
def make_member(db):
    def _make(name, **fields):
        member = FamilyMember(name=name, **fields)
        db.add(member)
        db.commit()
        db.refresh(member)
        return member

    return _make


@pytest.fixture
def client(session_factory, audit, provider):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_audit_sink] = lambda: audit
    app.dependency_overrides[get_translation_provider] = lambda: provider

    yield TestClient(app)

    app.dependency_overrides.clear()


def _auth(role):
    return {"Authorization": f"Bearer {create_access_token(f'{role.value}-1', role)}"}


@pytest.fixture
def viewer_headers():
    return _auth(Role.VIEWER)


@pytest.fixture
def editor_headers():
    return _auth(Role.EDITOR)


@pytest.fixture
def admin_headers():
    return _auth(Role.ADMIN)
