"""Typed, recoverable errors raised by the core.

The transport layer maps each one onto its ``status_code``.
"""


class EncyclopediaError(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(EncyclopediaError):
    """Missing family member, article or relationship."""

    status_code = 404


class InvalidRelationship(EncyclopediaError):
    """A member cannot be related to themselves."""

    status_code = 400


class InvalidFamilyMember(EncyclopediaError):
    status_code = 400


class Conflict(EncyclopediaError):
    """A canonical article already exists for this member and language."""

    status_code = 409


class UnsupportedLanguage(EncyclopediaError):
    status_code = 400

    def __init__(self, code: str):
        super().__init__(f"Unsupported language: {code}")
        self.code = code


class TranslationUnavailable(EncyclopediaError):
    """The translation provider failed; nothing was persisted."""

    status_code = 503
