from enum import Enum

from encyclopedia.errors import UnsupportedLanguage


class Language(str, Enum):
    SR = "sr"
    EN = "en"
    FR = "fr"
    DE = "de"
    SV = "sv"
    IT = "it"
    ES = "es"
    SQ = "sq"
    TR = "tr"


# code -> (english name, native name)
LANGUAGE_NAMES: dict[Language, tuple[str, str]] = {
    Language.SR: ("Serbo-Croatian", "Srpski/Hrvatski"),
    Language.EN: ("English", "English"),
    Language.FR: ("French", "Français"),
    Language.DE: ("German", "Deutsch"),
    Language.SV: ("Swedish", "Svenska"),
    Language.IT: ("Italian", "Italiano"),
    Language.ES: ("Spanish", "Español"),
    Language.SQ: ("Albanian", "Shqip"),
    Language.TR: ("Turkish", "Türkçe"),
}


def require_supported(code: str | Language) -> Language:
    """Return the Language for ``code`` or raise UnsupportedLanguage."""
    if isinstance(code, Language):
        return code
    try:
        return Language((code or "").strip().lower())
    except ValueError:
        raise UnsupportedLanguage(code)


def supported_languages() -> list[dict[str, str]]:
    return [
        {"code": lang.value, "name": name, "native_name": native}
        for lang, (name, native) in LANGUAGE_NAMES.items()
    ]
