import requests

from encyclopedia.config import settings
from encyclopedia.languages import Language
from encyclopedia.log import get_logger

logger = get_logger(__name__)


# ==========================================================
# PROVIDER ERRORS
# ==========================================================
class TranslationProviderError(Exception):
    """Anything the provider could not do: config, language, quota, network."""


# ==========================================================
# LANGUAGE CODES (internal -> Google)
# ==========================================================
# Google has no Serbo-Croatian target; Croatian is the closest match
GOOGLE_LANGUAGE_CODES = {
    Language.SR.value: "hr",
    Language.EN.value: "en",
    Language.FR.value: "fr",
    Language.DE.value: "de",
    Language.SV.value: "sv",
    Language.IT.value: "it",
    Language.ES.value: "es",
    Language.SQ.value: "sq",
    Language.TR.value: "tr",
}


# ==========================================================
# GOOGLE CLOUD TRANSLATION (v2 REST)
# ==========================================================
class GoogleTranslateProvider:
    def __init__(self, api_key=None, url=None, timeout=None, session=None):
        self.api_key = api_key if api_key is not None else settings.GOOGLE_TRANSLATE_API_KEY
        self.url = url or settings.GOOGLE_TRANSLATE_URL
        self.timeout = timeout or settings.TRANSLATE_TIMEOUT
        self.session = session or requests.Session()

    def translate(self, text: str, source_language: str, target_language: str) -> str:
        if not self.api_key:
            raise TranslationProviderError("Google Translate API key not configured")

        if not text or not text.strip():
            return text

        target = GOOGLE_LANGUAGE_CODES.get(target_language)
        if not target:
            raise TranslationProviderError(f"Unsupported target language: {target_language}")

        source = GOOGLE_LANGUAGE_CODES.get(source_language, "hr")

        try:
            res = self.session.post(
                self.url,
                params={"key": self.api_key},
                json={
                    "q": text,
                    "source": source,
                    "target": target,
                    "format": "html",
                },
                timeout=self.timeout,
            )
            res.raise_for_status()
            return res.json()["data"]["translations"][0]["translatedText"]

        except requests.RequestException as e:
            logger.warning("google_translate_request_failed", error=str(e))
            raise TranslationProviderError("Translation service unavailable") from e

        except (KeyError, IndexError, ValueError) as e:
            logger.warning("google_translate_bad_response", error=str(e))
            raise TranslationProviderError("Unexpected translation service response") from e


class DisabledTranslationProvider:
    def translate(self, text: str, source_language: str, target_language: str) -> str:
        raise TranslationProviderError("Automatic translation is disabled")


# ==========================================================
# BACKEND SELECTION
# ==========================================================
def get_translation_provider():
    if settings.TRANSLATION_BACKEND == "google":
        return GoogleTranslateProvider()

    elif settings.TRANSLATION_BACKEND == "disabled":
        return DisabledTranslationProvider()

    else:
        raise ValueError("Invalid TRANSLATION_BACKEND")
