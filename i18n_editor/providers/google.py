"""Google Translate backend using the public web endpoint (no API key)."""

from typing import List

from i18n_editor.providers.api import HTTPBackend
from i18n_editor.providers.base import TranslationBackendError, language_code

GOOGLE_URL = "https://translate.googleapis.com/translate_a/single"

GOOGLE_LANGUAGES = {
    "zh": "zh-CN",
    "zh-CN": "zh-CN",
    "zh-Hans": "zh-CN",
    "zh-SG": "zh-CN",
    "zh-TW": "zh-TW",
    "zh-HK": "zh-TW",
    "zh-Hant": "zh-TW",
    "he": "iw",
}


class GoogleBackend(HTTPBackend):
    """Google Translate."""

    name = "google"

    def __init__(self, base_url: str = GOOGLE_URL, **kwargs):
        super().__init__(**kwargs)
        self.base_url = base_url

    def translate(self, text: str, source_lang: str, target_lang: str) -> List[str]:
        params = {
            "client": "gtx",
            "sl": language_code(source_lang, GOOGLE_LANGUAGES),
            "tl": language_code(target_lang, GOOGLE_LANGUAGES),
            "dt": "t",
            "q": text,
        }
        data = self._request("GET", self.base_url, params=params)

        # [[["Bonjour", "Hello", ...], ...], ...]
        if not isinstance(data, list) or not data or not isinstance(data[0], list):
            raise TranslationBackendError(self.name, "unexpected response shape")

        translated = "".join(
            segment[0]
            for segment in data[0]
            if isinstance(segment, list) and segment and isinstance(segment[0], str)
        )
        return [translated] if translated else []
