"""Baidu Fanyi backend."""

import hashlib
import os
import random
from typing import List, Optional

from i18n_editor.providers.api import HTTPBackend
from i18n_editor.providers.base import TranslationBackendError, language_code

BAIDU_URL = "https://fanyi-api.baidu.com/api/trans/vip/translate"

BAIDU_LANGUAGES = {
    "zh-TW": "cht",
    "zh-HK": "cht",
    "zh-Hant": "cht",
    "ja": "jp",
    "ko": "kor",
    "fr": "fra",
    "es": "spa",
    "ar": "ara",
    "bg": "bul",
    "et": "est",
    "da": "dan",
    "fi": "fin",
    "ro": "rom",
    "sl": "slo",
    "sv": "swe",
    "vi": "vie",
}


class BaiduBackend(HTTPBackend):
    """Baidu Fanyi general translation API."""

    name = "baidu"

    def __init__(
        self,
        app_id: Optional[str] = None,
        app_key: Optional[str] = None,
        base_url: str = BAIDU_URL,
        **kwargs
    ):
        """
        Initialize Baidu backend.

        Args:
            app_id: App ID (default: from BAIDU_APP_ID env var)
            app_key: Secret key (default: from BAIDU_APP_KEY env var)

        Raises:
            ValueError: If credentials are missing
        """
        super().__init__(**kwargs)
        self.app_id = app_id or os.getenv("BAIDU_APP_ID")
        self.app_key = app_key or os.getenv("BAIDU_APP_KEY")
        self.base_url = base_url

        if not self.app_id or not self.app_key:
            raise ValueError(
                "Baidu credentials required. Set BAIDU_APP_ID and BAIDU_APP_KEY environment variables."
            )

    def _sign(self, text: str, salt: str) -> str:
        raw = f"{self.app_id}{text}{salt}{self.app_key}"
        return hashlib.md5(raw.encode("utf-8")).hexdigest()

    def translate(self, text: str, source_lang: str, target_lang: str) -> List[str]:
        salt = str(random.randint(32768, 65536))
        form = {
            "q": text,
            "from": language_code(source_lang, BAIDU_LANGUAGES),
            "to": language_code(target_lang, BAIDU_LANGUAGES),
            "appid": self.app_id,
            "salt": salt,
            "sign": self._sign(text, salt),
        }
        data = self._request("POST", self.base_url, data=form)

        if not isinstance(data, dict):
            raise TranslationBackendError(self.name, "unexpected response shape")
        if "error_code" in data and str(data["error_code"]) != "52000":
            raise TranslationBackendError(
                self.name, f"error {data['error_code']}: {data.get('error_msg', '')}"
            )

        return [item["dst"] for item in data.get("trans_result", []) if item.get("dst")]
