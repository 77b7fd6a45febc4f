"""Youdao translation backend."""

import hashlib
import os
import time
import uuid
from typing import List, Optional

from i18n_editor.providers.api import HTTPBackend
from i18n_editor.providers.base import TranslationBackendError, language_code

YOUDAO_URL = "https://openapi.youdao.com/api"

YOUDAO_LANGUAGES = {
    "zh": "zh-CHS",
    "zh-CN": "zh-CHS",
    "zh-Hans": "zh-CHS",
    "zh-TW": "zh-CHT",
    "zh-HK": "zh-CHT",
    "zh-Hant": "zh-CHT",
}


def truncate_input(text: str) -> str:
    """Input digest used by the v3 signature."""
    if len(text) <= 20:
        return text
    return f"{text[:10]}{len(text)}{text[-10:]}"


class YoudaoBackend(HTTPBackend):
    """Youdao Zhiyun text translation API."""

    name = "youdao"

    def __init__(
        self,
        app_key: Optional[str] = None,
        app_secret: Optional[str] = None,
        base_url: str = YOUDAO_URL,
        **kwargs
    ):
        """
        Initialize Youdao backend.

        Args:
            app_key: Application key (default: from YOUDAO_APP_KEY env var)
            app_secret: Application secret (default: from YOUDAO_APP_SECRET env var)

        Raises:
            ValueError: If credentials are missing
        """
        super().__init__(**kwargs)
        self.app_key = app_key or os.getenv("YOUDAO_APP_KEY")
        self.app_secret = app_secret or os.getenv("YOUDAO_APP_SECRET")
        self.base_url = base_url

        if not self.app_key or not self.app_secret:
            raise ValueError(
                "Youdao credentials required. Set YOUDAO_APP_KEY and YOUDAO_APP_SECRET environment variables."
            )

    def _sign(self, text: str, salt: str, curtime: str) -> str:
        raw = f"{self.app_key}{truncate_input(text)}{salt}{curtime}{self.app_secret}"
        return hashlib.sha256(raw.encode("utf-8")).hexdigest()

    def translate(self, text: str, source_lang: str, target_lang: str) -> List[str]:
        salt = uuid.uuid4().hex
        curtime = str(int(time.time()))
        form = {
            "q": text,
            "from": language_code(source_lang, YOUDAO_LANGUAGES),
            "to": language_code(target_lang, YOUDAO_LANGUAGES),
            "appKey": self.app_key,
            "salt": salt,
            "sign": self._sign(text, salt, curtime),
            "signType": "v3",
            "curtime": curtime,
        }
        data = self._request("POST", self.base_url, data=form)

        if not isinstance(data, dict):
            raise TranslationBackendError(self.name, "unexpected response shape")
        if str(data.get("errorCode", "0")) != "0":
            raise TranslationBackendError(self.name, f"error code {data['errorCode']}")

        return [item for item in data.get("translation", []) if item]
