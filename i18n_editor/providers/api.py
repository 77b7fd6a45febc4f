"""HTTP plumbing shared by translation backends, and a generic JSON API backend."""

import os
import time
from typing import Any, Dict, List, Optional

import requests
import structlog

from i18n_editor.providers.base import TranslationBackend, TranslationBackendError

logger = structlog.get_logger()

RETRY_STATUS_CODES = (429, 500, 502, 503, 504)


class HTTPBackend(TranslationBackend):
    """Translation backend talking to an HTTP service."""

    def __init__(
        self,
        max_retries: int = 2,
        retry_delay: float = 1.0,
        timeout: float = 30.0
    ):
        """
        Initialize HTTP backend.

        Args:
            max_retries: Number of retries after the first attempt (default: 2)
            retry_delay: Initial delay between retries in seconds (default: 1.0)
            timeout: Request timeout in seconds (default: 30.0)
        """
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.timeout = timeout

    def _wait(self, attempt: int, response: Optional[requests.Response] = None) -> None:
        retry_after = response.headers.get("Retry-After") if response is not None else None
        try:
            delay = float(retry_after) if retry_after else self.retry_delay * (2 ** attempt)
        except ValueError:
            delay = self.retry_delay * (2 ** attempt)
        time.sleep(delay)

    def _request(self, method: str, url: str, **kwargs) -> Any:
        """
        Make a request with retries and exponential backoff.

        Rate limits (429) and server errors are retried, honoring
        Retry-After; other HTTP errors fail immediately.

        Returns:
            Decoded JSON response

        Raises:
            TranslationBackendError: If the request fails after retries
        """
        last_error = "request not attempted"
        for attempt in range(self.max_retries + 1):
            try:
                response = requests.request(method, url, timeout=self.timeout, **kwargs)
            except requests.exceptions.RequestException as e:
                last_error = f"request failed: {e}"
                if attempt < self.max_retries:
                    self._wait(attempt)
                    continue
                break

            if response.status_code in RETRY_STATUS_CODES:
                last_error = f"HTTP {response.status_code}: {response.text[:200]}"
                if attempt < self.max_retries:
                    logger.debug(
                        "backend_retry",
                        backend=self.name,
                        status=response.status_code,
                        attempt=attempt + 1,
                    )
                    self._wait(attempt, response)
                    continue
                break

            if not response.ok:
                raise TranslationBackendError(
                    self.name, f"HTTP {response.status_code}: {response.text[:200]}"
                )

            try:
                return response.json()
            except ValueError as e:
                raise TranslationBackendError(self.name, f"invalid JSON response: {e}")

        raise TranslationBackendError(
            self.name, f"{last_error} (after {self.max_retries + 1} attempts)"
        )


class APIBackend(HTTPBackend):
    """
    Generic translation API.

    POSTs ``{"text", "source_lang", "target_lang"}`` to
    ``<TRANSLATION_API_URL>/translate`` and expects
    ``{"translations": ["..."]}`` back.
    """

    name = "api"

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        **kwargs
    ):
        """
        Initialize API backend.

        Args:
            api_key: API key (default: from TRANSLATION_API_KEY env var)
            base_url: API base URL (default: from TRANSLATION_API_URL env var)

        Raises:
            ValueError: If no base URL is configured
        """
        super().__init__(**kwargs)
        self.api_key = api_key or os.getenv("TRANSLATION_API_KEY")
        self.base_url = base_url or os.getenv("TRANSLATION_API_URL")

        if not self.base_url:
            raise ValueError("API URL required. Set TRANSLATION_API_URL environment variable.")

    def translate(self, text: str, source_lang: str, target_lang: str) -> List[str]:
        url = f"{self.base_url.rstrip('/')}/translate"
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        payload: Dict[str, Any] = {
            "text": text,
            "source_lang": source_lang,
            "target_lang": target_lang,
        }
        data = self._request("POST", url, json=payload, headers=headers)

        translations = data.get("translations", []) if isinstance(data, dict) else []
        return [item for item in translations if isinstance(item, str)]
