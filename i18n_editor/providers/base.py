"""Base interface for translation backends."""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional


class TranslationBackendError(Exception):
    """A translation backend failed to translate a text."""

    def __init__(self, backend: str, message: str):
        super().__init__(f"{backend}: {message}")
        self.backend = backend


def language_code(locale_code: str, overrides: Optional[Dict[str, str]] = None) -> str:
    """
    Convert a canonical locale code into a backend's language code.

    Exact matches in overrides win, then the bare language subtag is looked
    up, and finally the bare language subtag is returned as-is.

    Example: ``language_code("pt-BR")`` -> ``"pt"``
    """
    overrides = overrides or {}
    if locale_code in overrides:
        return overrides[locale_code]
    language = locale_code.split("-", 1)[0]
    return overrides.get(language, language)


class TranslationBackend(ABC):
    """Base class for translation backends."""

    name: str = "backend"

    @abstractmethod
    def translate(self, text: str, source_lang: str, target_lang: str) -> List[str]:
        """
        Translate a text from source language to target language.

        Args:
            text: Source text
            source_lang: Canonical source locale code (e.g., "en")
            target_lang: Canonical target locale code (e.g., "zh-CN")

        Returns:
            Result items returned by the service; the first item is the
            translation. An empty list means the service had no answer.

        Raises:
            TranslationBackendError: If the service call fails
        """
        pass
