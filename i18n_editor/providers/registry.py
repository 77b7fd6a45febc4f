"""Build the ordered chain of translation backends."""

from typing import Dict, List, Optional, Sequence, Type

import structlog

from i18n_editor.providers.api import APIBackend
from i18n_editor.providers.baidu import BaiduBackend
from i18n_editor.providers.base import TranslationBackend
from i18n_editor.providers.google import GoogleBackend
from i18n_editor.providers.youdao import YoudaoBackend

logger = structlog.get_logger()

BACKENDS: Dict[str, Type[TranslationBackend]] = {
    "google": GoogleBackend,
    "baidu": BaiduBackend,
    "youdao": YoudaoBackend,
    "api": APIBackend,
}

DEFAULT_CHAIN = ("google", "baidu", "youdao", "api")


def build_backends(names: Optional[Sequence[str]] = None) -> List[TranslationBackend]:
    """
    Instantiate backends in fallback order.

    Without explicit names the default chain is used and backends lacking
    credentials are skipped. Explicitly requested backends must be usable.

    Args:
        names: Backend names in the order they should be tried

    Returns:
        List of backend instances

    Raises:
        ValueError: If a name is unknown, or an explicitly requested backend
            is not configured
    """
    explicit = names is not None
    backends = []
    for name in (names if explicit else DEFAULT_CHAIN):
        if name not in BACKENDS:
            raise ValueError(f"Unknown backend: {name}")
        try:
            backends.append(BACKENDS[name]())
        except ValueError as e:
            if explicit:
                raise
            logger.info("backend_not_configured", backend=name, reason=str(e))
    return backends
