"""Shared fixtures for locale roots and stub translation backends."""

import json
import logging
from pathlib import Path
from typing import List, Optional

import pytest
import structlog
import yaml

from i18n_editor.config import EditorConfig
from i18n_editor.providers.base import TranslationBackend, TranslationBackendError

# Keep structlog output out of captured stdout
structlog.configure(
    wrapper_class=structlog.make_filtering_bound_logger(logging.CRITICAL),
)


class StubBackend(TranslationBackend):
    """Backend returning canned results, or raising, and recording calls."""

    def __init__(self, name: str, results: Optional[dict] = None, fail: bool = False):
        self.name = name
        self.results = results or {}
        self.fail = fail
        self.calls: List[tuple] = []

    def translate(self, text: str, source_lang: str, target_lang: str) -> List[str]:
        self.calls.append((text, source_lang, target_lang))
        if self.fail:
            raise TranslationBackendError(self.name, "service unavailable")
        result = self.results.get(target_lang)
        return [result] if result else []


def write_json(path: Path, data) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
    return path


def write_yaml(path: Path, data) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(data, allow_unicode=True), encoding="utf-8")
    return path


@pytest.fixture
def config() -> EditorConfig:
    return EditorConfig(source_locale="en")


@pytest.fixture
def file_root(tmp_path: Path) -> Path:
    """File-structured root: one JSON file per locale."""
    root = tmp_path / "locales"
    write_json(root / "fr.json", {"greeting": "Salut", "nav": {"home": "Accueil"}})
    write_json(root / "en.json", {"greeting": "Hello", "nav": {"home": "Home"}})
    return root


@pytest.fixture
def dir_root(tmp_path: Path) -> Path:
    """Directory-structured root: one directory of namespace files per locale."""
    root = tmp_path / "locales"
    write_json(root / "en" / "ns.json", {"a": {"b": "Hello"}})
    write_json(root / "zh-CN" / "ns.json", {"a": {"b": "你好"}})
    return root
