"""Tests for environment-based configuration."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from i18n_editor.config import EditorConfig


def test_config_defaults():
    """Test defaults when no variables are set."""
    with patch.dict(os.environ, {}, clear=True):
        config = EditorConfig.from_env()
    assert config.source_locale == "en"
    assert config.locale_paths == []
    assert config.watch is False
    assert config.max_workers == 4
    assert config.runs_dir == Path("work/runs")


def test_config_from_env():
    """Test reading every I18N_* variable."""
    env = {
        "I18N_SOURCE_LOCALE": "zh_cn",
        "I18N_LOCALE_PATHS": f"locales{os.pathsep}app/i18n, extra",
        "I18N_WATCH": "yes",
        "I18N_WATCH_INTERVAL": "0.5",
        "I18N_MAX_WORKERS": "8",
        "I18N_RUNS_DIR": "/tmp/runs",
    }
    with patch.dict(os.environ, env, clear=True):
        config = EditorConfig.from_env()

    assert config.source_locale == "zh-CN"
    assert config.locale_paths == [Path("locales"), Path("app/i18n"), Path("extra")]
    assert config.watch is True
    assert config.watch_interval == 0.5
    assert config.max_workers == 8
    assert config.runs_dir == Path("/tmp/runs")


def test_config_override_source_locale():
    """Test that an explicit source locale wins over the environment."""
    with patch.dict(os.environ, {"I18N_SOURCE_LOCALE": "de"}, clear=True):
        assert EditorConfig.from_env(source_locale="fr").source_locale == "fr"


def test_config_invalid_values():
    """Test that invalid values are rejected with the variable name."""
    with patch.dict(os.environ, {"I18N_MAX_WORKERS": "many"}, clear=True):
        with pytest.raises(ValueError, match="I18N_MAX_WORKERS"):
            EditorConfig.from_env()
    with pytest.raises(ValueError, match="Unrecognized source locale"):
        EditorConfig(source_locale="not-a-locale")
    with pytest.raises(ValueError, match="max_workers"):
        EditorConfig(max_workers=0)
