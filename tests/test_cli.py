"""Tests for the command line interface."""

import json
import os
from pathlib import Path
from unittest.mock import patch

import pytest

from conftest import StubBackend
from i18n_editor.cli import main


@pytest.fixture(autouse=True)
def clean_env():
    with patch.dict(os.environ, {}, clear=True), patch("i18n_editor.cli.configure_logging"):
        yield


def test_cli_get(file_root: Path, capsys):
    """Test printing a key for every locale."""
    main(["--locale-path", str(file_root), "get", "greeting"])

    out = capsys.readouterr().out
    assert out.splitlines() == ['en: "Hello"', 'fr: "Salut"']


def test_cli_set_and_remove(file_root: Path, capsys):
    """Test writing and removing a key."""
    main(["--locale-path", str(file_root), "set", "a.b", "value", "--locale", "fr", "--yes"])
    assert "✓ Wrote a.b to 1 file(s)" in capsys.readouterr().out
    assert json.loads((file_root / "fr.json").read_text(encoding="utf-8"))["a.b"] == "value"

    main(["--locale-path", str(file_root), "remove", "a.b"])
    assert "a.b" not in json.loads((file_root / "fr.json").read_text(encoding="utf-8"))


def test_cli_set_declined_override(file_root: Path, capsys):
    """Test that declining the override prompt keeps the file unchanged."""
    with patch("builtins.input", return_value="n"):
        main(["--locale-path", str(file_root), "set", "greeting.formal", "Good day"])

    assert "Skipped" in capsys.readouterr().out
    en = json.loads((file_root / "en.json").read_text(encoding="utf-8"))
    assert "greeting.formal" not in en


def test_cli_set_json_value(file_root: Path):
    """Test writing a JSON value."""
    main(["--locale-path", str(file_root), "set", "counts", '{"one": "1"}', "--json", "--yes"])
    en = json.loads((file_root / "en.json").read_text(encoding="utf-8"))
    assert en["counts"] == {"one": "1"}


def test_cli_translate_writes_results(file_root: Path, tmp_path: Path, capsys):
    """Test translating, reporting and writing back."""
    backend = StubBackend("stub", {"fr": "Bonjour"})
    with patch("i18n_editor.cli.build_backends", return_value=[backend]):
        main([
            "--locale-path", str(file_root),
            "translate", "greeting",
            "--write",
            "--runs-dir", str(tmp_path / "runs"),
        ])

    out = capsys.readouterr().out
    assert "Translated:      1" in out
    assert "✓ Wrote 1 translation(s)" in out
    assert json.loads((file_root / "fr.json").read_text(encoding="utf-8"))["greeting"] == "Bonjour"
    assert len(list((tmp_path / "runs").iterdir())) == 1


def test_cli_locales(dir_root: Path, capsys):
    """Test listing locales."""
    main(["--locale-path", str(dir_root), "locales"])

    out = capsys.readouterr().out
    assert "Structure:   dir" in out
    assert "zh-CN" in out


def test_cli_requires_locale_path(capsys):
    """Test that a missing locale root is an error."""
    with pytest.raises(SystemExit) as exc_info:
        main(["get", "greeting"])
    assert exc_info.value.code == 1
    assert "No locale root given" in capsys.readouterr().err


def test_cli_uses_env_locale_path(file_root: Path, capsys):
    """Test that I18N_LOCALE_PATHS supplies the default root."""
    with patch.dict(os.environ, {"I18N_LOCALE_PATHS": str(file_root)}):
        main(["get", "nav.home"])
    assert 'fr: "Accueil"' in capsys.readouterr().out
