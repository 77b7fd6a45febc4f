"""Tests for override conflict detection."""

from pathlib import Path
from unittest.mock import Mock, patch

from conftest import write_json
from i18n_editor.editor import I18nEditor
from i18n_editor.override_guard import confirm_on_console


def make_editor(tmp_path: Path, config, source: dict, confirm) -> I18nEditor:
    write_json(tmp_path / "en.json", source)
    write_json(tmp_path / "fr.json", {})
    return I18nEditor(tmp_path, config=config, backends=[], confirm=confirm, watch=False)


def test_scalar_ancestor_conflict_prompts(tmp_path: Path, config):
    """Test that a scalar ancestor is detected and the user is asked."""
    confirm = Mock(return_value=False)
    editor = make_editor(tmp_path, config, {"a": {"b": "hello"}}, confirm)

    assert editor.guard.find_conflict("a.b.c") == ("a.b", "hello")
    assert editor.check_override("a.b.c") is False
    confirm.assert_called_once()
    message = confirm.call_args[0][0]
    assert "a.b" in message
    assert "hello" in message


def test_confirmed_conflict_proceeds(tmp_path: Path, config):
    """Test that an explicit confirmation allows the write."""
    confirm = Mock(return_value=True)
    editor = make_editor(tmp_path, config, {"a": {"b": "hello"}}, confirm)

    assert editor.check_override("a.b.c") is True
    confirm.assert_called_once()


def test_object_ancestor_is_safe(tmp_path: Path, config):
    """Test that nesting under an existing object needs no prompt."""
    confirm = Mock(return_value=False)
    editor = make_editor(tmp_path, config, {"a": {"b": "hello"}}, confirm)

    assert editor.guard.find_conflict("a.c") is None
    assert editor.check_override("a.c") is True
    confirm.assert_not_called()


def test_existing_leaf_conflicts_with_itself(tmp_path: Path, config):
    """Test that an existing scalar at the key itself is a conflict."""
    confirm = Mock(return_value=False)
    editor = make_editor(tmp_path, config, {"a": {"b": "hello"}}, confirm)

    assert editor.guard.find_conflict("a.b") == ("a.b", "hello")
    assert editor.check_override("a.b") is False


def test_falsy_leaf_values_conflict(tmp_path: Path, config):
    """Test that empty strings, zero and false at the key are conflicts."""
    confirm = Mock(return_value=False)
    editor = make_editor(tmp_path, config, {"empty": "", "zero": 0, "off": False}, confirm)

    assert editor.guard.find_conflict("empty") == ("empty", "")
    assert editor.guard.find_conflict("zero") == ("zero", 0)
    assert editor.guard.find_conflict("off") == ("off", False)
    assert editor.check_override("empty") is False
    confirm.assert_called_once()


def test_existing_subtree_is_not_a_leaf_conflict(tmp_path: Path, config):
    """Test that the key itself holding an object is not a conflict."""
    confirm = Mock(return_value=False)
    editor = make_editor(tmp_path, config, {"a": {"b": "hello"}}, confirm)

    assert editor.guard.find_conflict("a") is None


def test_literal_undefined_and_null_ancestors_are_skipped(tmp_path: Path, config):
    """Test that "undefined" strings and nulls never block a write."""
    confirm = Mock(return_value=False)
    editor = make_editor(
        tmp_path, config, {"a": {"b": "undefined"}, "n": None, "top": "value"}, confirm
    )

    assert editor.guard.find_conflict("a.b.c") is None
    assert editor.guard.find_conflict("n.x") is None
    assert editor.guard.find_conflict("top.x.y") == ("top", "value")


def test_conflict_uses_source_locale(tmp_path: Path, config):
    """Test that only the source locale file is consulted."""
    write_json(tmp_path / "en.json", {})
    write_json(tmp_path / "fr.json", {"a": "déjà"})
    editor = I18nEditor(tmp_path, config=config, backends=[], confirm=Mock(), watch=False)

    assert editor.guard.find_conflict("a.b") is None


def test_confirm_on_console():
    """Test the terminal prompt accepts only yes answers."""
    with patch("builtins.input", return_value="yes"):
        assert confirm_on_console("Overwrite?") is True
    with patch("builtins.input", return_value=""):
        assert confirm_on_console("Overwrite?") is False
    with patch("builtins.input", side_effect=EOFError):
        assert confirm_on_console("Overwrite?") is False
