"""Tests for the read-through file cache."""

from pathlib import Path

from conftest import write_json, write_yaml
from i18n_editor.file_cache import FileCache, WatchEvent


def test_read_parses_json_and_yaml(tmp_path: Path):
    """Test that files are parsed according to their extension."""
    json_file = write_json(tmp_path / "en.json", {"a": "json"})
    yaml_file = write_yaml(tmp_path / "fr.yml", {"a": "yaml"})
    cache = FileCache()

    assert cache.read(json_file) == {"a": "json"}
    assert cache.read(yaml_file) == {"a": "yaml"}
    assert json_file in cache
    assert len(cache) == 2


def test_read_uses_cache_only_when_asked(tmp_path: Path):
    """Test that use_cache returns the cached object and skips the disk."""
    path = write_json(tmp_path / "en.json", {"a": "old"})
    cache = FileCache()
    first = cache.read(path)

    write_json(path, {"a": "new"})

    assert cache.read(path, use_cache=True) is first
    assert cache.read(path, use_cache=True)["a"] == "old"
    assert cache.read(path)["a"] == "new"


def test_corrupt_file_reads_as_empty(tmp_path: Path):
    """Test that a corrupt file degrades to an empty dict and is cached."""
    path = tmp_path / "en.json"
    path.write_text("{ invalid json", encoding="utf-8")
    cache = FileCache()

    assert cache.read(path) == {}
    assert cache.get(path) == {}


def test_missing_and_non_mapping_files_read_as_empty(tmp_path: Path):
    """Test that missing files and non-dict content are treated as empty."""
    list_file = write_json(tmp_path / "list.json", ["a", "b"])
    scalar_file = tmp_path / "scalar.yml"
    scalar_file.write_text("just a string\n", encoding="utf-8")
    cache = FileCache()

    assert cache.read(tmp_path / "missing.json") == {}
    assert cache.read(list_file) == {}
    assert cache.read(scalar_file) == {}


def test_events_applied_in_arrival_order(tmp_path: Path):
    """Test that queued events are applied in order before the next read."""
    path = write_json(tmp_path / "en.json", {"a": "old"})
    cache = FileCache()
    cache.read(path)

    write_json(path, {"a": "new"})
    cache.enqueue(WatchEvent("changed", str(path)))
    cache.enqueue(WatchEvent("deleted", str(path)))
    cache.enqueue(WatchEvent("changed", str(tmp_path / "notes.txt")))

    assert cache.process_events() == 2
    assert path not in cache


def test_change_event_refreshes_before_cached_read(tmp_path: Path):
    """Test that a pending change event is seen by the next cached read."""
    path = write_json(tmp_path / "en.json", {"a": "old"})
    cache = FileCache()
    cache.read(path)

    write_json(path, {"a": "new"})
    cache.enqueue(WatchEvent("changed", str(path)))

    assert cache.read(path, use_cache=True) == {"a": "new"}
