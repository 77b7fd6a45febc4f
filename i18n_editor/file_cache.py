"""Read-through cache of parsed locale files, kept fresh by watch events."""

import queue
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Union

import structlog

from i18n_editor.io_files import is_data_file, read_data_file

logger = structlog.get_logger()

EVENT_CREATED = "created"
EVENT_CHANGED = "changed"
EVENT_DELETED = "deleted"


@dataclass(frozen=True)
class WatchEvent:
    """A filesystem change reported for one file."""

    kind: str
    path: str


class FileCache:
    """
    Mapping from absolute file path to parsed file content.

    The cached dicts are handed out by reference and mutated in place by
    writers, so every reader sees the latest in-memory write. Watch events
    are queued by the watcher thread and applied in arrival order before
    every read.
    """

    def __init__(self):
        self._entries: Dict[str, Dict[str, Any]] = {}
        self._events: "queue.Queue[WatchEvent]" = queue.Queue()

    @staticmethod
    def _key(file_path: Union[str, Path]) -> str:
        return str(Path(file_path).absolute())

    def read(self, file_path: Union[str, Path], use_cache: bool = False) -> Dict[str, Any]:
        """
        Return the parsed content of a locale file.

        Unreadable or corrupt files, and files whose content is not a
        mapping, are cached and returned as an empty dict.

        Args:
            file_path: Path to a JSON or YAML file
            use_cache: Return the cached entry if there is one

        Returns:
            Parsed file content
        """
        self.process_events()

        key = self._key(file_path)
        if use_cache and key in self._entries:
            return self._entries[key]
        return self._load(key)

    def _load(self, key: str) -> Dict[str, Any]:
        try:
            data = read_data_file(key)
        except Exception as e:
            logger.debug("locale_file_unreadable", file=key, error=str(e))
            data = {}

        if not isinstance(data, dict):
            data = {}

        self._entries[key] = data
        return data

    def get(self, file_path: Union[str, Path]):
        """Return the cached entry without touching the disk, or None."""
        return self._entries.get(self._key(file_path))

    def invalidate(self, file_path: Union[str, Path]) -> None:
        self._entries.pop(self._key(file_path), None)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, file_path) -> bool:
        return self._key(file_path) in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def enqueue(self, event: WatchEvent) -> None:
        """Queue a watch event. Safe to call from any thread."""
        self._events.put(event)

    def process_events(self) -> int:
        """
        Apply queued watch events in arrival order.

        Created and changed files are re-read from disk; deleted files are
        dropped. Events for non JSON/YAML files are ignored.

        Returns:
            Number of events applied
        """
        applied = 0
        while True:
            try:
                event = self._events.get_nowait()
            except queue.Empty:
                return applied

            if not is_data_file(event.path):
                continue

            if event.kind == EVENT_DELETED:
                self.invalidate(event.path)
            elif event.kind in (EVENT_CREATED, EVENT_CHANGED):
                self._load(self._key(event.path))
            else:
                logger.warning("unknown_watch_event", kind=event.kind, path=event.path)
                continue

            logger.debug("watch_event_applied", kind=event.kind, path=event.path)
            applied += 1
