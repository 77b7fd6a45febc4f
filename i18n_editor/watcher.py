"""Poll-based recursive watcher feeding locale file changes into a FileCache.

Each poll takes a stat snapshot of every JSON/YAML file under the locale
root and diffs it against the previous one; differences are queued on the
cache as created/changed/deleted events.
"""

import os
import threading
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

import structlog

from i18n_editor.file_cache import (
    EVENT_CHANGED,
    EVENT_CREATED,
    EVENT_DELETED,
    FileCache,
    WatchEvent,
)
from i18n_editor.io_files import is_data_file

logger = structlog.get_logger()

Snapshot = Dict[str, Tuple[int, int]]


def take_snapshot(root: Path) -> Snapshot:
    """
    Collect ``(mtime_ns, size)`` for every JSON/YAML file below root.

    Unreadable directories and files that vanish mid-scan are skipped.
    """
    snapshot: Snapshot = {}
    pending = [root]
    while pending:
        directory = pending.pop()
        try:
            with os.scandir(directory) as entries:
                for child in entries:
                    try:
                        if child.is_dir(follow_symlinks=False):
                            pending.append(Path(child.path))
                            continue
                        if not is_data_file(child.name):
                            continue
                        st = child.stat(follow_symlinks=False)
                    except OSError:
                        continue
                    snapshot[str(Path(child.path).absolute())] = (st.st_mtime_ns, st.st_size)
        except OSError:
            continue
    return snapshot


def diff_snapshots(before: Snapshot, after: Snapshot) -> List[WatchEvent]:
    """Turn two snapshots into watch events, sorted by path."""
    events = []
    for path in sorted(set(before) | set(after)):
        if path not in before:
            events.append(WatchEvent(EVENT_CREATED, path))
        elif path not in after:
            events.append(WatchEvent(EVENT_DELETED, path))
        elif before[path] != after[path]:
            events.append(WatchEvent(EVENT_CHANGED, path))
    return events


class LocaleWatcher:
    """Recursive watcher over one locale root."""

    def __init__(self, root: Union[str, Path], cache: FileCache, interval: float = 1.0):
        self.root = Path(root).absolute()
        self.cache = cache
        self.interval = interval
        self._snapshot = take_snapshot(self.root)
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def poll(self) -> List[WatchEvent]:
        """
        Rescan the root and queue every change since the last poll.

        Returns:
            Events queued on the cache
        """
        snapshot = take_snapshot(self.root)
        events = diff_snapshots(self._snapshot, snapshot)
        self._snapshot = snapshot
        for event in events:
            self.cache.enqueue(event)
        if events:
            logger.debug("locale_files_changed", root=str(self.root), count=len(events))
        return events

    def _run(self) -> None:
        while not self._stop.wait(self.interval):
            try:
                self.poll()
            except Exception as e:
                logger.warning("watch_poll_failed", root=str(self.root), error=str(e))

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> "LocaleWatcher":
        if self.running:
            return self
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._run,
            name=f"locale-watcher:{self.root.name}",
            daemon=True,
        )
        self._thread.start()
        logger.info("locale_watcher_started", root=str(self.root), interval=self.interval)
        return self

    def stop(self) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None

    def __enter__(self) -> "LocaleWatcher":
        return self.start()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()
