"""Read, write, remove and translate keys across every locale of a locale root."""

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

import structlog

from i18n_editor.config import EditorConfig
from i18n_editor.file_cache import FileCache
from i18n_editor.io_files import write_data_file
from i18n_editor.key_resolver import KeyResolver, TranslationRecord
from i18n_editor.keypath import get_path, merge_key, omit_path
from i18n_editor.locale_store import LocaleStore
from i18n_editor.logging_setup import report_error
from i18n_editor.override_guard import OverrideGuard, confirm_on_console
from i18n_editor.providers.base import TranslationBackend
from i18n_editor.providers.registry import build_backends
from i18n_editor.run_logging import RunLogger
from i18n_editor.translate import Translator
from i18n_editor.watcher import LocaleWatcher

logger = structlog.get_logger()


class WriteError(Exception):
    """
    One or more locale files could not be written.

    Files written successfully before or alongside the failures stay on disk.

    Attributes:
        failures: File path -> exception
        written: Paths that were written
    """

    def __init__(self, failures: Dict[str, Exception], written: List[str]):
        details = "; ".join(f"{path}: {error}" for path, error in failures.items())
        super().__init__(f"Failed to write {len(failures)} file(s): {details}")
        self.failures = failures
        self.written = written


class I18nEditor:
    """
    Editing surface for one locale root.

    Args:
        locale_path: Locale root directory
        config: Editor configuration (default: from environment)
        cache: FileCache to read through; share one between editors to share
            parsed files (default: a new cache)
        backends: Translation backends in fallback order (default: built
            from the environment on first use)
        confirm: Yes/no prompt used by the override check
        watch: Start a watcher on the root (default: config.watch)
    """

    def __init__(
        self,
        locale_path: Union[str, Path],
        config: Optional[EditorConfig] = None,
        cache: Optional[FileCache] = None,
        backends: Optional[Sequence[TranslationBackend]] = None,
        confirm: Callable[[str], bool] = confirm_on_console,
        watch: Optional[bool] = None,
    ):
        self.config = config or EditorConfig.from_env()
        self.cache = cache if cache is not None else FileCache()
        self.store = LocaleStore(locale_path, self.config.source_locale)
        self.resolver = KeyResolver(self.store.structure_type, self.store.file_ext)
        self.guard = OverrideGuard(self._source_record, confirm)
        self._backends = list(backends) if backends is not None else None
        self._translator: Optional[Translator] = None

        self.watcher: Optional[LocaleWatcher] = None
        if self.config.watch if watch is None else watch:
            self.watcher = LocaleWatcher(
                self.store.root_path, self.cache, self.config.watch_interval
            ).start()

    @property
    def locale_path(self) -> Path:
        return self.store.root_path

    @property
    def translator(self) -> Translator:
        if self._translator is None:
            if self._backends is None:
                self._backends = build_backends()
            self._translator = Translator(
                self._backends,
                self.config.source_locale,
                max_workers=self.config.max_workers,
            )
        return self._translator

    def get_i18n(self, full_key: str) -> List[TranslationRecord]:
        """
        Look up a key in every locale.

        Args:
            full_key: Dotted key; in directory-structured roots the first
                segment names the namespace file

        Returns:
            One record per locale, source locale first
        """
        records = []
        for entry in self.store.list_locales():
            record = self.resolver.record_for(entry, full_key)
            data = self.cache.read(record.resolved_file_path, use_cache=True)
            record.value = get_path(data, record.in_file_key_path)
            records.append(record)
        return records

    def _source_record(self, full_key: str) -> Optional[TranslationRecord]:
        records = self.get_i18n(full_key)
        for record in records:
            if record.locale_code == self.config.source_locale:
                return record
        return records[0] if records else None

    def _write_file(self, file_path: str, records: List[TranslationRecord]) -> str:
        # Re-read right before merging so the latest cached content is used
        data = self.cache.read(file_path, use_cache=True)
        for record in records:
            merge_key(data, record.in_file_key_path, record.value)
        write_data_file(file_path, data)
        return file_path

    def write_i18n(self, records: List[TranslationRecord]) -> List[str]:
        """
        Persist record values, one concurrent write per target file.

        Records sharing a file are merged in order by a single task, so a
        file's data is never mutated while it is being serialized. Each
        value is stored under its full in-file keypath as one literal key.
        All writes are awaited; failures are not rolled back.

        Returns:
            Paths of the written files

        Raises:
            WriteError: If any file could not be written
        """
        if not records:
            return []

        by_file: Dict[str, List[TranslationRecord]] = {}
        for record in records:
            by_file.setdefault(record.resolved_file_path, []).append(record)

        written: List[str] = []
        failures: Dict[str, Exception] = {}
        with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
            futures = [
                (file_path, executor.submit(self._write_file, file_path, file_records))
                for file_path, file_records in by_file.items()
            ]
            for file_path, future in futures:
                try:
                    written.append(future.result())
                except Exception as e:
                    failures[file_path] = e

        if failures:
            for path, error in failures.items():
                logger.error("locale_file_write_failed", file=path, error=str(error))
            raise WriteError(failures, written)

        logger.info("i18n_written", key=records[0].full_key, files=len(written))
        return written

    def remove_i18n(self, full_key: str) -> None:
        """
        Remove a key from every locale. Best-effort per locale: a failed
        write is reported and the other locales are still processed.
        """
        for record in self.get_i18n(full_key):
            data = self.cache.read(record.resolved_file_path, use_cache=True)
            omit_path(data, record.in_file_key_path)
            try:
                write_data_file(record.resolved_file_path, data)
            except OSError as e:
                report_error(
                    "failed to remove key",
                    key=full_key,
                    file=record.resolved_file_path,
                    error=str(e),
                )
        logger.info("i18n_removed", key=full_key)

    def set_i18n(self, full_key: str, value: Any, locale: Optional[str] = None) -> List[str]:
        """
        Write value for one locale, or for every locale when locale is None.

        Raises:
            ValueError: If the locale is not part of this root
            WriteError: If a file could not be written
        """
        records = self.get_i18n(full_key)
        if locale is not None:
            records = [record for record in records if record.locale_code == locale]
            if not records:
                raise ValueError(f"Unknown locale {locale!r} in {self.locale_path}")
        for record in records:
            record.value = value
        return self.write_i18n(records)

    def trans_i18n(
        self,
        records: List[TranslationRecord],
        run_logger: Optional[RunLogger] = None
    ) -> List[TranslationRecord]:
        """Translate the source record's value into every other record."""
        translator = self.translator
        if run_logger is not None:
            translator = Translator(
                translator.backends,
                translator.source_locale,
                max_workers=translator.max_workers,
                run_logger=run_logger,
            )
        return translator.translate_batch(records)

    def check_override(self, full_key: str) -> bool:
        """True when writing full_key is safe or the user agreed to overwrite."""
        return self.guard.check_override(full_key)

    def close(self) -> None:
        if self.watcher is not None:
            self.watcher.stop()
            self.watcher = None

    def __enter__(self) -> "I18nEditor":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
