"""Discover the locales stored under a locale root."""

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional, Union

import structlog

from i18n_editor.io_files import FILE_EXT_JSON, YAML_EXTENSIONS
from i18n_editor.locale_codes import normalize_locale
from i18n_editor.logging_setup import report_error

logger = structlog.get_logger()


class StructureType(str, Enum):
    """Physical layout of a locale root."""

    DIR = "dir"  # one directory of namespace files per locale
    FILE = "file"  # one file per locale


@dataclass(frozen=True)
class LocaleEntry:
    """
    One locale found under a locale root.

    Attributes:
        root_path: Absolute path of the locale root
        entry_path: Absolute path of this locale's file or directory
        is_directory: Whether the locale is a directory of namespace files
        raw_name: File name without extension, or directory name
        locale_code: Normalized locale code (e.g. "en", "zh-CN")
    """

    root_path: str
    entry_path: str
    is_directory: bool
    raw_name: str
    locale_code: str


def classify_structure(entries: List[LocaleEntry]) -> StructureType:
    """A root is directory-structured as soon as any locale is a directory."""
    if any(entry.is_directory for entry in entries):
        return StructureType.DIR
    return StructureType.FILE


def detect_format(entries: List[LocaleEntry]) -> str:
    """
    Determine the file extension used by a locale root.

    The first entry decides: a file contributes its own extension; for a
    directory, YAML wins if it holds at least one YAML file, preferring
    ``.yml`` over ``.yaml`` when both are present.

    Returns:
        File extension including the dot (".json", ".yml" or ".yaml")
    """
    if not entries:
        return FILE_EXT_JSON

    first = entries[0]
    if not first.is_directory:
        return Path(first.entry_path).suffix or FILE_EXT_JSON

    try:
        names = os.listdir(first.entry_path)
    except OSError:
        return FILE_EXT_JSON
    suffixes = {Path(name).suffix.lower() for name in names}
    for ext in YAML_EXTENSIONS:
        if ext in suffixes:
            return ext
    return FILE_EXT_JSON


class LocaleStore:
    """
    Locale entries of one locale root.

    Structure type and file format are detected once at construction;
    a structural change on disk needs a new LocaleStore.
    """

    def __init__(
        self,
        root_path: Union[str, Path],
        source_locale: str,
        normalize: Callable[[str], str] = normalize_locale,
    ):
        self.root_path = Path(root_path).absolute()
        self.source_locale = source_locale
        self.normalize = normalize

        entries = self.list_locales()
        self.structure_type = classify_structure(entries)
        self.file_ext = detect_format(entries)

        logger.info(
            "locale_root_detected",
            locale_path=str(self.root_path),
            structure=self.structure_type.value,
            file_ext=self.file_ext,
            locales=[entry.locale_code for entry in entries],
        )

    def list_locales(self) -> List[LocaleEntry]:
        """
        Enumerate the locales under the root, source locale first.

        Entries whose name is not a recognizable locale are skipped. Never
        raises: an empty or missing root reports a diagnostic and yields [].
        """
        try:
            names = sorted(os.listdir(self.root_path))
        except OSError:
            names = []

        entries = []
        for name in names:
            if name.startswith("."):
                continue
            entry_path = self.root_path / name
            is_directory = entry_path.is_dir()
            raw_name = name if is_directory else Path(name).stem
            locale_code = self.normalize(raw_name)
            if not locale_code:
                continue
            entries.append(
                LocaleEntry(
                    root_path=str(self.root_path),
                    entry_path=str(entry_path),
                    is_directory=is_directory,
                    raw_name=raw_name,
                    locale_code=locale_code,
                )
            )

        entries.sort(key=lambda entry: entry.locale_code != self.source_locale)

        if not entries:
            report_error(
                "could not recognize locale directory",
                locale_path=str(self.root_path),
            )

        return entries

    @property
    def locales(self) -> List[LocaleEntry]:
        return self.list_locales()

    def entry_for(self, locale_code: str) -> Optional[LocaleEntry]:
        for entry in self.list_locales():
            if entry.locale_code == locale_code:
                return entry
        return None
