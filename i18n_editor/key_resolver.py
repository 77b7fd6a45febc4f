"""Map an abstract dotted key onto a concrete file and in-file keypath."""

import os
import secrets
from dataclasses import dataclass, field
from typing import Any, Tuple

from i18n_editor.keypath import MISSING
from i18n_editor.locale_store import LocaleEntry, StructureType


def new_record_id() -> str:
    """Ephemeral identifier for a record; only meaningful for display."""
    return secrets.token_hex(3)


@dataclass
class TranslationRecord:
    """
    One key in one locale.

    Attributes:
        locale_code: Locale of the owning entry
        entry_path: Locale file or directory
        is_directory: Whether the locale is directory-structured
        root_path: Locale root
        raw_name: Entry name before normalization
        resolved_file_path: File this record lives in
        in_file_key_path: Keypath inside the parsed file ("" = whole file)
        full_key: Key as supplied by the caller, identical across locales
        id: Per-lookup identifier
        value: Current value; MISSING when absent
    """

    locale_code: str
    entry_path: str
    is_directory: bool
    root_path: str
    raw_name: str
    resolved_file_path: str
    in_file_key_path: str
    full_key: str
    id: str = field(default_factory=new_record_id)
    value: Any = MISSING


def split_namespace(full_key: str) -> Tuple[str, str]:
    """
    Split a key into its namespace and the remaining keypath.

    Example: ``"common.button.ok"`` -> ``("common", "button.ok")``
    """
    namespace, _, rest = full_key.partition(".")
    return namespace, rest


class KeyResolver:
    """Resolves keys for a locale root of a given structure and format."""

    def __init__(self, structure_type: StructureType, file_ext: str):
        self.structure_type = structure_type
        self.file_ext = file_ext

    def resolve(self, entry: LocaleEntry, full_key: str) -> Tuple[str, str]:
        """
        Resolve a key for one locale.

        File-structured roots keep the key as-is inside the locale file.
        Directory-structured roots use the first segment as the namespace
        file name and the rest as the keypath inside it.

        Returns:
            (resolved_file_path, in_file_key_path)
        """
        if self.structure_type != StructureType.DIR:
            return entry.entry_path, full_key

        namespace, rest = split_namespace(full_key)
        file_path = os.path.join(entry.entry_path, f"{namespace}{self.file_ext}")
        return file_path, rest

    def record_for(self, entry: LocaleEntry, full_key: str) -> TranslationRecord:
        """Build a value-less record for one locale."""
        file_path, keypath = self.resolve(entry, full_key)
        return TranslationRecord(
            locale_code=entry.locale_code,
            entry_path=entry.entry_path,
            is_directory=entry.is_directory,
            root_path=entry.root_path,
            raw_name=entry.raw_name,
            resolved_file_path=file_path,
            in_file_key_path=keypath,
            full_key=full_key,
        )
