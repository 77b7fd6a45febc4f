"""Detect writes that would clobber an existing value and ask first."""

from typing import Any, Callable, Optional, Tuple

import structlog

from i18n_editor.key_resolver import TranslationRecord
from i18n_editor.keypath import is_scalar, parent_keypaths

logger = structlog.get_logger()


def confirm_on_console(message: str) -> bool:
    """Ask a yes/no question on the terminal. Anything but yes declines."""
    try:
        answer = input(f"{message} [y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


class OverrideGuard:
    """
    Checks a key against the source locale before it is written.

    Args:
        lookup: Returns the source-locale record for a key
        confirm: Modal yes/no prompt
    """

    def __init__(
        self,
        lookup: Callable[[str], Optional[TranslationRecord]],
        confirm: Callable[[str], bool] = confirm_on_console,
    ):
        self.lookup = lookup
        self.confirm = confirm

    def _value(self, key: str) -> Any:
        record = self.lookup(key)
        return None if record is None else record.value

    def find_conflict(self, full_key: str) -> Optional[Tuple[str, Any]]:
        """
        Find the key a write to full_key would overwrite.

        The key itself conflicts when it holds a scalar. Otherwise ancestors
        are checked nearest first; an ancestor holding an object is safe
        nesting, only a scalar ancestor blocks the write.

        Returns:
            (conflicting_key, current_value), or None
        """
        value = self._value(full_key)
        # Falsy scalars ("", 0, False) are still existing values and conflict
        if value is not None and is_scalar(value):
            return full_key, value

        for ancestor in parent_keypaths(full_key):
            value = self._value(ancestor)
            if value is None or not is_scalar(value) or value == "undefined":
                continue
            return ancestor, value

        return None

    def check_override(self, full_key: str) -> bool:
        """
        Return True when full_key may be written.

        Prompts only when a conflict exists; a declined prompt returns False.
        """
        conflict = self.find_conflict(full_key)
        if conflict is None:
            return True

        conflict_key, value = conflict
        logger.info("override_conflict", key=full_key, conflict_key=conflict_key)
        return bool(self.confirm(f"Already {conflict_key} 👉 {value}, overwrite it?"))
