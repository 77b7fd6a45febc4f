"""Editor configuration read from the environment."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from i18n_editor.locale_codes import normalize_locale


DEFAULT_SOURCE_LOCALE = "en"
DEFAULT_WATCH_INTERVAL = 1.0
DEFAULT_MAX_WORKERS = 4
DEFAULT_RUNS_DIR = Path("work/runs")


def _split_paths(value: str) -> List[Path]:
    """Split a path list separated by os.pathsep or commas."""
    paths = []
    for chunk in value.replace(",", os.pathsep).split(os.pathsep):
        chunk = chunk.strip()
        if chunk:
            paths.append(Path(chunk))
    return paths


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_number(name: str, default, cast):
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    try:
        return cast(value)
    except ValueError:
        raise ValueError(f"Invalid value for {name}: {value!r}")


@dataclass
class EditorConfig:
    """
    Settings shared by every locale root an editor manages.

    Attributes:
        source_locale: Locale treated as the origin of truth for translation
        locale_paths: Locale root directories
        watch: Whether to watch locale roots for external changes
        watch_interval: Polling interval of the watcher in seconds
        max_workers: Thread pool size for batch writes and translations
        runs_dir: Base directory for translation run logs
    """

    source_locale: str = DEFAULT_SOURCE_LOCALE
    locale_paths: List[Path] = field(default_factory=list)
    watch: bool = False
    watch_interval: float = DEFAULT_WATCH_INTERVAL
    max_workers: int = DEFAULT_MAX_WORKERS
    runs_dir: Path = DEFAULT_RUNS_DIR

    def __post_init__(self):
        normalized = normalize_locale(self.source_locale)
        if not normalized:
            raise ValueError(f"Unrecognized source locale: {self.source_locale!r}")
        self.source_locale = normalized
        if self.max_workers < 1:
            raise ValueError("max_workers must be at least 1")

    @classmethod
    def from_env(cls, source_locale: Optional[str] = None) -> "EditorConfig":
        """
        Build a configuration from I18N_* environment variables.

        Args:
            source_locale: Optional override for I18N_SOURCE_LOCALE

        Returns:
            EditorConfig instance

        Raises:
            ValueError: If a variable holds an invalid value
        """
        return cls(
            source_locale=source_locale
            or os.getenv("I18N_SOURCE_LOCALE")
            or DEFAULT_SOURCE_LOCALE,
            locale_paths=_split_paths(os.getenv("I18N_LOCALE_PATHS", "")),
            watch=_env_bool("I18N_WATCH", False),
            watch_interval=_env_number("I18N_WATCH_INTERVAL", DEFAULT_WATCH_INTERVAL, float),
            max_workers=_env_number("I18N_MAX_WORKERS", DEFAULT_MAX_WORKERS, int),
            runs_dir=Path(os.getenv("I18N_RUNS_DIR") or DEFAULT_RUNS_DIR),
        )
