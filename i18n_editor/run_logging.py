"""Per-run logging for translation operations."""

import json
import threading
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class RunLogger:
    """Logger for translation runs. Safe to use from worker threads."""

    def __init__(self, runs_dir: Path, run_id: Optional[str] = None):
        """
        Initialize run logger.

        Args:
            runs_dir: Base directory for run logs (e.g., work/runs)
            run_id: Optional run ID. If None, generates a new UUID.
        """
        self.runs_dir = Path(runs_dir)
        self.run_id = run_id or str(uuid.uuid4())
        self.run_dir = self.runs_dir / self.run_id
        self.run_dir.mkdir(parents=True, exist_ok=True)

        self.requests_file = self.run_dir / "requests.jsonl"
        self.responses_file = self.run_dir / "responses.jsonl"
        self.failures_file = self.run_dir / "failures.jsonl"
        self.summary_file = self.run_dir / "summary.json"

        self._lock = threading.Lock()
        self.summary: Dict[str, Any] = {
            "run_id": self.run_id,
            "started_at": _timestamp(),
            "completed_at": None,
            "key": None,
            "source_locale": None,
            "requests": 0,
            "translated": 0,
            "failed": 0,
        }

    def _append(self, file_path: Path, record: Dict[str, Any]) -> None:
        with open(file_path, "a", encoding="utf-8") as f:
            f.write(json.dumps(record, ensure_ascii=False) + "\n")

    def log_request(self, locale: str, text: str) -> None:
        """
        Log a translation request.

        Args:
            locale: Target locale code
            text: Source text sent for translation
        """
        with self._lock:
            self._append(self.requests_file, {
                "timestamp": _timestamp(),
                "locale": locale,
                "text": text,
            })
            self.summary["requests"] += 1

    def log_response(self, locale: str, backend: str, text: str) -> None:
        """
        Log a successful translation.

        Args:
            locale: Target locale code
            backend: Name of the backend that answered
            text: Translated text
        """
        with self._lock:
            self._append(self.responses_file, {
                "timestamp": _timestamp(),
                "locale": locale,
                "backend": backend,
                "text": text,
            })
            self.summary["translated"] += 1

    def log_failure(
        self,
        locale: str,
        error_type: str,
        error_message: str,
        context: Optional[Dict[str, Any]] = None
    ) -> None:
        """
        Log a translation failure.

        Args:
            locale: Target locale code
            error_type: Type of error (e.g., "backend_error", "all_backends_failed")
            error_message: Error message
            context: Optional context dictionary
        """
        with self._lock:
            self._append(self.failures_file, {
                "timestamp": _timestamp(),
                "locale": locale,
                "error_type": error_type,
                "error_message": error_message,
                "context": context or {},
            })
            if error_type == "all_backends_failed":
                self.summary["failed"] += 1

    def update_summary(
        self,
        key: Optional[str] = None,
        source_locale: Optional[str] = None
    ) -> None:
        with self._lock:
            if key is not None:
                self.summary["key"] = key
            if source_locale is not None:
                self.summary["source_locale"] = source_locale

    def finalize(self) -> None:
        """Finalize the run and write summary."""
        with self._lock:
            self.summary["completed_at"] = _timestamp()
            with open(self.summary_file, "w", encoding="utf-8") as f:
                json.dump(self.summary, f, ensure_ascii=False, indent=2)

    def get_summary(self) -> Dict[str, Any]:
        """Get current summary."""
        with self._lock:
            return self.summary.copy()
