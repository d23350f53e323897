"""Per-run logging for release-note translation runs."""

import json
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional


def _now() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


class RunLogger:
    """Logger for translation runs."""

    def __init__(self, runs_dir: Path, run_id: Optional[str] = None):
        """
        Initialize run logger.

        Args:
            runs_dir: Base directory for run logs (e.g., work/runs)
            run_id: Optional run ID. If None, generates a new UUID.
        """
        self.runs_dir = runs_dir
        self.run_id = run_id or str(uuid.uuid4())
        self.run_dir = runs_dir / self.run_id
        self.run_dir.mkdir(parents=True, exist_ok=True)

        self.requests_file = self.run_dir / "requests.jsonl"
        self.responses_file = self.run_dir / "responses.jsonl"
        self.failures_file = self.run_dir / "failures.jsonl"
        self.summary_file = self.run_dir / "summary.json"

        self.summary = {
            "run_id": self.run_id,
            "started_at": _now(),
            "completed_at": None,
            "provider": None,
            "master_locale": None,
            "locales_requested": 0,
            "locales_translated": 0,
            "locales_failed": 0,
        }

    def _append(self, file_path: Path, record: Dict[str, Any]) -> None:
        with open(file_path, "a", encoding="utf-8") as f:
            f.write(json.dumps(record, ensure_ascii=False) + "\n")

    def log_request(
        self,
        provider: str,
        source_locale: str,
        target_locale: str,
        text: str
    ) -> None:
        """
        Log a translation request.

        Args:
            provider: Provider identifier
            source_locale: Source locale
            target_locale: Target locale
            text: Source text sent for translation
        """
        self._append(self.requests_file, {
            "timestamp": _now(),
            "provider": provider,
            "source_locale": source_locale,
            "target_locale": target_locale,
            "text": text,
            "char_count": len(text)
        })
        self.summary["locales_requested"] += 1

    def log_response(self, target_locale: str, text: str) -> None:
        """Log a successful translation."""
        self._append(self.responses_file, {
            "timestamp": _now(),
            "target_locale": target_locale,
            "text": text,
            "char_count": len(text)
        })
        self.summary["locales_translated"] += 1

    def log_failure(
        self,
        target_locale: str,
        error_type: str,
        error_message: str,
        context: Optional[Dict[str, Any]] = None
    ) -> None:
        """
        Log a translation failure.

        Args:
            target_locale: Locale that failed
            error_type: Type of error (e.g., "no_translation")
            error_message: Error message
            context: Optional context dictionary
        """
        self._append(self.failures_file, {
            "timestamp": _now(),
            "target_locale": target_locale,
            "error_type": error_type,
            "error_message": error_message,
            "context": context or {}
        })
        self.summary["locales_failed"] += 1

    def update_summary(
        self,
        provider: Optional[str] = None,
        master_locale: Optional[str] = None
    ) -> None:
        if provider is not None:
            self.summary["provider"] = provider
        if master_locale is not None:
            self.summary["master_locale"] = master_locale

    def finalize(self) -> None:
        """Finalize the run and write summary."""
        self.summary["completed_at"] = _now()

        with open(self.summary_file, "w", encoding="utf-8") as f:
            json.dump(self.summary, f, ensure_ascii=False, indent=2)

    def get_summary(self) -> Dict[str, Any]:
        """Get current summary."""
        return self.summary.copy()
