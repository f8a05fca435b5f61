"""
Job Folder Logging — Structured JSON file-based audit logging.

Implements:
- FileLogger: Per-object-type, per-category JSONL files (daily rotation)
- Log entry builders for folder operations, decode failures and security events
- Module-level init / log / shutdown helpers

Layout: {log_dir}/{object_type}/{category}/{YYYY-MM-DD}.jsonl
"""

from __future__ import annotations

import json
import logging
import threading
from collections import defaultdict
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger("jobfolders.engine.logging")

# Valid object types and their permitted categories
OBJECT_TYPE_CATEGORIES = {
    "folders": ["execution", "security"],
    "codec": ["execution"],
    "system": ["execution"],
}


class LogEntry:
    """A structured log entry destined for a specific file."""

    __slots__ = ("object_type", "category", "data")

    def __init__(self, object_type: str, category: str, data: Dict[str, Any]):
        self.object_type = object_type
        self.category = category
        self.data = data

    def to_json(self) -> str:
        return json.dumps(self.data, default=str, separators=(",", ":"))


class FileLogger:
    """
    Writes structured JSON log entries to per-object-type, per-category files.

    Thread-safe — uses a lock per file path.
    """

    def __init__(self, log_dir: str = "logs"):
        self._log_dir = Path(log_dir)
        self._file_locks: Dict[str, threading.Lock] = defaultdict(threading.Lock)
        self._ensure_directories()

    def _ensure_directories(self) -> None:
        for obj_type, categories in OBJECT_TYPE_CATEGORIES.items():
            for cat in categories:
                (self._log_dir / obj_type / cat).mkdir(parents=True, exist_ok=True)

    def write(self, entry: LogEntry) -> None:
        """Write a single log entry to the appropriate file."""
        file_path = self._resolve_path(entry.object_type, entry.category)
        key = str(file_path)

        with self._file_locks[key]:
            with open(file_path, "a", encoding="utf-8") as f:
                f.write(entry.to_json())
                f.write("\n")

    def _resolve_path(self, object_type: str, category: str) -> Path:
        """Resolve the log file path for today's date."""
        if category not in OBJECT_TYPE_CATEGORIES.get(object_type, ()):
            object_type, category = "system", "execution"
        today = date.today().isoformat()
        return self._log_dir / object_type / category / f"{today}.jsonl"

    @property
    def log_dir(self) -> Path:
        return self._log_dir

    def read_today(self, object_type: str, category: str) -> List[Dict[str, Any]]:
        """Return today's entries for one object_type/category, oldest first."""
        file_path = self._resolve_path(object_type, category)
        if not file_path.exists():
            return []

        entries: List[Dict[str, Any]] = []
        with open(file_path, "r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if not line:
                    continue
                try:
                    entries.append(json.loads(line))
                except json.JSONDecodeError:
                    logger.warning("Skipping corrupt log line in %s", file_path)
        return entries


# ---------------------------------------------------------------------------
# Log Entry Builders
# ---------------------------------------------------------------------------

def _base_entry(
    event: str,
    level: str,
    folder_name: Optional[str],
    **extra: Any,
) -> Dict[str, Any]:
    """Build a base log entry with common fields."""
    entry: Dict[str, Any] = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "level": level,
        "event": event,
        "folder_name": folder_name,
    }
    entry.update(extra)
    return entry


def log_folder_operation(
    operation: str,
    folder_name: Optional[str],
    size_bytes: Optional[int] = None,
    details: Optional[Dict[str, Any]] = None,
) -> LogEntry:
    """Build a folder store operation entry (written/read/removed)."""
    data = _base_entry(
        event=f"folder_{operation}",
        level="INFO",
        folder_name=folder_name,
        operation=operation,
    )
    if size_bytes is not None:
        data["size_bytes"] = size_bytes
    if details:
        data["details"] = details
    return LogEntry("folders", "execution", data)


def log_decode_failure(
    input_description: str,
    error: str,
    folder_name: Optional[str] = None,
) -> LogEntry:
    """Build an entry for bytes that could not be decoded."""
    data = _base_entry(
        event="decode_failed",
        level="ERROR",
        folder_name=folder_name,
        input_description=input_description,
        error=error,
    )
    return LogEntry("codec", "execution", data)


def log_security_event(
    event: str,
    folder_name: Optional[str],
    permission_name: str,
    user_name: Optional[str],
    user_groups: Optional[List[str]] = None,
    level: str = "WARNING",
) -> LogEntry:
    """Build a security entry (permission denied / granted / revoked)."""
    data = _base_entry(
        event=event,
        level=level,
        folder_name=folder_name,
        permission_name=permission_name,
        user_name=user_name,
    )
    if user_groups is not None:
        data["user_groups"] = sorted(user_groups)
    return LogEntry("folders", "security", data)


def log_system_event(
    event: str,
    level: str = "INFO",
    details: Optional[Dict[str, Any]] = None,
) -> LogEntry:
    """Build a system event entry (startup, shutdown, config changes)."""
    data = _base_entry(event=event, level=level, folder_name=None)
    if details:
        data["details"] = details
    return LogEntry("system", "execution", data)


# ---------------------------------------------------------------------------
# Convenience: Global File Logger Singleton
# ---------------------------------------------------------------------------

_file_logger: Optional[FileLogger] = None


def init_logging(log_dir: str = "logs", level: int = logging.INFO) -> FileLogger:
    """Initialize the global file logger and the package's stdlib log level."""
    global _file_logger
    logging.getLogger("jobfolders").setLevel(level)
    _file_logger = FileLogger(log_dir=log_dir)
    return _file_logger


def get_file_logger() -> Optional[FileLogger]:
    return _file_logger


def log(entry: LogEntry) -> bool:
    """Write an entry through the global file logger. False if not initialized."""
    if _file_logger is None:
        logger.debug("File logger not initialized, entry dropped: %s", entry.data.get("event"))
        return False
    try:
        _file_logger.write(entry)
    except OSError as e:
        logger.error(f"Log write error: {e}")
        return False
    return True


def shutdown_logging() -> None:
    """Forget the global file logger."""
    global _file_logger
    _file_logger = None
