"""
Job Folder Error Hierarchy — Structured exceptions for folder storage and decoding.

Every error carries a free-form context dict that serializes to JSON, so a
failure can be written to the structured log exactly as it was raised.

Hierarchy:
    JobFolderError
    ├── ElementCodecError        — Malformed TLV bytes or wrong element shape
    ├── JobFolderDecodeError     — Encoded folder/permission could not be decoded
    ├── JobFolderStoreError      — Store operation refused or failed
    │   └── JobFolderNotFoundError — Named folder does not exist
    └── JobFolderConfigError     — Invalid jobfolders.yaml
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Dict, Optional


class JobFolderError(Exception):
    """
    Base error for all jobfolders failures.
    All context is kept serializable for logging.
    """

    def __init__(self, message: str, **context: Any):
        self.message = message
        self.folder_name: Optional[str] = context.get("folder_name")
        self.error_type: str = self.__class__.__name__
        self.context: Dict[str, Any] = context
        self.timestamp: str = datetime.now(timezone.utc).isoformat()
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize error to a JSON-compatible dict."""
        return {
            "error_type": self.error_type,
            "message": self.message,
            "folder_name": self.folder_name,
            "timestamp": self.timestamp,
            "context": {
                k: str(v) for k, v in self.context.items()
                if k != "folder_name"
            },
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), default=str)

    def __repr__(self) -> str:
        parts = [f"{self.error_type}: {self.message}"]
        if self.folder_name:
            parts.append(f"folder_name={self.folder_name}")
        return " | ".join(parts)


class ElementCodecError(JobFolderError):
    """
    Raised by the element codec for malformed bytes or a shape mismatch
    (e.g. an octet string where a boolean was expected).
    """

    def __init__(self, message: str, **context: Any):
        self.element_type: Optional[int] = context.get("element_type")
        super().__init__(message, **context)


class JobFolderDecodeError(JobFolderError):
    """
    The single failure signal for decoding a folder or permission.

    ``input_description`` describes the bytes that were handed in and
    ``cause`` holds the underlying exception. A decode either returns a
    complete record or raises this; there is no partial result.
    """

    def __init__(self, message: str, **context: Any):
        self.input_description: Optional[str] = context.get("input_description")
        self.cause: Optional[BaseException] = context.get("cause")
        super().__init__(message, **context)

    def to_dict(self) -> Dict[str, Any]:
        d = super().to_dict()
        d["input_description"] = self.input_description
        d["cause"] = repr(self.cause) if self.cause is not None else None
        return d


class JobFolderStoreError(JobFolderError):
    """Store operation failed or was refused (e.g. removing a non-empty folder)."""

    def __init__(self, message: str, **context: Any):
        self.operation: Optional[str] = context.get("operation")
        super().__init__(message, **context)


class JobFolderNotFoundError(JobFolderStoreError):
    """Named folder does not exist in the store."""
    pass


class JobFolderConfigError(JobFolderError):
    """Configuration error — invalid jobfolders.yaml."""
    pass
