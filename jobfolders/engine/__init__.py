"""Job Folder Engine — errors, configuration and structured logging."""

from jobfolders.engine.errors import (  # noqa: F401
    ElementCodecError,
    JobFolderConfigError,
    JobFolderDecodeError,
    JobFolderError,
    JobFolderNotFoundError,
    JobFolderStoreError,
)

__all__ = [
    "ElementCodecError",
    "JobFolderConfigError",
    "JobFolderDecodeError",
    "JobFolderError",
    "JobFolderNotFoundError",
    "JobFolderStoreError",
]
