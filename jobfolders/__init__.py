"""
Job Folders — hierarchical job folder records with a self-describing binary encoding.

A job folder groups job IDs, optimizing job IDs, uploaded file names and
child folders, and carries named permissions. Folders are encoded as a
BER-style tagged SEQUENCE and decoded back losslessly.

Usage:
    from jobfolders import JobFolder

    folder = JobFolder(name="batch1")
    folder.add_job_id("20260101000000-0001")
    restored = JobFolder.decode(folder.encode())
"""

__version__ = "1.0.0"

from jobfolders.engine.errors import JobFolderDecodeError, JobFolderError  # noqa: E402
from jobfolders.folders.models import JobFolder  # noqa: E402
from jobfolders.folders.store import FolderStore  # noqa: E402
from jobfolders.security.permissions import FolderPermission  # noqa: E402
from jobfolders.security.users import FolderUser  # noqa: E402

__all__ = [
    "FolderPermission",
    "FolderStore",
    "FolderUser",
    "JobFolder",
    "JobFolderDecodeError",
    "JobFolderError",
]
