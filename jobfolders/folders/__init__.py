"""
Job Folders — the folder record, its binary encoding, and a file-backed store.
"""

from jobfolders.folders.models import FOLDER_NAME_UNCLASSIFIED, JobFolder
from jobfolders.folders.store import FolderStore

__all__ = [
    "FOLDER_NAME_UNCLASSIFIED",
    "JobFolder",
    "FolderStore",
]
