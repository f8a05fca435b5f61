"""
Job Folder Store — file-backed persistence for encoded job folders.

Each folder is kept as its encoded bytes in one file:

    {directory}/{quoted folder name}.folder

Folder names are percent-quoted so any name maps to a single safe file name.
The store holds no locks; one process owns a store directory at a time.

Handles:
- Read / write / list folders
- Seeding the "Unclassified" folder
- Guarded removal (refuses folders that still have children or contents)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional
from urllib.parse import quote, unquote

from jobfolders.asn1.elements import describe_bytes
from jobfolders.engine.errors import (
    JobFolderDecodeError,
    JobFolderNotFoundError,
    JobFolderStoreError,
)
from jobfolders.engine.logging import log, log_decode_failure, log_folder_operation
from jobfolders.folders.models import FOLDER_NAME_UNCLASSIFIED, JobFolder

logger = logging.getLogger("jobfolders.folders.store")

FOLDER_FILE_SUFFIX = ".folder"


class FolderStore:
    """
    Stores encoded job folders in a directory, keyed by folder name.
    """

    def __init__(self, directory: str):
        self._directory = Path(directory)
        self._directory.mkdir(parents=True, exist_ok=True)

    @property
    def directory(self) -> Path:
        return self._directory

    def _path_for(self, folder_name: str) -> Path:
        return self._directory / (quote(folder_name, safe="") + FOLDER_FILE_SUFFIX)

    # -------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------

    def folder_names(self) -> List[str]:
        """All stored folder names, Unclassified first, then alphabetical."""
        names = sorted(
            unquote(p.name[:-len(FOLDER_FILE_SUFFIX)])
            for p in self._directory.glob(f"*{FOLDER_FILE_SUFFIX}")
        )
        if FOLDER_NAME_UNCLASSIFIED in names:
            names.remove(FOLDER_NAME_UNCLASSIFIED)
            names.insert(0, FOLDER_NAME_UNCLASSIFIED)
        return names

    def has_folder(self, folder_name: str) -> bool:
        return self._path_for(folder_name).exists()

    def get_folder(self, folder_name: str) -> Optional[JobFolder]:
        """
        Read one folder.

        Returns:
            The decoded folder, or None if no folder has that name.

        Raises:
            JobFolderDecodeError: the stored bytes are corrupt.
        """
        path = self._path_for(folder_name)
        if not path.exists():
            return None

        data = path.read_bytes()
        try:
            return JobFolder.decode(data)
        except JobFolderDecodeError as e:
            log(log_decode_failure(describe_bytes(data), str(e), folder_name=folder_name))
            raise

    def require_folder(self, folder_name: str) -> JobFolder:
        """Like get_folder, but a missing folder raises JobFolderNotFoundError."""
        folder = self.get_folder(folder_name)
        if folder is None:
            raise JobFolderNotFoundError(
                f"Job folder '{folder_name}' does not exist",
                folder_name=folder_name,
                operation="read",
            )
        return folder

    def get_folders(self) -> List[JobFolder]:
        """
        Every decodable folder, Unclassified first.

        Folders whose bytes cannot be decoded are logged and skipped.
        """
        folders: List[JobFolder] = []
        for name in self.folder_names():
            try:
                folder = self.get_folder(name)
            except JobFolderDecodeError as e:
                logger.warning(f"Skipping undecodable folder '{name}': {e}")
                continue
            if folder is not None:
                folders.append(folder)
        return folders

    # -------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------

    def write_folder(self, folder: JobFolder) -> Path:
        """Encode and write ``folder``, replacing any folder with the same name."""
        if not folder.name:
            raise JobFolderStoreError(
                "Cannot store a job folder without a name",
                operation="write",
            )

        data = folder.encode()
        path = self._path_for(folder.name)
        tmp_path = path.with_suffix(path.suffix + ".tmp")
        try:
            tmp_path.write_bytes(data)
            tmp_path.replace(path)
        except OSError as e:
            raise JobFolderStoreError(
                f"Unable to write job folder '{folder.name}': {e}",
                folder_name=folder.name,
                operation="write",
            ) from e

        log(log_folder_operation("written", folder.name, size_bytes=len(data)))
        logger.debug(f"Wrote job folder {folder.name} ({len(data)} bytes) to {path}")
        return path

    def ensure_unclassified(self) -> JobFolder:
        """Create the Unclassified folder if the store does not have one yet."""
        existing = self.get_folder(FOLDER_NAME_UNCLASSIFIED)
        if existing is not None:
            return existing

        folder = JobFolder(
            name=FOLDER_NAME_UNCLASSIFIED,
            description="Unclassified jobs.",
        )
        self.write_folder(folder)
        logger.info(f"Created '{FOLDER_NAME_UNCLASSIFIED}' job folder in {self._directory}")
        return folder

    def remove_folder(self, folder_name: str, delete_contents: bool = False) -> None:
        """
        Remove a folder.

        A folder with child folders is never removed. A folder that still
        holds jobs, optimizing jobs or uploaded files is removed only when
        ``delete_contents`` is set; the referenced entities themselves live
        elsewhere and are the caller's to clean up.

        Raises:
            JobFolderNotFoundError: no such folder.
            JobFolderStoreError: the folder is not empty.
        """
        folder = self.require_folder(folder_name)

        if folder.child_names:
            raise JobFolderStoreError(
                f"Unable to delete job folder {folder_name} because it contains "
                f"one or more child folders.",
                folder_name=folder_name,
                operation="remove",
            )

        if not delete_contents:
            for label, values in (
                ("jobs", folder.job_ids),
                ("optimizing jobs", folder.optimizing_job_ids),
                ("uploaded files", folder.file_names),
            ):
                if values:
                    raise JobFolderStoreError(
                        f"Cannot delete job folder {folder_name} because it still "
                        f"contains one or more {label}.",
                        folder_name=folder_name,
                        operation="remove",
                    )

        try:
            self._path_for(folder_name).unlink()
        except OSError as e:
            raise JobFolderStoreError(
                f"Cannot delete job folder {folder_name}: {e}",
                folder_name=folder_name,
                operation="remove",
            ) from e

        log(log_folder_operation(
            "removed",
            folder_name,
            details={
                "delete_contents": delete_contents,
                "job_ids": list(folder.job_ids),
                "optimizing_job_ids": list(folder.optimizing_job_ids),
                "file_names": list(folder.file_names),
            },
        ))
        logger.info(f"Removed job folder {folder_name}")
