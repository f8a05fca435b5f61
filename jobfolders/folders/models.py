"""
Job Folder Model — the folder record and its tagged binary encoding.

A job folder groups job IDs, optimizing job IDs, uploaded file names and
child folders, and carries named permissions plus two visibility flags.
Parent, children, jobs and files are referenced by name only; resolving a
name to the entity is the store's job.

Collection rules:
    child_names, job_ids, optimizing_job_ids
        sorted on bulk set and on single add, no duplicates
    file_names
        stored as given on bulk set, but re-sorted on single add
    permissions
        unique by name; set_permission replaces in place or appends

Wire format: one SEQUENCE of (tag, value) pairs, written in this order:

    name                  OCTET STRING   (empty when unset)
    display_in_read_only  BOOLEAN
    is_virtual            BOOLEAN
    parent                OCTET STRING   (empty when top-level)
    children              SEQUENCE OF OCTET STRING
    description           OCTET STRING   (empty when unset)
    jobs                  SEQUENCE OF OCTET STRING
    optimizing_jobs       SEQUENCE OF OCTET STRING
    files                 SEQUENCE OF OCTET STRING
    permissions           SEQUENCE OF permission SEQUENCE

Readers accept the pairs in any order and skip unknown tags.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from jobfolders.asn1.elements import (
    Element,
    boolean_element,
    describe_bytes,
    octet_string_element,
    sequence_element,
    string_sequence_element,
)
from jobfolders.asn1.tagged import decode_string_list, decode_tagged_pairs, encode_tagged_pairs
from jobfolders.engine.errors import ElementCodecError, JobFolderDecodeError
from jobfolders.security.permissions import FolderPermission
from jobfolders.utilities.utils import (
    add_sorted,
    contains,
    plain_copy,
    remove_first,
    sorted_copy,
)

logger = logging.getLogger("jobfolders.folders.models")

ELEMENT_NAME = "name"
ELEMENT_DISPLAY_IN_READ_ONLY = "display_in_read_only"
ELEMENT_IS_VIRTUAL = "is_virtual"
ELEMENT_PARENT = "parent"
ELEMENT_CHILDREN = "children"
ELEMENT_DESCRIPTION = "description"
ELEMENT_JOB_IDS = "jobs"
ELEMENT_OPTIMIZING_JOB_IDS = "optimizing_jobs"
ELEMENT_FILE_NAMES = "files"
ELEMENT_PERMISSIONS = "permissions"

FOLDER_NAME_UNCLASSIFIED = "Unclassified"


# ---------------------------------------------------------------------------
# Value readers used by JobFolder.decode
# ---------------------------------------------------------------------------

def _read_optional_string(value: Element) -> Optional[str]:
    # None is written as an empty OCTET STRING.
    return value.decode_as_string() or None


def _read_boolean(value: Element) -> bool:
    return value.decode_as_boolean()


def _read_permissions(value: Element) -> List[FolderPermission]:
    return [FolderPermission.decode_sequence(child) for child in value.decode_as_sequence()]


class JobFolder(BaseModel):
    """
    Job folder record.

    The constructor turns None collections into empty lists but does not
    sort them; sorting happens only through the set_* and add_* mutators.
    An empty name, parent_name or description is stored as None, which is
    how all three are written on the wire, so decode(encode(folder)) == folder.
    """

    name: Optional[str] = Field(default=None, description="Folder name, unique within the store")
    display_in_read_only: bool = Field(default=False, description="Visible in restricted read-only mode")
    is_virtual: bool = Field(default=False, description="Virtual folder classification")
    parent_name: Optional[str] = Field(default=None, description="Parent folder name; None for top-level")
    child_names: List[str] = Field(default_factory=list, description="Names of child folders")
    description: Optional[str] = Field(default=None, description="Free-text description")
    job_ids: List[str] = Field(default_factory=list, description="IDs of jobs in this folder")
    optimizing_job_ids: List[str] = Field(default_factory=list, description="IDs of optimizing jobs")
    file_names: List[str] = Field(default_factory=list, description="Names of uploaded files")
    permissions: List[FolderPermission] = Field(default_factory=list, description="Named access grants")

    @field_validator(
        "child_names", "job_ids", "optimizing_job_ids", "file_names", "permissions",
        mode="before",
    )
    @classmethod
    def normalize_collections(cls, v: Any) -> Any:
        return [] if v is None else v

    @field_validator("name", "parent_name", "description", mode="before")
    @classmethod
    def empty_string_is_unset(cls, v: Any) -> Any:
        return None if v == "" else v

    # -------------------------------------------------------------------
    # Scalars
    # -------------------------------------------------------------------

    def set_display_in_read_only(self, display_in_read_only: bool) -> None:
        self.display_in_read_only = display_in_read_only

    def set_description(self, description: Optional[str]) -> None:
        self.description = description or None

    # -------------------------------------------------------------------
    # Child folders
    # -------------------------------------------------------------------

    def contains_child_name(self, child_name: str) -> bool:
        return contains(self.child_names, child_name)

    def set_child_names(self, child_names: Optional[List[str]]) -> None:
        self.child_names = sorted_copy(child_names)

    def add_child_name(self, child_name: str) -> None:
        add_sorted(self.child_names, child_name)

    def remove_child_name(self, child_name: str) -> None:
        remove_first(self.child_names, child_name)

    # -------------------------------------------------------------------
    # Jobs
    # -------------------------------------------------------------------

    def contains_job_id(self, job_id: str) -> bool:
        return contains(self.job_ids, job_id)

    def set_job_ids(self, job_ids: Optional[List[str]]) -> None:
        self.job_ids = sorted_copy(job_ids)

    def add_job_id(self, job_id: str) -> None:
        add_sorted(self.job_ids, job_id)

    def remove_job_id(self, job_id: str) -> None:
        remove_first(self.job_ids, job_id)

    # -------------------------------------------------------------------
    # Optimizing jobs
    # -------------------------------------------------------------------

    def contains_optimizing_job_id(self, optimizing_job_id: str) -> bool:
        return contains(self.optimizing_job_ids, optimizing_job_id)

    def set_optimizing_job_ids(self, optimizing_job_ids: Optional[List[str]]) -> None:
        self.optimizing_job_ids = sorted_copy(optimizing_job_ids)

    def add_optimizing_job_id(self, optimizing_job_id: str) -> None:
        add_sorted(self.optimizing_job_ids, optimizing_job_id)

    def remove_optimizing_job_id(self, optimizing_job_id: str) -> None:
        remove_first(self.optimizing_job_ids, optimizing_job_id)

    # -------------------------------------------------------------------
    # Uploaded files
    # -------------------------------------------------------------------

    def contains_file_name(self, file_name: str) -> bool:
        return contains(self.file_names, file_name)

    def set_file_names(self, file_names: Optional[List[str]]) -> None:
        """Replace the file list as given. Unlike the other collections, no sort."""
        self.file_names = plain_copy(file_names)

    def add_file_name(self, file_name: str) -> None:
        # Single adds re-sort the whole list, bulk sets do not.
        add_sorted(self.file_names, file_name)

    def remove_file_name(self, file_name: str) -> None:
        remove_first(self.file_names, file_name)

    # -------------------------------------------------------------------
    # Permissions
    # -------------------------------------------------------------------

    def get_permission(self, permission_name: str) -> Optional[FolderPermission]:
        for permission in self.permissions:
            if permission.name == permission_name:
                return permission
        return None

    def user_has_permission(self, user: Any, permission_name: str) -> bool:
        """
        Check ``user`` against the permission called ``permission_name``.

        Returns False when the folder has no permission by that name.
        """
        permission = self.get_permission(permission_name)
        if permission is None:
            return False
        return permission.applies_to_user(user)

    def set_permissions(self, permissions: Optional[List[FolderPermission]]) -> None:
        self.permissions = [] if permissions is None else list(permissions)

    def set_permission(self, permission: FolderPermission) -> None:
        """Replace the permission with the same name in place, or append it."""
        for i, existing in enumerate(self.permissions):
            if existing.name == permission.name:
                self.permissions[i] = permission
                return
        self.permissions.append(permission)

    def remove_permission(self, permission_name: str) -> None:
        for i, existing in enumerate(self.permissions):
            if existing.name == permission_name:
                del self.permissions[i]
                return

    # -------------------------------------------------------------------
    # Encoding
    # -------------------------------------------------------------------

    def encode_as_sequence(self) -> Element:
        """Build the outer SEQUENCE element; collections are written in stored order."""
        return encode_tagged_pairs([
            (ELEMENT_NAME, octet_string_element(self.name)),
            (ELEMENT_DISPLAY_IN_READ_ONLY, boolean_element(self.display_in_read_only)),
            (ELEMENT_IS_VIRTUAL, boolean_element(self.is_virtual)),
            (ELEMENT_PARENT, octet_string_element(self.parent_name)),
            (ELEMENT_CHILDREN, string_sequence_element(self.child_names)),
            (ELEMENT_DESCRIPTION, octet_string_element(self.description)),
            (ELEMENT_JOB_IDS, string_sequence_element(self.job_ids)),
            (ELEMENT_OPTIMIZING_JOB_IDS, string_sequence_element(self.optimizing_job_ids)),
            (ELEMENT_FILE_NAMES, string_sequence_element(self.file_names)),
            (ELEMENT_PERMISSIONS, sequence_element(
                p.encode_as_sequence() for p in self.permissions
            )),
        ])

    def encode(self) -> bytes:
        return self.encode_as_sequence().encode()

    @classmethod
    def decode(cls, data: bytes) -> "JobFolder":
        """
        Decode a folder from the bytes produced by ``encode``.

        Missing tags keep their defaults (False flags, empty lists, None
        strings); unknown tags are ignored.

        Raises:
            JobFolderDecodeError: for any malformed input. No partially
                populated folder is ever returned.
        """
        fields: Dict[str, Any] = {
            "name": None,
            "display_in_read_only": False,
            "is_virtual": False,
            "parent_name": None,
            "child_names": [],
            "description": None,
            "job_ids": [],
            "optimizing_job_ids": [],
            "file_names": [],
            "permissions": [],
        }

        def assign(key: str, reader: Callable[[Element], Any]) -> Callable[[Element], None]:
            def handler(value: Element) -> None:
                fields[key] = reader(value)
            return handler

        handlers = {
            ELEMENT_NAME: assign("name", _read_optional_string),
            ELEMENT_DISPLAY_IN_READ_ONLY: assign("display_in_read_only", _read_boolean),
            ELEMENT_IS_VIRTUAL: assign("is_virtual", _read_boolean),
            ELEMENT_PARENT: assign("parent_name", _read_optional_string),
            ELEMENT_CHILDREN: assign("child_names", decode_string_list),
            ELEMENT_DESCRIPTION: assign("description", _read_optional_string),
            ELEMENT_JOB_IDS: assign("job_ids", decode_string_list),
            ELEMENT_OPTIMIZING_JOB_IDS: assign("optimizing_job_ids", decode_string_list),
            ELEMENT_FILE_NAMES: assign("file_names", decode_string_list),
            ELEMENT_PERMISSIONS: assign("permissions", _read_permissions),
        }

        try:
            elements = Element.decode(data).decode_as_sequence()
            decode_tagged_pairs(elements, handlers)
            return cls(**fields)
        except (ElementCodecError, JobFolderDecodeError, TypeError, ValueError) as e:
            description = describe_bytes(data)
            logger.debug("Unable to decode job folder %s: %s", description, e)
            raise JobFolderDecodeError(
                f"Unable to decode job folder: {e}",
                input_description=description,
                cause=e,
            ) from e
