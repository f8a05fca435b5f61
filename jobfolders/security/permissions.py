"""
Folder Permissions — named access grants attached to a job folder.

A permission (e.g. "view_folder", "manage_jobs") is granted to explicit
user names and to group names. A user holds the permission when their
name is listed, or when any of their groups is listed.

Encoded form (a tagged SEQUENCE, see jobfolders.asn1.tagged):

    name    OCTET STRING
    users   SEQUENCE OF OCTET STRING
    groups  SEQUENCE OF OCTET STRING
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator

from jobfolders.asn1.elements import (
    Element,
    describe_bytes,
    octet_string_element,
    string_sequence_element,
)
from jobfolders.asn1.tagged import decode_string_list, decode_tagged_pairs, encode_tagged_pairs
from jobfolders.engine.errors import ElementCodecError, JobFolderDecodeError
from jobfolders.utilities.utils import add_sorted, contains, remove_first, sorted_copy

logger = logging.getLogger("jobfolders.security.permissions")

ELEMENT_NAME = "name"
ELEMENT_USERS = "users"
ELEMENT_GROUPS = "groups"


class FolderPermission(BaseModel):
    """
    A named permission granted to users and groups.

    ``user_names`` and ``group_names`` are kept sorted by the mutators; the
    constructor stores them as given.
    """

    name: Optional[str] = Field(default=None, description="Permission name, unique within a folder")
    user_names: List[str] = Field(default_factory=list, description="Users granted this permission")
    group_names: List[str] = Field(default_factory=list, description="Groups granted this permission")

    @field_validator("user_names", "group_names", mode="before")
    @classmethod
    def normalize_collections(cls, v: Any) -> Any:
        return [] if v is None else v

    # -- user grants ------------------------------------------------------

    def set_user_names(self, user_names: Optional[List[str]]) -> None:
        self.user_names = sorted_copy(user_names)

    def add_user_name(self, user_name: str) -> None:
        add_sorted(self.user_names, user_name)

    def remove_user_name(self, user_name: str) -> None:
        remove_first(self.user_names, user_name)

    # -- group grants -----------------------------------------------------

    def set_group_names(self, group_names: Optional[List[str]]) -> None:
        self.group_names = sorted_copy(group_names)

    def add_group_name(self, group_name: str) -> None:
        add_sorted(self.group_names, group_name)

    def remove_group_name(self, group_name: str) -> None:
        remove_first(self.group_names, group_name)

    # -- evaluation -------------------------------------------------------

    def applies_to_user(self, user: Any) -> bool:
        """
        Check whether this permission is granted to ``user``.

        Args:
            user: Anything with ``user_name`` and ``group_names`` attributes
                  (normally a FolderUser).
        """
        if contains(self.user_names, user.user_name):
            return True
        for group_name in user.group_names:
            if contains(self.group_names, group_name):
                return True
        return False

    # -- encoding ---------------------------------------------------------

    def encode_as_sequence(self) -> Element:
        return encode_tagged_pairs([
            (ELEMENT_NAME, octet_string_element(self.name)),
            (ELEMENT_USERS, string_sequence_element(self.user_names)),
            (ELEMENT_GROUPS, string_sequence_element(self.group_names)),
        ])

    def encode(self) -> bytes:
        return self.encode_as_sequence().encode()

    @classmethod
    def decode_sequence(cls, element: Element) -> "FolderPermission":
        """
        Decode a permission from its SEQUENCE element.

        Raises:
            JobFolderDecodeError: the element is not a well-formed permission.
        """
        fields: dict = {"name": None, "user_names": [], "group_names": []}

        def set_name(value: Element) -> None:
            fields["name"] = value.decode_as_string()

        def set_users(value: Element) -> None:
            fields["user_names"] = decode_string_list(value)

        def set_groups(value: Element) -> None:
            fields["group_names"] = decode_string_list(value)

        handlers = {
            ELEMENT_NAME: set_name,
            ELEMENT_USERS: set_users,
            ELEMENT_GROUPS: set_groups,
        }

        try:
            decode_tagged_pairs(element.decode_as_sequence(), handlers)
        except (ElementCodecError, ValueError) as e:
            raise JobFolderDecodeError(
                f"Unable to decode the permission: {e}",
                input_description=repr(element),
                cause=e,
            ) from e
        return cls(**fields)

    @classmethod
    def decode(cls, data: bytes) -> "FolderPermission":
        """Decode a permission from its standalone byte encoding."""
        try:
            element = Element.decode(data)
        except (ElementCodecError, TypeError, ValueError) as e:
            raise JobFolderDecodeError(
                f"Unable to decode the permission: {e}",
                input_description=describe_bytes(data),
                cause=e,
            ) from e
        return cls.decode_sequence(element)
