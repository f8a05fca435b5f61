"""
Folder users — the subject that folder permissions are evaluated against.

A user has a name, a set of group memberships, an admin flag, an optional
default folder, and a bcrypt password hash.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import bcrypt

from jobfolders.utilities.utils import add_sorted, contains, remove_first, sorted_copy


def hash_password(password: str) -> str:
    """Hash a password using bcrypt."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=12)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its bcrypt hash."""
    return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))


@dataclass
class FolderUser:
    user_name: str
    group_names: List[str] = field(default_factory=list)
    is_admin: bool = False
    default_folder: Optional[str] = None
    password_hash: Optional[str] = None

    def __post_init__(self) -> None:
        self.group_names = sorted_copy(self.group_names)

    def member_of(self, group_name: str) -> bool:
        return contains(self.group_names, group_name)

    def set_group_names(self, group_names: Optional[List[str]]) -> None:
        self.group_names = sorted_copy(group_names)

    def add_group_name(self, group_name: str) -> None:
        add_sorted(self.group_names, group_name)

    def remove_group_name(self, group_name: str) -> None:
        remove_first(self.group_names, group_name)

    def set_password(self, password: str) -> None:
        self.password_hash = hash_password(password)

    def check_password(self, password: str) -> bool:
        """False when no password has been set."""
        if not self.password_hash:
            return False
        return verify_password(password, self.password_hash)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for logging (never includes the password hash)."""
        return {
            "user_name": self.user_name,
            "group_names": list(self.group_names),
            "is_admin": self.is_admin,
            "default_folder": self.default_folder,
        }
