"""
Job Folder Security — folder permissions and the users they are evaluated against.
"""

from jobfolders.security.permissions import FolderPermission
from jobfolders.security.users import FolderUser, hash_password, verify_password

__all__ = [
    "FolderPermission",
    "FolderUser",
    "hash_password",
    "verify_password",
]
