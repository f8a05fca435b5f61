"""
Job Folder Shared Utilities — list maintenance helpers used by folders and permissions.

Folder and permission collections are small, admin-sized name lists kept
as plain Python lists. These helpers do the scan-then-modify work so each
record's mutators stay one line long.
"""

from __future__ import annotations

from typing import Iterable, List, Optional


def contains(values: Optional[List[str]], value: str) -> bool:
    """Linear scan for an exact match. False for an empty or missing list."""
    if not values:
        return False
    for existing in values:
        if existing == value:
            return True
    return False


def sorted_copy(values: Optional[Iterable[str]]) -> List[str]:
    """Replacement list for a bulk set on a sorted collection. None → []."""
    if values is None:
        return []
    return sorted(values)


def plain_copy(values: Optional[Iterable[str]]) -> List[str]:
    """Replacement list for a bulk set on an unsorted collection. None → []."""
    if values is None:
        return []
    return list(values)


def add_sorted(values: List[str], value: str) -> None:
    """
    Append ``value`` and re-sort, in place. No-op when already present.

    Examples:
        add_sorted(["b", "c"], "a")  → ["a", "b", "c"]
        add_sorted(["z", "a"], "m")  → ["a", "m", "z"]   (whole list re-sorted)
    """
    if contains(values, value):
        return
    values.append(value)
    values.sort()


def remove_first(values: List[str], value: str) -> None:
    """Remove the first exact match in place, keeping the order of the rest."""
    for i, existing in enumerate(values):
        if existing == value:
            del values[i]
            return
