"""Unit tests for jobfolders.folders.models — JobFolder collection and permission mutators."""

import pytest

from jobfolders.folders.models import JobFolder
from jobfolders.security.permissions import FolderPermission
from jobfolders.security.users import FolderUser


class TestConstruction:
    def test_defaults(self):
        folder = JobFolder()
        assert folder.name is None
        assert folder.display_in_read_only is False
        assert folder.is_virtual is False
        assert folder.parent_name is None
        assert folder.description is None
        assert folder.child_names == []
        assert folder.job_ids == []
        assert folder.optimizing_job_ids == []
        assert folder.file_names == []
        assert folder.permissions == []

    def test_none_collections_become_empty(self):
        folder = JobFolder(name="x", child_names=None, job_ids=None, permissions=None)
        assert folder.child_names == []
        assert folder.job_ids == []
        assert folder.permissions == []

    def test_constructor_does_not_sort(self):
        folder = JobFolder(name="x", child_names=["b", "a"])
        assert folder.child_names == ["b", "a"]


class TestSortedCollections:
    @pytest.mark.parametrize("attr", ["child_names", "job_ids", "optimizing_job_ids"])
    def test_set_sorts(self, attr):
        folder = JobFolder(name="x")
        getattr(folder, f"set_{attr}")(["c", "a", "b"])
        assert getattr(folder, attr) == ["a", "b", "c"]

    def test_set_child_names_example(self):
        folder = JobFolder(name="batch1")
        folder.set_child_names(["b", "a"])
        assert folder.child_names == ["a", "b"]

    def test_set_copies_input(self):
        source = ["b", "a"]
        folder = JobFolder(name="x")
        folder.set_job_ids(source)
        folder.add_job_id("c")
        assert source == ["b", "a"]

    def test_set_none_clears(self):
        folder = JobFolder(name="x", job_ids=["j1"])
        folder.set_job_ids(None)
        assert folder.job_ids == []

    def test_add_sorts_and_dedupes(self):
        folder = JobFolder(name="x")
        for job_id in ("j3", "j1", "j2", "j1"):
            folder.add_job_id(job_id)
        assert folder.job_ids == ["j1", "j2", "j3"]

    def test_add_resorts_unsorted_list(self):
        folder = JobFolder(name="x", child_names=["z", "a"])
        folder.add_child_name("m")
        assert folder.child_names == ["a", "m", "z"]

    def test_add_existing_is_noop(self):
        folder = JobFolder(name="x", child_names=["z", "a"])
        folder.add_child_name("a")
        assert folder.child_names == ["z", "a"]

    def test_contains(self):
        folder = JobFolder(name="x", optimizing_job_ids=["o1"])
        assert folder.contains_optimizing_job_id("o1")
        assert not folder.contains_optimizing_job_id("o2")
        assert not folder.contains_child_name("anything")

    def test_remove_absent_is_noop(self):
        folder = JobFolder(name="x", job_ids=["j1", "j2"])
        folder.remove_job_id("j3")
        assert folder.job_ids == ["j1", "j2"]

    def test_remove_keeps_order(self):
        folder = JobFolder(name="x", child_names=["c", "a", "b"])
        folder.remove_child_name("a")
        assert folder.child_names == ["c", "b"]
        folder.remove_optimizing_job_id("o1")
        assert folder.optimizing_job_ids == []


class TestFileNames:
    def test_bulk_set_keeps_given_order(self):
        folder = JobFolder(name="x")
        folder.set_file_names(["z.txt", "a.txt"])
        assert folder.file_names == ["z.txt", "a.txt"]

    def test_single_add_resorts(self):
        folder = JobFolder(name="x")
        folder.set_file_names(["z.txt", "a.txt"])
        folder.add_file_name("m.txt")
        assert folder.file_names == ["a.txt", "m.txt", "z.txt"]

    def test_add_duplicate_leaves_unsorted(self):
        folder = JobFolder(name="x")
        folder.set_file_names(["z.txt", "a.txt"])
        folder.add_file_name("a.txt")
        assert folder.file_names == ["z.txt", "a.txt"]

    def test_contains_and_remove(self):
        folder = JobFolder(name="x", file_names=["a.txt"])
        assert folder.contains_file_name("a.txt")
        folder.remove_file_name("a.txt")
        assert not folder.contains_file_name("a.txt")
        folder.set_file_names(None)
        assert folder.file_names == []


class TestScalars:
    def test_setters(self):
        folder = JobFolder(name="x")
        folder.set_display_in_read_only(True)
        folder.set_description("Load tests")
        assert folder.display_in_read_only is True
        assert folder.description == "Load tests"
        folder.set_description(None)
        assert folder.description is None


class TestPermissions:
    def test_get_permission(self, sample_folder, view_permission):
        assert sample_folder.get_permission("view_folder") is view_permission
        assert sample_folder.get_permission("edit_folder") is None

    def test_set_permission_appends(self, sample_folder):
        sample_folder.set_permission(FolderPermission(name="edit_folder"))
        assert [p.name for p in sample_folder.permissions] == ["view_folder", "edit_folder"]

    def test_set_permission_replaces_in_place(self):
        folder = JobFolder(name="x", permissions=[
            FolderPermission(name="a"),
            FolderPermission(name="b"),
        ])
        replacement = FolderPermission(name="a", user_names=["alice"])
        folder.set_permission(replacement)
        assert [p.name for p in folder.permissions] == ["a", "b"]
        assert folder.permissions[0] is replacement

    def test_set_permissions(self, sample_folder):
        sample_folder.set_permissions(None)
        assert sample_folder.permissions == []
        sample_folder.set_permissions([FolderPermission(name="a")])
        assert len(sample_folder.permissions) == 1

    def test_remove_permission(self, sample_folder):
        sample_folder.remove_permission("missing")
        assert len(sample_folder.permissions) == 1
        sample_folder.remove_permission("view_folder")
        assert sample_folder.permissions == []

    def test_user_has_permission(self, sample_folder, ops_user):
        assert sample_folder.user_has_permission(ops_user, "view_folder")
        assert sample_folder.user_has_permission(FolderUser(user_name="alice"), "view_folder")
        assert not sample_folder.user_has_permission(FolderUser(user_name="eve"), "view_folder")
        assert not sample_folder.user_has_permission(ops_user, "edit_folder")
