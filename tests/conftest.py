"""
Job Folders Test Suite — Shared fixtures and configuration.

Run:  pytest tests/ -v
"""

from __future__ import annotations

import pytest

from jobfolders.folders.models import JobFolder
from jobfolders.folders.store import FolderStore
from jobfolders.security.permissions import FolderPermission
from jobfolders.security.users import FolderUser


# ---------------------------------------------------------------------------
# Environment setup — never pick up a jobfolders.yaml from the working tree
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _isolate_globals(tmp_path, monkeypatch):
    """Run each test from an empty directory and reset global singletons."""
    import jobfolders.engine.config as cfg_mod
    from jobfolders.engine.logging import shutdown_logging

    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    cfg_mod._config = None
    shutdown_logging()
    yield
    cfg_mod._config = None
    shutdown_logging()


@pytest.fixture
def store_dir(tmp_path):
    return tmp_path / "store"


@pytest.fixture
def store(store_dir):
    return FolderStore(str(store_dir))


@pytest.fixture
def view_permission():
    return FolderPermission(name="view_folder", user_names=["alice"], group_names=["ops"])


@pytest.fixture
def sample_folder(view_permission):
    """A folder with every field populated."""
    return JobFolder(
        name="batch1",
        display_in_read_only=True,
        is_virtual=False,
        parent_name="root",
        child_names=["a", "b"],
        description="Nightly batch jobs",
        job_ids=["j1", "j2"],
        optimizing_job_ids=["o1"],
        file_names=["results.csv"],
        permissions=[view_permission],
    )


@pytest.fixture
def ops_user():
    return FolderUser(user_name="bob", group_names=["ops", "dev"])
