"""
Job Folders CLI — inspect and edit a folder store.

Commands:
- jobfolders list      — List stored folder names (Unclassified first)
- jobfolders show      — Print one folder
- jobfolders create    — Create a folder (registered with its parent)
- jobfolders add       — Add a child / job / optimizing job / file to a folder
- jobfolders remove    — Remove a child / job / optimizing job / file
- jobfolders grant     — Grant a named permission to users and groups
- jobfolders delete    — Remove a folder (refused while it has contents)
- jobfolders decode    — Decode a raw encoded folder file and print it as JSON
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from jobfolders.engine.config import FolderPlatformConfig, load_config
from jobfolders.engine.errors import JobFolderDecodeError, JobFolderError
from jobfolders.folders.models import JobFolder
from jobfolders.folders.store import FolderStore
from jobfolders.security.permissions import FolderPermission

logger = logging.getLogger("jobfolders.cli")

# CLI collection keyword → JobFolder mutator suffix
COLLECTION_KINDS = {
    "child": "child_name",
    "job": "job_id",
    "optimizing-job": "optimizing_job_id",
    "file": "file_name",
}


def main(argv: Optional[list] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="jobfolders",
        description="Job Folders — inspect and edit a job folder store",
    )
    parser.add_argument("--config", help="Path to jobfolders.yaml (default: auto-discover)")
    parser.add_argument("--store", help="Store directory (default: store.directory from config)")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("list", help="List stored folder names")

    show_parser = subparsers.add_parser("show", help="Print one folder")
    show_parser.add_argument("name", help="Folder name")
    show_parser.add_argument("--json", action="store_true", help="Print as JSON")

    create_parser = subparsers.add_parser("create", help="Create a folder")
    create_parser.add_argument("name", help="Folder name")
    create_parser.add_argument("--parent", help="Parent folder name (default: top level)")
    create_parser.add_argument("--description", help="Folder description")
    create_parser.add_argument("--virtual", action="store_true", help="Mark as a virtual folder")
    create_parser.add_argument(
        "--read-only-visible", action="store_true",
        help="Show this folder in restricted read-only mode",
    )

    for command, verb in (("add", "Add"), ("remove", "Remove")):
        p = subparsers.add_parser(command, help=f"{verb} a folder member")
        p.add_argument("name", help="Folder name")
        p.add_argument("kind", choices=sorted(COLLECTION_KINDS), help="Member kind")
        p.add_argument("value", help="Child folder name, job ID or file name")

    grant_parser = subparsers.add_parser("grant", help="Grant a permission")
    grant_parser.add_argument("name", help="Folder name")
    grant_parser.add_argument("permission", help="Permission name (e.g. view_folder)")
    grant_parser.add_argument("--user", action="append", default=[], help="User name (repeatable)")
    grant_parser.add_argument("--group", action="append", default=[], help="Group name (repeatable)")

    delete_parser = subparsers.add_parser("delete", help="Remove a folder")
    delete_parser.add_argument("name", help="Folder name")
    delete_parser.add_argument(
        "--delete-contents", action="store_true",
        help="Remove even if the folder still lists jobs or files",
    )

    decode_parser = subparsers.add_parser("decode", help="Decode a raw encoded folder file")
    decode_parser.add_argument("path", help="Path to the encoded bytes")

    args = parser.parse_args(argv)

    try:
        if args.command == "list":
            return cmd_list(args)
        elif args.command == "show":
            return cmd_show(args)
        elif args.command == "create":
            return cmd_create(args)
        elif args.command == "add":
            return cmd_add(args)
        elif args.command == "remove":
            return cmd_remove(args)
        elif args.command == "grant":
            return cmd_grant(args)
        elif args.command == "delete":
            return cmd_delete(args)
        elif args.command == "decode":
            return cmd_decode(args)
        else:
            parser.print_help()
            return 0
    except JobFolderError as e:
        print(f"[ERROR] {e.message}")
        logger.debug("Command failed", exc_info=True)
        return 1


def _load_settings(args: argparse.Namespace) -> FolderPlatformConfig:
    """Load --config (or the discovered jobfolders.yaml) and start logging."""
    from jobfolders.engine.logging import init_logging, log, log_system_event

    config = load_config(args.config)
    if config.logging.enabled:
        init_logging(log_dir=config.logging.directory, level=config.logging.numeric_level)
        log(log_system_event("cli_command", details={"command": args.command}))
    return config


def _open_store(args: argparse.Namespace) -> FolderStore:
    """Load settings and open the store the command works on."""
    config = _load_settings(args)
    store = FolderStore(args.store or config.store.directory)
    if config.store.seed_unclassified:
        store.ensure_unclassified()
    return store


def _format_list(values: list) -> str:
    return ", ".join(values) if values else "(none)"


def _print_folder(folder: JobFolder) -> None:
    print(f"Folder:       {folder.name}")
    print(f"Parent:       {folder.parent_name or '(top level)'}")
    print(f"Description:  {folder.description or ''}")
    print(f"Virtual:      {'yes' if folder.is_virtual else 'no'}")
    print(f"Read-only:    {'shown' if folder.display_in_read_only else 'hidden'}")
    print(f"Children:     {_format_list(folder.child_names)}")
    print(f"Jobs:         {_format_list(folder.job_ids)}")
    print(f"Optimizing:   {_format_list(folder.optimizing_job_ids)}")
    print(f"Files:        {_format_list(folder.file_names)}")
    if folder.permissions:
        print("Permissions:")
        for permission in folder.permissions:
            print(
                f"  {permission.name}: users={_format_list(permission.user_names)} "
                f"groups={_format_list(permission.group_names)}"
            )
    else:
        print("Permissions:  (none)")


def cmd_list(args: argparse.Namespace) -> int:
    store = _open_store(args)
    for name in store.folder_names():
        print(name)
    return 0


def cmd_show(args: argparse.Namespace) -> int:
    store = _open_store(args)
    folder = store.require_folder(args.name)
    if args.json:
        print(folder.model_dump_json(indent=2))
    else:
        _print_folder(folder)
    return 0


def cmd_create(args: argparse.Namespace) -> int:
    store = _open_store(args)
    if store.has_folder(args.name):
        print(f"[ERROR] Job folder already exists: {args.name}")
        return 1

    parent = store.require_folder(args.parent) if args.parent else None

    folder = JobFolder(
        name=args.name,
        display_in_read_only=args.read_only_visible,
        is_virtual=args.virtual,
        parent_name=args.parent,
        description=args.description,
    )
    store.write_folder(folder)

    if parent is not None:
        parent.add_child_name(folder.name)
        store.write_folder(parent)

    print(f"[OK] Created job folder {folder.name}")
    return 0


def _mutate_collection(args: argparse.Namespace, action: str) -> int:
    store = _open_store(args)
    folder = store.require_folder(args.name)
    suffix = COLLECTION_KINDS[args.kind]

    before = getattr(folder, f"contains_{suffix}")(args.value)
    getattr(folder, f"{action}_{suffix}")(args.value)
    after = getattr(folder, f"contains_{suffix}")(args.value)

    if before == after:
        print(f"[OK] No change: {args.kind} {args.value!r} in {folder.name}")
        return 0

    store.write_folder(folder)
    past = "Added" if action == "add" else "Removed"
    print(f"[OK] {past} {args.kind} {args.value!r} in {folder.name}")
    return 0


def cmd_add(args: argparse.Namespace) -> int:
    return _mutate_collection(args, "add")


def cmd_remove(args: argparse.Namespace) -> int:
    return _mutate_collection(args, "remove")


def cmd_grant(args: argparse.Namespace) -> int:
    from jobfolders.engine.logging import log, log_security_event

    store = _open_store(args)
    folder = store.require_folder(args.name)

    permission = folder.get_permission(args.permission) or FolderPermission(name=args.permission)
    for user_name in args.user:
        permission.add_user_name(user_name)
    for group_name in args.group:
        permission.add_group_name(group_name)
    folder.set_permission(permission)
    store.write_folder(folder)

    log(log_security_event(
        "permission_granted",
        folder.name,
        permission_name=args.permission,
        user_name=None,
        user_groups=list(permission.group_names),
        level="INFO",
    ))
    print(f"[OK] Granted {args.permission} on {folder.name}")
    return 0


def cmd_delete(args: argparse.Namespace) -> int:
    store = _open_store(args)
    folder = store.require_folder(args.name)
    store.remove_folder(args.name, delete_contents=args.delete_contents)

    if folder.parent_name:
        parent = store.get_folder(folder.parent_name)
        if parent is not None:
            parent.remove_child_name(folder.name)
            store.write_folder(parent)

    print(f"[OK] Deleted job folder {args.name}")
    return 0


def cmd_decode(args: argparse.Namespace) -> int:
    from jobfolders.engine.logging import log, log_decode_failure

    _load_settings(args)
    path = Path(args.path)
    if not path.exists():
        print(f"[ERROR] File not found: {path}")
        return 1

    data = path.read_bytes()
    try:
        folder = JobFolder.decode(data)
    except JobFolderDecodeError as e:
        log(log_decode_failure(e.input_description or str(path), e.message))
        raise
    print(folder.model_dump_json(indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
