#!/usr/bin/env python3
"""
Add static libraries, bundles, headers or whole folders to an Xcode project

Usage:
    xcode-sync [-p PROJECT] staticlib -t TARGET -g GROUP libFoo.a
    xcode-sync [-p PROJECT] bundle -t TARGET -g GROUP Foo.bundle
    xcode-sync [-p PROJECT] headers -g GROUP include/
    xcode-sync [-p PROJECT] add -g GROUP [-t TARGET ...] [--no-copy] PATH
"""

import argparse
import logging
import sys
from pathlib import Path

from .errors import NotFound, XcodeSyncError
from .groups import find_group_by_name, find_target_by_name, group_for_path
from .project import XcodeProjectModel
from .sync import ProjectTreeSync

logger = logging.getLogger("xcodesync")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="xcode-sync", description=__doc__.strip().splitlines()[0])
    parser.add_argument("-p", "--project",
                        help=".xcodeproj or project.pbxproj (default: the one in the current directory)")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    parser.add_argument("--dry-run", action="store_true", help="do not save the project (files are still copied)")

    commands = parser.add_subparsers(dest="command", required=True)

    staticlib = commands.add_parser("staticlib", help="add and link a static library")
    staticlib.add_argument("-t", "--target", required=True)
    staticlib.add_argument("-g", "--group", required=True)
    staticlib.add_argument("path")

    bundle = commands.add_parser("bundle", help="add a resource bundle")
    bundle.add_argument("-t", "--target", required=True)
    bundle.add_argument("-g", "--group", required=True)
    bundle.add_argument("path")

    headers = commands.add_parser("headers", help="mirror a header folder into groups")
    headers.add_argument("-g", "--group", required=True)
    headers.add_argument("path")

    add = commands.add_parser("add", help="add any file or folder")
    add.add_argument("-g", "--group", required=True)
    add.add_argument("-t", "--target", action="append", default=[], dest="targets")
    add.add_argument("--no-copy", action="store_false", dest="copy",
                     help="reference the path where it is instead of copying it next to the group")
    add.add_argument("path")

    return parser


def find_project(directory: Path) -> Path:
    """The single .xcodeproj in directory"""
    candidates = sorted(directory.glob("*.xcodeproj"))
    if len(candidates) != 1:
        raise NotFound(f"expected one .xcodeproj in {directory}, found {len(candidates)}")
    return candidates[0]


def resolve_group(project, name: str):
    group = find_group_by_name(project, name)
    if group is None:
        group = group_for_path(project.main_group, name)
        Path(group.real_path).mkdir(parents=True, exist_ok=True)
    return group


def resolve_target(project, name: str):
    target = find_target_by_name(project, name)
    if target is None:
        raise NotFound(f"target <{name}> not found")
    return target


def run(args, project) -> object:
    syncer = ProjectTreeSync(logger)
    group = resolve_group(project, args.group)

    if args.command == "staticlib":
        return syncer.add_static_lib(resolve_target(project, args.target), group, args.path)
    if args.command == "bundle":
        return syncer.add_bundle(resolve_target(project, args.target), group, args.path)
    if args.command == "headers":
        return syncer.add_header_tree(group, args.path)

    targets = [resolve_target(project, name) for name in args.targets]
    return syncer.add_file_or_folder(group, Path(args.path), targets, args.copy)


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        project_path = Path(args.project) if args.project else find_project(Path.cwd())
        project = XcodeProjectModel.load(project_path)
        print(f"📂 Project: {project.pbxproj_path}")
        node = run(args, project)
    except (XcodeSyncError, OSError) as e:
        logger.error("%s failed: %s", args.command, e)
        print(f"❌ {e}")
        return 1

    if args.dry_run:
        print(f"✅ {node.name} added (dry run, project not saved)")
        return 0

    project.save()
    print(f"✅ {node.name} added to {args.group}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
