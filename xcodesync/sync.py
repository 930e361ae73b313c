"""
Mirror files and folders from disk into an Xcode project's groups

All four entry points end up in `ProjectTreeSync.add_file_or_folder`:

1. copy the source into the destination group's directory unless it already
   lives there
2. add a plain file, an unexpanded folder, or an atomic bundle as one reference
3. otherwise create a group for the folder and walk it, creating sub-groups
   on demand and one reference per file or atomic bundle

Nothing is rolled back on failure: a copy interrupted by an error stays on
disk, and groups created before the error stay in the project.
"""

import logging
import os
import shutil
from pathlib import Path

from .classify import classify, should_treat_as_file
from .errors import DuplicateEntry, InvalidFile, NotFound
from .groups import group_for_path
from .membership import attach
from .walk import Visit, walk


def copy_into(src: Path, dest_dir: Path):
    """Recursively copy src into dest_dir, merging into an existing folder"""
    dest = Path(dest_dir) / src.name
    if src.is_dir():
        shutil.copytree(src, dest, symlinks=True, dirs_exist_ok=True)
    else:
        shutil.copy2(src, dest)


class ProjectTreeSync:
    def __init__(self, logger: logging.Logger = None, copy_tree=copy_into):
        self.log = logger or logging.getLogger("xcodesync")
        self.copy_tree = copy_tree

    def add_static_lib(self, target, group, lib_path):
        return self.add_file_or_folder(group, Path(lib_path), [target])

    def add_bundle(self, target, group, bundle_path):
        return self.add_file_or_folder(group, Path(bundle_path), [target], True, False)

    def add_header_tree(self, group, header_path):
        return self.add_file_or_folder(group, Path(header_path))

    def group_has_file(self, group, path) -> bool:
        """True if path already sits directly in group's directory.

        Only locations are compared, never contents.
        """
        path = Path(path)
        here = os.path.abspath(path)
        there = os.path.abspath(Path(group.real_path) / path.name)
        return here == there

    def add_normal_file(self, group, path, targets=None):
        """Add path to group as a single file reference"""
        path = Path(path)
        if group.child(path.name) is not None:
            raise DuplicateEntry(group.name, path.name)
        if not path.exists() or (path.is_dir() and not should_treat_as_file(path)):
            raise InvalidFile(f"<{path}> does not exist or is a directory")

        ref = group.new_file_reference(path.name)
        ref.set_explicit_file_type()
        self.log.debug("Added %s to %s as %s", path.name, group.name, classify(path))

        for target in targets or []:
            attach(target, ref, self.log)
        return ref

    def add_file_or_folder(self, group, path, targets=None, copy_if_needed=True, as_group=True):
        """Add a file or folder under group and return the new reference or group.

        Folders are expanded into groups when `as_group` is set, unless their
        extension marks them as atomic (.framework, .bundle, ...). With
        `copy_if_needed` the source is first copied into the group's directory.
        """
        path = Path(path)
        if group.child(path.name) is not None:
            raise DuplicateEntry(group.name, path.name)
        if not path.exists():
            raise NotFound(f"<{path}> does not exist")
        origin = path

        if copy_if_needed and not self.group_has_file(group, path):
            self.log.info("Copying %s into %s", path, group.real_path)
            self.copy_tree(path, Path(group.real_path))
            path = Path(group.real_path) / path.name
        elif copy_if_needed:
            self.log.debug("%s already in %s, not copying", path.name, group.real_path)

        if not path.is_dir() or not as_group or should_treat_as_file(path):
            return self.add_normal_file(group, path, targets)

        folder = path
        relative = os.path.relpath(os.path.abspath(folder), os.path.abspath(group.real_path))
        top_group = group.new_group(folder.name, relative)
        self.log.info("Mirroring %s into group %s", folder, top_group.name)

        def visit(f: Path) -> Visit:
            if f.is_symlink():
                self._resolve_symlink(f, origin / f.relative_to(folder), origin)

            if f.name.startswith("."):
                return Visit.PRUNE
            if f == folder:
                return Visit.DESCEND

            # Bundles are directories on disk too
            if not f.is_dir() or should_treat_as_file(f):
                parent = f.relative_to(folder).parent.as_posix()
                sub_group = group_for_path(top_group, parent)
                ref = self.add_normal_file(sub_group, f, targets)
                if should_treat_as_file(ref.real_path):
                    return Visit.PRUNE
            return Visit.DESCEND

        walk(folder, visit)
        return top_group

    def _resolve_symlink(self, link: Path, source_link: Path, origin: Path):
        """Replace a symlink with the file or folder it points at.

        `source_link` is where the link sat before being copied into the
        group's directory; relative targets are read against its folder.
        Targets inside `origin` are copied so the walk still finds them there,
        anything else is moved into place.
        """
        if not source_link.is_symlink():
            source_link = link
        source = Path(os.readlink(source_link))
        if not source.is_absolute():
            source = source_link.parent / source
        if not source.exists():
            raise NotFound(f"<{link}> points to missing <{source}>")

        link.unlink()
        if source.resolve().is_relative_to(origin.resolve()):
            if source.is_dir():
                shutil.copytree(source, link, symlinks=True)
            else:
                shutil.copy2(source, link)
            self.log.debug("Copied %s into place of symlink %s", source, link)
            return
        shutil.move(str(source), str(link))
        self.log.debug("Moved %s into place of symlink %s", source, link)
