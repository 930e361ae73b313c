"""
Group lookup and creation by relative path
"""

from .errors import DuplicateEntry


def _is_group(node) -> bool:
    return hasattr(node, "new_group")


def _lookup(group, path: str):
    """Walk an existing a/b/c path under group without creating anything"""
    node = group
    for part in path.split("/"):
        if not part:
            continue
        if not _is_group(node):
            return None
        node = node.child(part)
        if node is None:
            return None
    return node


def group_for_path(group, path: str, create_if_missing: bool = True):
    """Find, or create, the group at `path` relative to `group`.

    `path` must not start with '/'. "." is `group` itself. Each missing
    segment becomes a child group whose name and on-disk path are the segment.
    Returns None when a segment is missing and `create_if_missing` is False.
    """
    if path == ".":
        return group

    found = _lookup(group, path)
    if found is not None:
        if not _is_group(found):
            raise DuplicateEntry(group.name, path)
        return found

    if not create_if_missing:
        return None

    current = group
    for part in path.split("/"):
        if not part:
            continue
        node = current.child(part)
        if node is None:
            node = current.new_group(part, part)
        elif not _is_group(node):
            raise DuplicateEntry(current.name, part)
        current = node
    return current


def find_group_by_name(project, name: str):
    """First child of the main group whose path is `name`"""
    for child in project.main_group.children:
        if _is_group(child) and child.path == name:
            return child
    return None


def find_target_by_name(project, name: str):
    for target in project.targets:
        if target.name == name:
            return target
    return None
