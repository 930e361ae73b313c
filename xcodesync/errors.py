"""
Errors raised while wiring files into an Xcode project
"""


class XcodeSyncError(ValueError):
    """Base class for every failure the sync operations raise"""


class DuplicateEntry(XcodeSyncError):
    """The destination group already has a child with that name"""

    def __init__(self, group_name: str, entry_name: str):
        super().__init__(f"<{group_name}> already has <{entry_name}>")
        self.group_name = group_name
        self.entry_name = entry_name


class NotFound(XcodeSyncError):
    """A source path, project, group or target does not exist"""


class InvalidFile(XcodeSyncError):
    """Path is missing or is a directory that cannot be added as a single file"""
