"""
Wire libraries, bundles, headers and source trees into Xcode projects
"""

from .classify import (
    ATOMIC_EXTENSIONS,
    COMPILE_EXTENSIONS,
    PathClassification,
    classify,
    file_type_for,
    is_bundle,
    is_compile_source,
    is_static_lib,
    should_treat_as_file,
)
from .errors import DuplicateEntry, InvalidFile, NotFound, XcodeSyncError
from .groups import find_group_by_name, find_target_by_name, group_for_path
from .membership import attach
from .project import XcodeProjectModel
from .sync import ProjectTreeSync, copy_into

__version__ = "0.1.0"
