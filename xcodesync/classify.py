"""
File role classification by extension

Everything here is a pure predicate over a path. The tables are data, not
behaviour: add an extension to a table to change how it is treated.
"""

from enum import Enum
from pathlib import Path

# Extensions that are always added as one file reference, never expanded
# into a group, even when they are physically directories.
ATOMIC_EXTENSIONS = frozenset([
    "a",
    "app",
    "bundle",
    "dylib",
    "framework",
    "h",
    "m",
    "mm",
    "markdown",
    "mdimporter",
    "octest",
    "pch",
    "plist",
    "sh",
    "swift",
    "xcassets",
    "xcconfig",
    "xcdatamodel",
    "xcodeproj",
    "xctest",
    "xib",
])

COMPILE_EXTENSIONS = frozenset(["c", "cpp", "m", "mm"])

FILE_TYPES = {
    "a": "archive.ar",
    "app": "wrapper.application",
    "bundle": "wrapper.plug-in",
    "c": "sourcecode.c.c",
    "cpp": "sourcecode.cpp.cpp",
    "dylib": "compiled.mach-o.dylib",
    "framework": "wrapper.framework",
    "h": "sourcecode.c.h",
    "hpp": "sourcecode.cpp.h",
    "json": "text.json",
    "m": "sourcecode.c.objc",
    "markdown": "net.daringfireball.markdown",
    "md": "net.daringfireball.markdown",
    "mdimporter": "wrapper.cfbundle",
    "mm": "sourcecode.cpp.objcpp",
    "octest": "wrapper.cfbundle",
    "pch": "sourcecode.c.h",
    "plist": "text.plist.xml",
    "png": "image.png",
    "sh": "text.script.sh",
    "storyboard": "file.storyboard",
    "strings": "text.plist.strings",
    "swift": "sourcecode.swift",
    "xcassets": "folder.assetcatalog",
    "xcconfig": "text.xcconfig",
    "xcdatamodel": "wrapper.xcdatamodel",
    "xcodeproj": "wrapper.pb-project",
    "xctest": "wrapper.cfbundle",
    "xib": "file.xib",
}


class PathClassification(Enum):
    STATIC_LIBRARY = "static-library"
    BUNDLE = "bundle"
    COMPILE_SOURCE = "compile-source"
    OPAQUE_FILE = "opaque-file"
    REAL_DIRECTORY = "real-directory"


def _extension(path: Path) -> str:
    return Path(path).suffix[1:]


def is_static_lib(path: Path) -> bool:
    path = Path(path)
    return path.name.endswith(".a") and path.exists() and not path.is_dir()


def is_bundle(path: Path) -> bool:
    path = Path(path)
    return path.name.endswith(".bundle") and path.exists() and path.is_dir()


def is_compile_source(path: Path) -> bool:
    path = Path(path)
    if not path.exists() or path.is_dir():
        return False
    return _extension(path) in COMPILE_EXTENSIONS


def should_treat_as_file(path: Path) -> bool:
    """True if path is added whole, whether or not it is a directory on disk"""
    return _extension(path) in ATOMIC_EXTENSIONS


def classify(path: Path):
    """Derived role of an existing path, or None if it does not exist"""
    path = Path(path)
    if not path.exists():
        return None
    if is_static_lib(path):
        return PathClassification.STATIC_LIBRARY
    if is_bundle(path):
        return PathClassification.BUNDLE
    if is_compile_source(path):
        return PathClassification.COMPILE_SOURCE
    if path.is_dir() and not should_treat_as_file(path):
        return PathClassification.REAL_DIRECTORY
    return PathClassification.OPAQUE_FILE


def file_type_for(path: Path) -> str:
    """Xcode file type identifier used for the explicit file type tag"""
    path = Path(path)
    file_type = FILE_TYPES.get(_extension(path).lower())
    if file_type:
        return file_type
    if path.is_dir():
        return "folder"
    return "text"
