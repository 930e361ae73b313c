"""
Xcode project model backed by the pbxproj library

Thin handles over pbxproj objects exposing what the sync operations need:
groups with an on-disk real path, file references, and targets with their
sources / frameworks / resources build phases.
"""

import logging
from pathlib import Path

from pbxproj import XcodeProject
from pbxproj.pbxsections import PBXBuildFile, PBXFileReference

from .classify import file_type_for
from .errors import NotFound

logger = logging.getLogger(__name__)

GROUP_SECTIONS = ("PBXGroup", "PBXVariantGroup")

SOURCES_PHASE = "PBXSourcesBuildPhase"
FRAMEWORKS_PHASE = "PBXFrameworksBuildPhase"
RESOURCES_PHASE = "PBXResourcesBuildPhase"


def _attr(obj, key: str):
    value = getattr(obj, key, None)
    return str(value) if value is not None else None


def _display_name(obj) -> str:
    name = _attr(obj, "name")
    if name:
        return name
    path = _attr(obj, "path")
    return Path(path).name if path else ""


class _Node:
    def __init__(self, model: "XcodeProjectModel", obj):
        self._model = model
        self._obj = obj

    @property
    def id(self) -> str:
        return str(self._obj.get_id())

    @property
    def name(self) -> str:
        return _display_name(self._obj)

    @property
    def path(self):
        return _attr(self._obj, "path")

    @property
    def real_path(self) -> Path:
        return self._model.real_path_of(self._obj)

    def __eq__(self, other):
        return isinstance(other, _Node) and other.id == self.id

    def __hash__(self):
        return hash(self.id)

    def __repr__(self):
        return f"<{type(self).__name__} {self.name} ({self.id})>"

    def __str__(self):
        return self.name


class FileReference(_Node):
    @property
    def explicit_file_type(self):
        return _attr(self._obj, "explicitFileType")

    def set_explicit_file_type(self, file_type=None):
        """Pin the file type instead of letting Xcode infer it"""
        if file_type is None:
            file_type = file_type_for(self.real_path)
        if hasattr(self._obj, "lastKnownFileType"):
            delattr(self._obj, "lastKnownFileType")
        setattr(self._obj, "explicitFileType", file_type)


class Group(_Node):
    @property
    def children(self) -> list:
        return [self._model.wrap(self._model.pbx.objects[child_id])
                for child_id in getattr(self._obj, "children", [])]

    def child(self, name: str):
        for node in self.children:
            if node.name == name:
                return node
        return None

    def new_group(self, name: str, path: str) -> "Group":
        obj = self._model.pbx.add_group(name, path=path, parent=self._obj)
        logger.debug("Created group %s (path %s) under %s", name, path, self.name)
        return Group(self._model, obj)

    def new_file_reference(self, path) -> FileReference:
        obj = PBXFileReference.create(str(path), tree="<group>")
        self._model.pbx.objects[obj.get_id()] = obj
        self._obj.add_child(obj)
        logger.debug("Created file reference %s under %s", path, self.name)
        return FileReference(self._model, obj)


class BuildPhase(_Node):
    def file_references(self) -> list:
        objects = self._model.pbx.objects
        refs = []
        for build_file_id in getattr(self._obj, "files", []):
            build_file = objects[build_file_id]
            ref_id = getattr(build_file, "fileRef", None)
            if ref_id is not None:
                refs.append(self._model.wrap(objects[ref_id]))
        return refs

    def add_file_reference(self, ref: FileReference, avoid_duplicates: bool = False):
        if avoid_duplicates and ref in self.file_references():
            return None
        build_file = PBXBuildFile.create(ref._obj)
        self._model.pbx.objects[build_file.get_id()] = build_file
        self._obj.add_build_file(build_file)
        return build_file


class Target(_Node):
    def _phase(self, isa: str) -> BuildPhase:
        objects = self._model.pbx.objects
        for phase_id in getattr(self._obj, "buildPhases", []):
            phase = objects[phase_id]
            if getattr(phase, "isa", None) == isa:
                return BuildPhase(self._model, phase)

        logger.debug("Target %s has no %s, creating it", self.name, isa)
        phases = self._obj.get_or_create_build_phase(isa)
        return BuildPhase(self._model, phases[0])

    @property
    def source_build_phase(self) -> BuildPhase:
        return self._phase(SOURCES_PHASE)

    @property
    def frameworks_build_phase(self) -> BuildPhase:
        return self._phase(FRAMEWORKS_PHASE)

    @property
    def resources_build_phase(self) -> BuildPhase:
        return self._phase(RESOURCES_PHASE)

    def add_resources(self, refs):
        phase = self.resources_build_phase
        for ref in refs:
            phase.add_file_reference(ref, avoid_duplicates=True)


class XcodeProjectModel:
    """A loaded project.pbxproj and the directory its paths are relative to"""

    def __init__(self, pbx: XcodeProject, pbxproj_path: Path):
        self.pbx = pbx
        self.pbxproj_path = Path(pbxproj_path)

    @classmethod
    def load(cls, path) -> "XcodeProjectModel":
        path = Path(path)
        if path.suffix == ".xcodeproj":
            path = path / "project.pbxproj"
        if not path.is_file():
            raise NotFound(f"<{path}> does not exist")
        logger.info("Loading project %s", path)
        return cls(XcodeProject.load(str(path)), path)

    def save(self):
        logger.info("Saving project %s", self.pbxproj_path)
        self.pbx.save(str(self.pbxproj_path))

    @property
    def _root_object(self):
        return self.pbx.objects[self.pbx.rootObject]

    @property
    def source_root(self) -> Path:
        base = self.pbxproj_path.resolve().parent.parent
        project_dir = _attr(self._root_object, "projectDirPath")
        return base / project_dir if project_dir else base

    @property
    def main_group(self) -> Group:
        return Group(self, self.pbx.objects[self._root_object.mainGroup])

    @property
    def targets(self) -> list:
        return [Target(self, t) for t in self.pbx.objects.get_targets()]

    def wrap(self, obj):
        isa = getattr(obj, "isa", None)
        if isa in GROUP_SECTIONS:
            return Group(self, obj)
        if isa == "PBXFileReference":
            return FileReference(self, obj)
        return _Node(self, obj)

    def _parent_group_of(self, obj):
        obj_id = obj.get_id()
        for group in self.pbx.objects.get_objects_in_section(*GROUP_SECTIONS):
            if obj_id in getattr(group, "children", []):
                return group
        return None

    def real_path_of(self, obj) -> Path:
        """Resolve an object's on-disk location from its sourceTree chain"""
        tree = _attr(obj, "sourceTree")
        path = _attr(obj, "path")
        if tree == "<absolute>":
            return Path(path)
        if tree == "<group>":
            parent = self._parent_group_of(obj)
            base = self.real_path_of(parent) if parent is not None else self.source_root
        else:
            # SOURCE_ROOT and the build-setting rooted trees
            base = self.source_root
        return base / path if path else base
