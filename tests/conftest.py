"""
Shared fixtures: an in-memory project model and a generated project.pbxproj
"""

import hashlib
from pathlib import Path

import pytest

from xcodesync.classify import file_type_for


class FakeGroup:
    def __init__(self, name, path=None, parent=None, root=None):
        self.name = name
        self.path = path
        self.parent = parent
        self.root = root
        self.children = []

    @property
    def real_path(self) -> Path:
        if self.parent is None:
            return self.root
        return self.parent.real_path / self.path if self.path else self.parent.real_path

    def child(self, name):
        for node in self.children:
            if node.name == name:
                return node
        return None

    def new_group(self, name, path):
        group = FakeGroup(name, path, parent=self)
        self.children.append(group)
        return group

    def new_file_reference(self, path):
        ref = FakeFileReference(str(path), self)
        self.children.append(ref)
        return ref

    def groups(self):
        """Every group below this one"""
        found = []
        for node in self.children:
            if isinstance(node, FakeGroup):
                found.append(node)
                found.extend(node.groups())
        return found


class FakeFileReference:
    def __init__(self, path, parent):
        self.path = path
        self.name = Path(path).name
        self.parent = parent
        self.explicit_file_type = None

    @property
    def real_path(self) -> Path:
        return self.parent.real_path / self.path

    def set_explicit_file_type(self, file_type=None):
        self.explicit_file_type = file_type or file_type_for(self.real_path)


class FakePhase:
    def __init__(self):
        self.refs = []

    def add_file_reference(self, ref, avoid_duplicates=False):
        if avoid_duplicates and ref in self.refs:
            return
        self.refs.append(ref)


class FakeTarget:
    def __init__(self, name):
        self.name = name
        self.source_build_phase = FakePhase()
        self.frameworks_build_phase = FakePhase()
        self.resources_build_phase = FakePhase()

    def add_resources(self, refs):
        for ref in refs:
            self.resources_build_phase.add_file_reference(ref, True)


class FakeProject:
    def __init__(self, root):
        self.main_group = FakeGroup("", root=root)
        self.targets = []


@pytest.fixture
def sandbox(tmp_path):
    root = tmp_path / "App"
    (root / "Vendor").mkdir(parents=True)
    return root


@pytest.fixture
def project(sandbox):
    project = FakeProject(sandbox)
    project.main_group.new_group("Vendor", "Vendor")
    project.targets.append(FakeTarget("App"))
    project.targets.append(FakeTarget("AppTests"))
    return project


@pytest.fixture
def vendor(project):
    return project.main_group.child("Vendor")


@pytest.fixture
def target(project):
    return project.targets[0]


@pytest.fixture
def outside(tmp_path):
    """A directory outside the project sandbox to copy sources from"""
    path = tmp_path / "downloads"
    path.mkdir()
    return path


def make_tree(root: Path, files):
    """Create files (and their parent folders) under root"""
    for name in files:
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(f"// {name}\n")
    return root


def uuid_for(prefix: str, path: str) -> str:
    """Deterministic 24-char object id"""
    return hashlib.md5(f"{prefix}:{path}".encode()).hexdigest()[:24].upper()


IDS = {key: uuid_for("fixture", key) for key in (
    "root_group", "vendor_group", "products_group", "app_ref",
    "target", "target_config_list", "sources_phase", "frameworks_phase",
    "resources_phase", "project", "project_config_list",
    "debug_project", "release_project", "debug_target", "release_target",
)}


def generate_pbxproj() -> str:
    """Minimal project: main group with Vendor and Products, one App target"""
    return f'''// !$*UTF8*$!
{{
\tarchiveVersion = 1;
\tclasses = {{
\t}};
\tobjectVersion = 56;
\tobjects = {{

/* Begin PBXFileReference section */
\t\t{IDS["app_ref"]} /* App.app */ = {{isa = PBXFileReference; explicitFileType = wrapper.application; includeInIndex = 0; path = App.app; sourceTree = BUILT_PRODUCTS_DIR; }};
/* End PBXFileReference section */

/* Begin PBXFrameworksBuildPhase section */
\t\t{IDS["frameworks_phase"]} /* Frameworks */ = {{
\t\t\tisa = PBXFrameworksBuildPhase;
\t\t\tbuildActionMask = 2147483647;
\t\t\tfiles = (
\t\t\t);
\t\t\trunOnlyForDeploymentPostprocessing = 0;
\t\t}};
/* End PBXFrameworksBuildPhase section */

/* Begin PBXGroup section */
\t\t{IDS["root_group"]} = {{
\t\t\tisa = PBXGroup;
\t\t\tchildren = (
\t\t\t\t{IDS["vendor_group"]} /* Vendor */,
\t\t\t\t{IDS["products_group"]} /* Products */,
\t\t\t);
\t\t\tsourceTree = "<group>";
\t\t}};
\t\t{IDS["vendor_group"]} /* Vendor */ = {{
\t\t\tisa = PBXGroup;
\t\t\tchildren = (
\t\t\t);
\t\t\tpath = Vendor;
\t\t\tsourceTree = "<group>";
\t\t}};
\t\t{IDS["products_group"]} /* Products */ = {{
\t\t\tisa = PBXGroup;
\t\t\tchildren = (
\t\t\t\t{IDS["app_ref"]} /* App.app */,
\t\t\t);
\t\t\tname = Products;
\t\t\tsourceTree = "<group>";
\t\t}};
/* End PBXGroup section */

/* Begin PBXNativeTarget section */
\t\t{IDS["target"]} /* App */ = {{
\t\t\tisa = PBXNativeTarget;
\t\t\tbuildConfigurationList = {IDS["target_config_list"]} /* Build configuration list for PBXNativeTarget "App" */;
\t\t\tbuildPhases = (
\t\t\t\t{IDS["sources_phase"]} /* Sources */,
\t\t\t\t{IDS["frameworks_phase"]} /* Frameworks */,
\t\t\t\t{IDS["resources_phase"]} /* Resources */,
\t\t\t);
\t\t\tbuildRules = (
\t\t\t);
\t\t\tdependencies = (
\t\t\t);
\t\t\tname = App;
\t\t\tproductName = App;
\t\t\tproductReference = {IDS["app_ref"]} /* App.app */;
\t\t\tproductType = "com.apple.product-type.application";
\t\t}};
/* End PBXNativeTarget section */

/* Begin PBXProject section */
\t\t{IDS["project"]} /* Project object */ = {{
\t\t\tisa = PBXProject;
\t\t\tbuildConfigurationList = {IDS["project_config_list"]} /* Build configuration list for PBXProject "App" */;
\t\t\tdevelopmentRegion = en;
\t\t\thasScannedForEncodings = 0;
\t\t\tknownRegions = (
\t\t\t\ten,
\t\t\t\tBase,
\t\t\t);
\t\t\tmainGroup = {IDS["root_group"]};
\t\t\tproductRefGroup = {IDS["products_group"]} /* Products */;
\t\t\tprojectDirPath = "";
\t\t\tprojectRoot = "";
\t\t\ttargets = (
\t\t\t\t{IDS["target"]} /* App */,
\t\t\t);
\t\t}};
/* End PBXProject section */

/* Begin PBXResourcesBuildPhase section */
\t\t{IDS["resources_phase"]} /* Resources */ = {{
\t\t\tisa = PBXResourcesBuildPhase;
\t\t\tbuildActionMask = 2147483647;
\t\t\tfiles = (
\t\t\t);
\t\t\trunOnlyForDeploymentPostprocessing = 0;
\t\t}};
/* End PBXResourcesBuildPhase section */

/* Begin PBXSourcesBuildPhase section */
\t\t{IDS["sources_phase"]} /* Sources */ = {{
\t\t\tisa = PBXSourcesBuildPhase;
\t\t\tbuildActionMask = 2147483647;
\t\t\tfiles = (
\t\t\t);
\t\t\trunOnlyForDeploymentPostprocessing = 0;
\t\t}};
/* End PBXSourcesBuildPhase section */

/* Begin XCBuildConfiguration section */
\t\t{IDS["debug_project"]} /* Debug */ = {{
\t\t\tisa = XCBuildConfiguration;
\t\t\tbuildSettings = {{
\t\t\t\tSDKROOT = iphoneos;
\t\t\t}};
\t\t\tname = Debug;
\t\t}};
\t\t{IDS["release_project"]} /* Release */ = {{
\t\t\tisa = XCBuildConfiguration;
\t\t\tbuildSettings = {{
\t\t\t\tSDKROOT = iphoneos;
\t\t\t}};
\t\t\tname = Release;
\t\t}};
\t\t{IDS["debug_target"]} /* Debug */ = {{
\t\t\tisa = XCBuildConfiguration;
\t\t\tbuildSettings = {{
\t\t\t\tPRODUCT_NAME = "$(TARGET_NAME)";
\t\t\t}};
\t\t\tname = Debug;
\t\t}};
\t\t{IDS["release_target"]} /* Release */ = {{
\t\t\tisa = XCBuildConfiguration;
\t\t\tbuildSettings = {{
\t\t\t\tPRODUCT_NAME = "$(TARGET_NAME)";
\t\t\t}};
\t\t\tname = Release;
\t\t}};
/* End XCBuildConfiguration section */

/* Begin XCConfigurationList section */
\t\t{IDS["target_config_list"]} /* Build configuration list for PBXNativeTarget "App" */ = {{
\t\t\tisa = XCConfigurationList;
\t\t\tbuildConfigurations = (
\t\t\t\t{IDS["debug_target"]} /* Debug */,
\t\t\t\t{IDS["release_target"]} /* Release */,
\t\t\t);
\t\t\tdefaultConfigurationIsVisible = 0;
\t\t\tdefaultConfigurationName = Release;
\t\t}};
\t\t{IDS["project_config_list"]} /* Build configuration list for PBXProject "App" */ = {{
\t\t\tisa = XCConfigurationList;
\t\t\tbuildConfigurations = (
\t\t\t\t{IDS["debug_project"]} /* Debug */,
\t\t\t\t{IDS["release_project"]} /* Release */,
\t\t\t);
\t\t\tdefaultConfigurationIsVisible = 0;
\t\t\tdefaultConfigurationName = Release;
\t\t}};
/* End XCConfigurationList section */
\t}};
\trootObject = {IDS["project"]} /* Project object */;
}}
'''


@pytest.fixture
def xcodeproj(sandbox):
    """App.xcodeproj next to the sandbox's Vendor folder"""
    bundle = sandbox / "App.xcodeproj"
    bundle.mkdir()
    (bundle / "project.pbxproj").write_text(generate_pbxproj(), encoding="utf-8")
    return bundle


@pytest.fixture
def files():
    return make_tree
