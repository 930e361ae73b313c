"""
Build phase membership for file references
"""

import logging

from .classify import is_bundle, is_compile_source, is_static_lib

logger = logging.getLogger(__name__)


def attach(target, ref, log: logging.Logger = logger) -> list:
    """Add ref to every build phase of target its real path qualifies for.

    Static libraries are linked, bundles and directories are copied as
    resources, and C family sources are compiled. Returns the names of the
    phases touched; an empty list means the file is only referenced.
    """
    path = ref.real_path
    phases = []

    if is_static_lib(path):
        target.frameworks_build_phase.add_file_reference(ref, True)
        phases.append("frameworks")

    if is_bundle(path) or path.is_dir():
        target.add_resources([ref])
        phases.append("resources")

    if is_compile_source(path):
        target.source_build_phase.add_file_reference(ref, True)
        phases.append("sources")

    if phases:
        log.debug("Attached %s to %s (%s)", ref.name, target.name, ", ".join(phases))
    return phases
