"""Versioning engine: versioning file, module files, module -> set index, tag names."""

from .gomod import (
    build_module_path_map,
    read_module_path,
    update_all_mod_files,
    update_requires,
)
from .index import ModuleInfo, ModuleVersioning, build_module_info_map
from .manifest import (
    Manifest,
    ModuleSet,
    get_all_module_set_names,
    get_module_set,
    load_manifest,
)
from .release import (
    REPO_ROOT_TAG,
    ModuleSetRelease,
    full_tag_name,
    module_path_to_tag_name,
    module_paths_to_tag_names,
)

__all__ = [
    "REPO_ROOT_TAG",
    "Manifest",
    "ModuleInfo",
    "ModuleSet",
    "ModuleSetRelease",
    "ModuleVersioning",
    "build_module_info_map",
    "build_module_path_map",
    "full_tag_name",
    "get_all_module_set_names",
    "get_module_set",
    "load_manifest",
    "module_path_to_tag_name",
    "module_paths_to_tag_names",
    "read_module_path",
    "update_all_mod_files",
    "update_requires",
]
