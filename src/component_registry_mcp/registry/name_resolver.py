"""
Component name detection based on file structure.
"""

import os
from typing import Sequence


def _is_index_file(file_path: str) -> bool:
    return os.path.basename(file_path).startswith('index.')


def _strip_extension(file_name: str) -> str:
    if '.' in file_name:
        return file_name[:file_name.rindex('.')]
    return file_name


def resolve_component_name(component_dir: str, files: Sequence[str]) -> str:
    """
    Decide the display name of a component.

    Args:
        component_dir: Directory containing the component files
        files: Files belonging to the component

    Returns:
        The component name

    Examples:
        resolve_component_name('/app/composable', ['/app/composable/createContext.ts'])
        -> 'createContext'

        resolve_component_name('/app/ui/button', ['/app/ui/button/index.vue'])
        -> 'button'

        resolve_component_name('/app/ui/modal', ['/app/ui/modal/Modal.vue'])
        -> 'modal'
    """
    dir_name = os.path.basename(os.path.normpath(component_dir))

    if not files:
        return dir_name

    # index.vue / index.ts etc. is the standard multi-file component layout
    if any(_is_index_file(f) for f in files):
        return dir_name

    if len(files) == 1:
        name = _strip_extension(os.path.basename(files[0]))

        if name.lower() == dir_name.lower():
            return dir_name
        if name != dir_name and len(name) > 2:
            return name
        return dir_name

    return dir_name
