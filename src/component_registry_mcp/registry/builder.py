"""
Registry builder.

Orchestrates the full pipeline for one project: discover component units,
resolve their names and registry types, list their files, classify their
dependencies and assemble the manifest. Components are independent once the
project's dependency sets and alias table are loaded, so they are processed
on a thread pool; the manifest keeps discovery order.
"""

import logging
import os
import posixpath
import time
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional

from ..constants import REGISTRY_SCHEMA_URL
from ..errors import DirectoryNotFoundError
from ..project_settings import ProjectDependencies, RegistryConfig, load_project_dependencies
from ..utils.file_filter import FileFilter
from .classifier import DependencyClassifier, ProjectDependencySets
from .discovery import ComponentDiscoverer
from .name_resolver import resolve_component_name
from .path_classifier import PathClassifier
from .types import ComponentUnit, RegistryFile, RegistryItem, RegistrySchema

logger = logging.getLogger(__name__)


def _to_posix(path: str) -> str:
    return path.replace(os.sep, '/')


class RegistryBuilder:
    """Builds a RegistrySchema from a RegistryConfig."""

    def __init__(
        self,
        config: RegistryConfig,
        project: Optional[ProjectDependencies] = None,
        max_workers: Optional[int] = None,
        file_filter: Optional[FileFilter] = None,
    ):
        """
        Initialize the builder.

        Args:
            config: Resolved registry configuration
            project: Dependency information; read from the project root when omitted
            max_workers: Thread pool size (None lets the executor decide)
            file_filter: Filesystem listing/filtering rules
        """
        self.config = config
        self.max_workers = max_workers
        self.file_filter = file_filter or FileFilter()
        self.discoverer = ComponentDiscoverer(self.file_filter)
        self.path_classifier = PathClassifier()
        self._project = project
        self._classifier: Optional[DependencyClassifier] = None

    @property
    def classifier(self) -> DependencyClassifier:
        if self._classifier is None:
            project = self._project if self._project is not None else load_project_dependencies(self.config.root)

            # Manual lists in the config extend what package.json declares
            dependency_sets = ProjectDependencySets.of(
                set(project.dependencies) | set(self.config.dependencies),
                set(project.dev_dependencies) | set(self.config.dev_dependencies),
            )
            registries = self.config.registries if self.config.registries is not None else project.registries

            self._classifier = DependencyClassifier(dependency_sets, aliases=registries, file_filter=self.file_filter)
        return self._classifier

    def build(self) -> RegistrySchema:
        """
        Build the registry manifest.

        Raises:
            DirectoryNotFoundError: If the scan directory does not exist
        """
        scan_dir = self.config.cwd
        if not os.path.isdir(scan_dir):
            raise DirectoryNotFoundError(scan_dir)

        start_time = time.time()
        classifier = self.classifier

        units = self.discoverer.discover(scan_dir, self.config.component_pattern)
        logger.info(f"Found {len(units)} components in {scan_dir}")

        if len(units) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                items = list(executor.map(self.process_component, units))
        else:
            items = [self.process_component(unit) for unit in units]

        skipped = classifier.skipped_files
        if skipped:
            logger.warning(f"{len(skipped)} files could not be read and were skipped")

        logger.info(f"Built registry with {len(items)} items in {time.time() - start_time:.2f}s")

        return RegistrySchema(
            schema=REGISTRY_SCHEMA_URL,
            name=self.config.name,
            homepage=self.config.homepage,
            items=items,
        )

    def process_component(self, unit: ComponentUnit) -> RegistryItem:
        """
        Build the registry entry for one component unit.

        Args:
            unit: Discovered component

        Returns:
            Registry item with typed files and non-empty dependency lists
        """
        component_dir = unit.directory
        files = self._component_files(unit)

        relative_dir = _to_posix(os.path.relpath(component_dir, self.config.cwd))
        name = resolve_component_name(component_dir, list(unit.files))

        registry_files = []
        for file_path in files:
            relative_file = _to_posix(os.path.relpath(file_path, component_dir))
            path = posixpath.normpath(posixpath.join(relative_dir, relative_file))
            registry_files.append(RegistryFile(path=path, type=self.path_classifier.classify(path)))

        deps = self.classifier.classify(files)

        item = RegistryItem(
            name=name,
            type=self.path_classifier.classify(relative_dir),
            files=registry_files,
            dependencies=list(deps.dependencies),
            dev_dependencies=list(deps.dev_dependencies),
            registry_dependencies=list(deps.registry_dependencies),
        )
        logger.debug(f"Processed component {name!r} ({item.type}) with {len(registry_files)} files")
        return item

    def _component_files(self, unit: ComponentUnit) -> List[str]:
        """File-based units keep their single file; directory units take every file under the directory."""
        if unit.is_file_based:
            return list(unit.files)

        files = self.file_filter.list_files(unit.directory, self.config.file_pattern)
        return files or list(unit.files)


def build_registry(config: RegistryConfig, project: Optional[ProjectDependencies] = None,
                   max_workers: Optional[int] = None) -> RegistrySchema:
    """Convenience function to build a manifest for a configuration."""
    return RegistryBuilder(config, project=project, max_workers=max_workers).build()
