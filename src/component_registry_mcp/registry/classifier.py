"""
Main dependency classifier engine.

This module provides the DependencyClassifier, which scans a component's
source files for import literals and sorts every external reference into one
of three buckets:

- dependencies: packages listed in the project's production dependencies
- devDependencies: packages listed in the project's development dependencies
- registryDependencies: references to other registry items, either local UI
  components, aliased remote registries (rendered to URLs) or, as a catch-all,
  the import literal itself

Imports are found with a single regular expression rather than a parser; see
normalizer.IMPORT_PATTERN.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Any, FrozenSet, Iterable, List, Mapping, Optional, Union

from .aliases import RegistryAliasTable
from .normalizer import ImportNormalizer
from .types import ClassifiedDependencies
from ..utils.file_filter import FileFilter

logger = logging.getLogger(__name__)

DEPENDENCIES = 'dependencies'
DEV_DEPENDENCIES = 'devDependencies'
REGISTRY_DEPENDENCIES = 'registryDependencies'


@dataclass(frozen=True)
class ProjectDependencySets:
    """Package names declared by the project, fixed for one run."""
    dependencies: FrozenSet[str] = frozenset()
    dev_dependencies: FrozenSet[str] = frozenset()

    @classmethod
    def of(cls, dependencies: Iterable[str] = (), dev_dependencies: Iterable[str] = ()) -> "ProjectDependencySets":
        return cls(frozenset(dependencies or ()), frozenset(dev_dependencies or ()))


@dataclass(frozen=True)
class Classification:
    """Bucket and stored value for a single import literal."""
    bucket: str
    value: str


class DependencyClassifier:
    """
    Dependency classification engine.

    One instance holds the project's dependency sets and alias table and can
    classify any number of components. It keeps no per-component state apart
    from the record of files it had to skip.
    """

    def __init__(
        self,
        project_deps: Union[ProjectDependencySets, Iterable[str], None] = None,
        project_dev_deps: Optional[Iterable[str]] = None,
        aliases: Union[RegistryAliasTable, Mapping[str, Any], None] = None,
        file_filter: Optional[FileFilter] = None,
    ):
        """
        Initialize the dependency classifier.

        Args:
            project_deps: ProjectDependencySets, or the production dependency names
            project_dev_deps: Development dependency names (ignored when
                project_deps is already a ProjectDependencySets)
            aliases: RegistryAliasTable or a raw 'registries' mapping
            file_filter: Decides which files are scanned (valid extensions)
        """
        if isinstance(project_deps, ProjectDependencySets):
            self.project = project_deps
        else:
            self.project = ProjectDependencySets.of(project_deps or (), project_dev_deps or ())

        self.aliases = RegistryAliasTable.from_config(aliases)
        self.file_filter = file_filter or FileFilter()
        self._normalizer = ImportNormalizer()
        self._skipped_files: List[str] = []
        self._skipped_lock = threading.Lock()

    @property
    def skipped_files(self) -> List[str]:
        """Files that could not be read as UTF-8 text."""
        with self._skipped_lock:
            return list(self._skipped_files)

    def classify_import(self, import_path: str) -> Optional[Classification]:
        """
        Classify a single import literal.

        Args:
            import_path: Module literal as written in the source

        Returns:
            The classification, or None for relative, ignored or empty imports
        """
        if not import_path or self._normalizer.is_relative(import_path):
            return None

        dep = self._normalizer.normalize(import_path)

        if self._normalizer.is_ignored(dep):
            return None

        package_name = self._normalizer.get_package_name(dep)

        if package_name in self.project.dependencies:
            return Classification(DEPENDENCIES, package_name)

        if package_name in self.project.dev_dependencies:
            return Classification(DEV_DEPENDENCIES, package_name)

        ui_component = self._normalizer.get_ui_component_name(dep)
        if ui_component:
            return Classification(REGISTRY_DEPENDENCIES, ui_component)

        url = self.aliases.resolve(dep)
        if url:
            return Classification(REGISTRY_DEPENDENCIES, url)

        return Classification(REGISTRY_DEPENDENCIES, dep)

    def classify_source(self, content: str) -> List[Classification]:
        """Classify every import literal in a source text, in order of appearance."""
        results = []
        for import_path in self._normalizer.extract_imports(content):
            classification = self.classify_import(import_path)
            if classification is not None:
                results.append(classification)
        return results

    def classify(self, files: Iterable[str]) -> ClassifiedDependencies:
        """
        Classify the dependencies of a set of files.

        Files without a valid source extension are ignored. Files that cannot
        be read or decoded are skipped with a warning.

        Args:
            files: Absolute paths of the files to scan

        Returns:
            Deduplicated, sorted dependency buckets
        """
        buckets = {
            DEPENDENCIES: set(),
            DEV_DEPENDENCIES: set(),
            REGISTRY_DEPENDENCIES: set(),
        }

        for file_path in files:
            if not self.file_filter.is_valid_source_file(file_path):
                continue

            content = self._read_file(file_path)
            if content is None:
                continue

            for classification in self.classify_source(content):
                buckets[classification.bucket].add(classification.value)

        result = ClassifiedDependencies.from_sets(
            buckets[DEPENDENCIES],
            buckets[DEV_DEPENDENCIES],
            buckets[REGISTRY_DEPENDENCIES],
        )
        logger.debug(
            f"Classified {len(result.dependencies)} dependencies, "
            f"{len(result.dev_dependencies)} devDependencies, "
            f"{len(result.registry_dependencies)} registryDependencies"
        )
        return result

    def _read_file(self, file_path: str) -> Optional[str]:
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Skipping unreadable file {file_path}: {e}")
            with self._skipped_lock:
                self._skipped_files.append(file_path)
            return None


def classify_dependencies(
    files: Iterable[str],
    project_deps: Iterable[str] = (),
    project_dev_deps: Iterable[str] = (),
    registries: Optional[Mapping[str, Any]] = None,
) -> ClassifiedDependencies:
    """
    Convenience function to classify the dependencies of a set of files.

    Args:
        files: Absolute paths of the files to scan
        project_deps: Production dependency names
        project_dev_deps: Development dependency names
        registries: Alias table configuration

    Returns:
        Deduplicated, sorted dependency buckets
    """
    classifier = DependencyClassifier(project_deps, project_dev_deps, registries)
    return classifier.classify(files)

