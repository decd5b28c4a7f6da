"""
Registry Service - Business logic for registry generation and classification.

This service exposes the registry pipeline to MCP tools: building (and
optionally writing) the manifest for the configured project, and the
individual classification operations for ad hoc queries.
"""

import logging
import os
from dataclasses import replace
from typing import Any, Dict, List, Optional

from .base_service import BaseService
from ..registry import (
    DependencyClassifier, PathClassifier, RegistryBuilder,
    resolve_component_name, write_registry
)
from ..utils import ValidationHelper

logger = logging.getLogger(__name__)


class RegistryService(BaseService):
    """
    Business service for registry generation.
    """

    def generate(self, write: bool = True, component_pattern: Optional[str] = None) -> Dict[str, Any]:
        """
        Build the registry manifest for the configured project.

        Args:
            write: Whether to write registry.json to the configured output directory
            component_pattern: Override of the configured component pattern

        Returns:
            Dictionary with the manifest and, when written, its path
        """
        config = self._require_config()

        if component_pattern:
            error = ValidationHelper.validate_glob_pattern(component_pattern)
            if error:
                raise ValueError(error)
            config = replace(config, component_pattern=component_pattern)

        schema = RegistryBuilder(config).build()

        result: Dict[str, Any] = {
            "item_count": len(schema.items),
            "registry": schema.to_dict(),
        }
        if write:
            result["output_path"] = write_registry(schema, config.output)
        return result

    def classify_dependencies(
        self,
        file_paths: List[str],
        dependencies: Optional[List[str]] = None,
        dev_dependencies: Optional[List[str]] = None,
        registries: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, List[str]]:
        """
        Classify the imports of project files.

        Args:
            file_paths: Paths relative to the project directory
            dependencies: Production dependencies (defaults to the project's)
            dev_dependencies: Development dependencies (defaults to the project's)
            registries: Alias table (defaults to the project's)

        Returns:
            The three sorted dependency lists
        """
        self._require_project_setup()
        for file_path in file_paths:
            self._require_valid_file_path(file_path)

        config = self.helper.config
        if config is not None and dependencies is None and dev_dependencies is None and registries is None:
            classifier = RegistryBuilder(config).classifier
        else:
            classifier = DependencyClassifier(dependencies or (), dev_dependencies or (), registries)

        files = [os.path.join(self.base_path, p) for p in file_paths]
        return classifier.classify(files).to_dict()

    def get_registry_type(self, relative_path: str) -> str:
        """Registry type of a path relative to the scan directory."""
        return PathClassifier().classify(relative_path).value

    def resolve_component_name(self, component_dir: str, files: List[str]) -> str:
        """Component name for a directory and its files."""
        return resolve_component_name(component_dir, files)
