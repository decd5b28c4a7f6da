"""
Project Settings Management

This module locates and loads the registry configuration file
(registry.config.json) and the project files it depends on: components.json
for the registry alias table and package.json for the declared dependencies.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .constants import (
    COMPONENTS_FILE, CONFIG_FILES, DEFAULT_COMPONENT_PATTERN,
    DEFAULT_FILE_PATTERN, PACKAGE_FILE
)
from .errors import ConfigurationMissingError, InvalidConfigurationError

logger = logging.getLogger(__name__)


@dataclass
class RegistryConfig:
    """Resolved registry configuration."""
    root: str
    name: str = ""
    homepage: str = ""
    cwd: str = ""
    output: str = ""
    dependencies: List[str] = field(default_factory=list)
    dev_dependencies: List[str] = field(default_factory=list)
    registries: Optional[Dict[str, Any]] = None
    component_pattern: str = DEFAULT_COMPONENT_PATTERN
    file_pattern: str = DEFAULT_FILE_PATTERN
    config_path: Optional[str] = None

    def __post_init__(self):
        self.root = os.path.abspath(self.root)
        self.cwd = os.path.abspath(os.path.join(self.root, self.cwd)) if self.cwd else self.root
        self.output = os.path.abspath(os.path.join(self.root, self.output)) if self.output else self.root

    @classmethod
    def from_dict(cls, data: Dict[str, Any], base_dir: str = "", config_path: Optional[str] = None) -> "RegistryConfig":
        """
        Build a configuration from the JSON structure of registry.config.json.

        Args:
            data: Parsed configuration object
            base_dir: Directory a relative 'root' is resolved against
            config_path: Path of the file the data came from

        Raises:
            ConfigurationMissingError: If 'root' is not specified
            InvalidConfigurationError: If a field has the wrong type
        """
        if not isinstance(data, dict):
            raise InvalidConfigurationError("Configuration must be a JSON object")

        root = data.get('root')
        if not root:
            raise ConfigurationMissingError("Root path is not specified in the configuration.")

        scan_patterns = data.get('scanPatterns') or {}
        if not isinstance(scan_patterns, dict):
            raise InvalidConfigurationError("'scanPatterns' must be an object")

        registries = data.get('registries')
        if registries is not None and not isinstance(registries, dict):
            raise InvalidConfigurationError("'registries' must be an object mapping prefixes to URLs")

        return cls(
            root=os.path.join(base_dir, root) if base_dir else root,
            name=_get_str(data, 'name'),
            homepage=_get_str(data, 'homepage'),
            cwd=_get_str(data, 'cwd'),
            output=_get_str(data, 'output'),
            dependencies=_get_str_list(data, 'dependencies'),
            dev_dependencies=_get_str_list(data, 'devDependencies'),
            registries=registries,
            component_pattern=scan_patterns.get('componentPattern') or DEFAULT_COMPONENT_PATTERN,
            file_pattern=scan_patterns.get('filePattern') or DEFAULT_FILE_PATTERN,
            config_path=config_path,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "root": self.root,
            "name": self.name,
            "homepage": self.homepage,
            "cwd": self.cwd,
            "output": self.output,
            "dependencies": list(self.dependencies),
            "devDependencies": list(self.dev_dependencies),
            "registries": self.registries or {},
            "scanPatterns": {
                "componentPattern": self.component_pattern,
                "filePattern": self.file_pattern,
            },
            "configPath": self.config_path,
        }


@dataclass
class ProjectDependencies:
    """Dependency information gathered from the project files."""
    dependencies: List[str] = field(default_factory=list)
    dev_dependencies: List[str] = field(default_factory=list)
    registries: Dict[str, Any] = field(default_factory=dict)


def _get_str(data: Dict[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise InvalidConfigurationError(f"'{key}' must be a string")
    return value


def _get_str_list(data: Dict[str, Any], key: str) -> List[str]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise InvalidConfigurationError(f"'{key}' must be a list of package names")
    return list(value)


def find_up(file_names: List[str], start_dir: str) -> Optional[str]:
    """
    Search for any of the given file names from start_dir up to the filesystem root.

    Returns:
        The first match, checking names in order within each directory, or None
    """
    current = os.path.abspath(start_dir)
    while True:
        for file_name in file_names:
            candidate = os.path.join(current, file_name)
            if os.path.isfile(candidate):
                return candidate
        parent = os.path.dirname(current)
        if parent == current:
            return None
        current = parent


def _read_json(path: str) -> Any:
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


def load_config(start_dir: Optional[str] = None, config_path: Optional[str] = None) -> RegistryConfig:
    """
    Locate and load registry.config.json.

    Args:
        start_dir: Directory to start searching from (defaults to the current directory)
        config_path: Explicit configuration file, skips the search

    Raises:
        ConfigurationMissingError: If no configuration file is found
        InvalidConfigurationError: If the file is not valid JSON or has bad fields
    """
    if config_path:
        if not os.path.isfile(config_path):
            raise ConfigurationMissingError(f"Config file not found: {config_path}")
        resolved_path = os.path.abspath(config_path)
    else:
        resolved_path = find_up(CONFIG_FILES, start_dir or os.getcwd())
        if not resolved_path:
            raise ConfigurationMissingError(
                f"No config file found (looked for {', '.join(CONFIG_FILES)})"
            )

    try:
        data = _read_json(resolved_path)
    except ValueError as e:
        # JSONDecodeError and UnicodeDecodeError
        raise InvalidConfigurationError(f"Invalid JSON in {resolved_path}: {e}") from e

    logger.info(f"Loaded configuration from {resolved_path}")
    return RegistryConfig.from_dict(data, base_dir=os.path.dirname(resolved_path), config_path=resolved_path)


def resolve_config(config: RegistryConfig, cwd: Optional[str] = None, output: Optional[str] = None) -> RegistryConfig:
    """
    Apply command line overrides for the scan directory and output directory.

    Relative overrides are resolved against the current working directory.
    """
    if cwd:
        config.cwd = os.path.abspath(cwd)
    if output:
        config.output = os.path.abspath(output)
    return config


def load_project_dependencies(root: str) -> ProjectDependencies:
    """
    Read the alias table from components.json and dependency names from package.json.

    A missing components.json leaves the alias table empty. A missing or
    malformed package.json is reported as a warning and yields empty
    dependency lists.
    """
    result = ProjectDependencies()

    components_path = find_up([COMPONENTS_FILE], root)
    if components_path:
        try:
            components = _read_json(components_path)
            registries = components.get('registries') if isinstance(components, dict) else None
            if isinstance(registries, dict):
                result.registries = registries
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to read {components_path}, registry aliases ignored: {e}")
    else:
        logger.debug(f"No {COMPONENTS_FILE} found above {root}")

    package_path = os.path.join(root, PACKAGE_FILE)
    if not os.path.exists(package_path):
        logger.warning(f"{PACKAGE_FILE} not found in {root}, dependency classification may be incomplete.")
        return result

    try:
        pkg = _read_json(package_path)
        result.dependencies = list((pkg.get('dependencies') or {}).keys())
        result.dev_dependencies = list((pkg.get('devDependencies') or {}).keys())
    except (OSError, ValueError, AttributeError) as e:
        logger.warning(f"Failed to read {PACKAGE_FILE}, dependency classification may be incomplete: {e}")
        result.dependencies = []
        result.dev_dependencies = []

    return result


def write_default_config(directory: str, file_name: str = CONFIG_FILES[0]) -> str:
    """
    Write a starter registry.config.json.

    Returns:
        Path of the written file
    """
    config_path = os.path.join(os.path.abspath(directory), file_name)
    content = {
        "root": ".",
        "name": "",
        "homepage": "",
    }
    with open(config_path, 'w', encoding='utf-8') as f:
        json.dump(content, f, indent=2)
        f.write('\n')
    return config_path
