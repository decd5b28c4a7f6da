"""
Component registry generation.

This package turns a component-library source tree into a registry manifest.

Key Components:
- PathClassifier: registry type inference from path segments
- resolve_component_name: component naming from file structure
- ComponentDiscoverer: groups source files into component units
- DependencyClassifier: sorts imports into dependencies, devDependencies
  and registryDependencies
- RegistryBuilder: assembles the manifest
"""

from .aliases import RegistryAlias, RegistryAliasTable
from .builder import RegistryBuilder, build_registry
from .classifier import DependencyClassifier, ProjectDependencySets, classify_dependencies
from .discovery import ComponentDiscoverer
from .name_resolver import resolve_component_name
from .normalizer import ImportNormalizer
from .path_classifier import PathClassifier, TYPE_MAP
from .types import (
    ClassifiedDependencies, ComponentUnit, RegistryFile, RegistryItem,
    RegistrySchema, RegistryTag, RegistryType
)
from .writer import dump_registry, write_registry

__all__ = [
    'RegistryAlias',
    'RegistryAliasTable',
    'RegistryBuilder',
    'build_registry',
    'DependencyClassifier',
    'ProjectDependencySets',
    'classify_dependencies',
    'ComponentDiscoverer',
    'resolve_component_name',
    'ImportNormalizer',
    'PathClassifier',
    'TYPE_MAP',
    'ClassifiedDependencies',
    'ComponentUnit',
    'RegistryFile',
    'RegistryItem',
    'RegistrySchema',
    'RegistryTag',
    'RegistryType',
    'dump_registry',
    'write_registry',
]
