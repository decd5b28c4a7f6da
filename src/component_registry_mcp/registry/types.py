"""
Data models for the component registry.

This module defines the registry type enumeration and the structures passed
between discovery, classification and manifest assembly, together with their
JSON representations.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class RegistryType(Enum):
    """Known registry item/file categories."""

    LIB = "registry:lib"
    BLOCK = "registry:block"
    COMPONENT = "registry:component"
    UI = "registry:ui"
    HOOK = "registry:hook"
    COMPOSABLE = "registry:composable"
    PAGE = "registry:page"
    FILE = "registry:file"
    THEME = "registry:theme"
    STYLE = "registry:style"
    ITEM = "registry:item"


@dataclass(frozen=True)
class RegistryTag:
    """
    Category assigned to a path.

    Either a known RegistryType, or a passthrough carrying the directory
    segment that no table entry recognised (rendered as ``registry:<segment>``).
    """
    registry_type: Optional[RegistryType] = None
    segment: Optional[str] = None

    @classmethod
    def known(cls, registry_type: RegistryType) -> "RegistryTag":
        return cls(registry_type=registry_type)

    @classmethod
    def unrecognized(cls, segment: str) -> "RegistryTag":
        return cls(segment=segment)

    @property
    def is_known(self) -> bool:
        return self.registry_type is not None

    @property
    def value(self) -> str:
        if self.registry_type is not None:
            return self.registry_type.value
        return f"registry:{self.segment or ''}"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ComponentUnit:
    """One logical registry entry produced by discovery."""
    directory: str
    files: Tuple[str, ...]
    is_file_based: bool = False

    @property
    def key(self) -> str:
        """Directory for grouped components, the file itself for file-based ones."""
        if self.is_file_based and self.files:
            return self.files[0]
        return self.directory


@dataclass(frozen=True)
class ClassifiedDependencies:
    """Dependencies of one component, each list deduplicated and sorted."""
    dependencies: Tuple[str, ...] = ()
    dev_dependencies: Tuple[str, ...] = ()
    registry_dependencies: Tuple[str, ...] = ()

    @classmethod
    def from_sets(cls, dependencies, dev_dependencies, registry_dependencies) -> "ClassifiedDependencies":
        return cls(
            dependencies=tuple(sorted(dependencies)),
            dev_dependencies=tuple(sorted(dev_dependencies)),
            registry_dependencies=tuple(sorted(registry_dependencies)),
        )

    def is_empty(self) -> bool:
        return not (self.dependencies or self.dev_dependencies or self.registry_dependencies)

    def to_dict(self) -> Dict[str, List[str]]:
        return {
            "dependencies": list(self.dependencies),
            "devDependencies": list(self.dev_dependencies),
            "registryDependencies": list(self.registry_dependencies),
        }


@dataclass
class RegistryFile:
    """A file entry of a registry item."""
    path: str
    type: RegistryTag

    def to_dict(self) -> Dict[str, str]:
        return {"path": self.path, "type": self.type.value}


@dataclass
class RegistryItem:
    """A registry manifest entry."""
    name: str
    type: RegistryTag
    files: List[RegistryFile] = field(default_factory=list)
    dependencies: List[str] = field(default_factory=list)
    dev_dependencies: List[str] = field(default_factory=list)
    registry_dependencies: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """JSON shape; dependency lists are omitted when empty."""
        data: Dict[str, Any] = {
            "name": self.name,
            "type": self.type.value,
            "files": [f.to_dict() for f in self.files],
        }
        if self.dependencies:
            data["dependencies"] = list(self.dependencies)
        if self.dev_dependencies:
            data["devDependencies"] = list(self.dev_dependencies)
        if self.registry_dependencies:
            data["registryDependencies"] = list(self.registry_dependencies)
        return data


@dataclass
class RegistrySchema:
    """The complete registry manifest."""
    schema: str
    name: str
    homepage: str
    items: List[RegistryItem] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "$schema": self.schema,
            "name": self.name,
            "homepage": self.homepage,
            "items": [item.to_dict() for item in self.items],
        }
