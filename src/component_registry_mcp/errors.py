"""
Exceptions raised while loading configuration and building a registry.

Only conditions that abort a run are modelled here. Recoverable problems
(an unreadable package.json, a source file that cannot be decoded) are
logged as warnings where they happen.
"""


class RegistryError(Exception):
    """Base class for fatal registry generation errors."""


class ConfigurationMissingError(RegistryError):
    """No project configuration could be discovered."""


class InvalidConfigurationError(RegistryError):
    """A configuration file exists but cannot be used."""


class DirectoryNotFoundError(RegistryError):
    """The directory to scan does not exist."""

    def __init__(self, path: str):
        super().__init__(f"Directory not found: {path}")
        self.path = path
