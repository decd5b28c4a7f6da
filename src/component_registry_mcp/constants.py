"""
Shared constants for the Component Registry MCP server.
"""

# Configuration and output file names
CONFIG_FILES = ["registry.config.json"]
COMPONENTS_FILE = "components.json"
PACKAGE_FILE = "package.json"
OUTPUT_FILE = "registry.json"

REGISTRY_SCHEMA_URL = "https://shadcn-vue.com/schema/registry.json"

# Source file extensions recognised by every scanning operation
VALID_EXTENSIONS = ['vue', 'js', 'jsx', 'ts', 'tsx']

# Default scan patterns (relative to the scan root / component directory)
DEFAULT_COMPONENT_PATTERN = "*/*/*"
DEFAULT_FILE_PATTERN = "**/*"

# Centralized filtering configuration
FILTER_CONFIG = {
    "exclude_directories": {
        # Package managers & dependencies
        'node_modules',

        # Build outputs
        'dist',

        # Version control
        '.git',
    },

    "valid_extensions": VALID_EXTENSIONS,
}
