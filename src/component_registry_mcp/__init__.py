"""Component Registry MCP: registry.json generation for component libraries."""

__version__ = "0.1.0"
