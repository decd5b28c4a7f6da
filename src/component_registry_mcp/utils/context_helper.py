"""
Context access utilities and helpers.

This module provides convenient access to MCP Context data and common
operations that services need to perform with the context.
"""

import os
from typing import Optional

from mcp.server.fastmcp import Context

from ..project_settings import RegistryConfig


class ContextHelper:
    """
    Helper class for convenient access to MCP Context data.

    This class wraps the MCP Context object and provides convenient properties
    for the project directory and the registry configuration loaded from it.
    """

    def __init__(self, ctx: Context):
        """
        Initialize the context helper.

        Args:
            ctx: The MCP Context object
        """
        self.ctx = ctx

    @property
    def base_path(self) -> str:
        """
        Get the base project path from the context.

        Returns:
            The base project path, or empty string if not set
        """
        try:
            return self.ctx.request_context.lifespan_context.base_path
        except AttributeError:
            return ""

    @property
    def config(self) -> Optional[RegistryConfig]:
        """
        Get the loaded registry configuration from the context.

        Returns:
            The RegistryConfig instance, or None if not loaded
        """
        try:
            return self.ctx.request_context.lifespan_context.config
        except AttributeError:
            return None

    def get_base_path_error(self) -> Optional[str]:
        """
        Get an error message if base path is not properly set.

        Returns:
            Error message string if base path is invalid, None if valid
        """
        if not self.base_path:
            return ("Project path not set. Please use set_project_path to set a "
                    "project directory first.")

        if not os.path.exists(self.base_path):
            return f"Project path does not exist: {self.base_path}"

        if not os.path.isdir(self.base_path):
            return f"Project path is not a directory: {self.base_path}"

        return None

    def update_base_path(self, path: str) -> None:
        """
        Update the base path in the context.

        Args:
            path: The new base path
        """
        try:
            self.ctx.request_context.lifespan_context.base_path = path
        except AttributeError:
            pass  # Context not available or doesn't support this operation

    def update_config(self, config: Optional[RegistryConfig]) -> None:
        """
        Update the registry configuration in the context.

        Args:
            config: The new RegistryConfig instance
        """
        try:
            self.ctx.request_context.lifespan_context.config = config
        except AttributeError:
            pass  # Context not available or doesn't support this operation
