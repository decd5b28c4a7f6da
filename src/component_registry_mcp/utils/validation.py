"""
Common validation logic for the MCP server.

This module provides shared validation functions used across services
to ensure consistent validation behavior and reduce code duplication.
"""

import fnmatch
import os
from typing import Optional


class ValidationHelper:
    """
    Helper class containing common validation logic.

    This class provides static methods for common validation operations
    that are used across multiple services.
    """

    @staticmethod
    def validate_file_path(file_path: str, base_path: str) -> Optional[str]:
        """
        Validate a file path relative to the project directory.

        This method checks for:
        - Path traversal attempts
        - Absolute path usage (not allowed)
        - Path existence within base directory

        Args:
            file_path: The file path to validate (should be relative)
            base_path: The base project directory path

        Returns:
            Error message if validation fails, None if valid
        """
        if not file_path:
            return "File path cannot be empty"

        if not base_path:
            return "Base path not set"

        # Handle absolute paths (especially Windows paths starting with drive letters)
        if os.path.isabs(file_path) or (len(file_path) > 1 and file_path[1] == ':'):
            return (f"Absolute file paths like '{file_path}' are not allowed. "
                    "Please use paths relative to the project root.")

        norm_path = os.path.normpath(file_path)

        if norm_path.startswith(".."):
            return f"Invalid file path: {file_path} (directory traversal not allowed)"

        full_path = os.path.join(base_path, norm_path)
        real_full_path = os.path.realpath(full_path)
        real_base_path = os.path.realpath(base_path)

        if os.path.commonpath([real_full_path, real_base_path]) != real_base_path:
            return "Access denied. File path must be within project directory."

        if not os.path.isfile(real_full_path):
            return f"File not found: {file_path}"

        return None

    @staticmethod
    def validate_directory_path(dir_path: str) -> Optional[str]:
        """
        Validate a directory path for project initialization.

        Args:
            dir_path: The directory path to validate

        Returns:
            Error message if validation fails, None if valid
        """
        if not dir_path:
            return "Directory path cannot be empty"

        try:
            norm_path = os.path.normpath(dir_path)
            abs_path = os.path.abspath(norm_path)
        except (OSError, ValueError) as e:
            return f"Invalid path format: {str(e)}"

        if not os.path.exists(abs_path):
            return f"Path does not exist: {abs_path}"

        if not os.path.isdir(abs_path):
            return f"Path is not a directory: {abs_path}"

        return None

    @staticmethod
    def validate_glob_pattern(pattern: str) -> Optional[str]:
        """
        Validate a scan pattern (glob without extension).

        Args:
            pattern: The glob pattern to validate

        Returns:
            Error message if validation fails, None if valid
        """
        if not pattern:
            return "Pattern cannot be empty"

        if pattern.startswith('/') or pattern.startswith('\\'):
            return "Pattern cannot start with path separator"

        if '..' in pattern.replace('\\', '/').split('/'):
            return "Pattern cannot leave the scan directory"

        try:
            fnmatch.translate(pattern)
        except (ValueError, TypeError) as e:
            return f"Invalid glob pattern: {str(e)}"

        return None
