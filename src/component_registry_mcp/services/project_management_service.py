"""
Project Management Service - Business logic for project setup.

This service handles selecting the project directory and loading its
registry configuration into the server context.
"""

import json
import logging
import os

from .base_service import BaseService
from ..project_settings import load_config
from ..utils import ValidationHelper

logger = logging.getLogger(__name__)


class ProjectManagementService(BaseService):
    """
    Business service for project lifecycle management.
    """

    def initialize_project(self, path: str) -> str:
        """
        Set the project directory and load its registry configuration.

        Args:
            path: Project directory (registry.config.json is searched from here upward)

        Returns:
            Summary message

        Raises:
            ValueError: If the path is not a directory
            ConfigurationMissingError: If no configuration file is found
        """
        error = ValidationHelper.validate_directory_path(path)
        if error:
            raise ValueError(error)

        abs_path = os.path.abspath(path)
        config = load_config(start_dir=abs_path)

        self.helper.update_base_path(abs_path)
        self.helper.update_config(config)

        logger.info(f"Project path set to {abs_path} (config: {config.config_path})")
        return (f"Project path set to: {abs_path}. "
                f"Loaded configuration from {config.config_path}; scanning {config.cwd}")

    def get_project_config(self) -> str:
        """
        Get the current project configuration as JSON.

        Returns:
            JSON string describing the loaded configuration
        """
        if self._validate_project_setup():
            return json.dumps({
                "status": "not_configured",
                "message": ("Project path not set. Please use set_project_path "
                            "to set a project directory first."),
            }, indent=2)

        config = self.helper.config
        return json.dumps({
            "base_path": self.base_path,
            "config": config.to_dict() if config else None,
        }, indent=2)
