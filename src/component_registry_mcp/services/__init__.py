"""
Service layer for the Component Registry MCP server.

This package contains domain-specific services that handle the business logic
behind the MCP entry points:

- ProjectManagementService: project directory selection and configuration
- RegistryService: registry generation and dependency classification

Each service follows a consistent pattern:
- Constructor accepts MCP Context parameter
- Methods correspond to MCP entry points
- Shared utilities accessed through utils module
- Meaningful exceptions raised for error conditions
"""

from .base_service import BaseService
from .project_management_service import ProjectManagementService
from .registry_service import RegistryService

__all__ = [
    "BaseService",
    "ProjectManagementService",
    "RegistryService",
]
