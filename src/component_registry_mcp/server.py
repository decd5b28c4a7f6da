"""
Component Registry MCP Server

This MCP server lets LLMs generate a shadcn-vue style registry.json for a
component library: it discovers components, infers their registry types and
classifies the dependencies of their source files.

MCP decorators delegate to domain-specific services for business logic.
"""

import logging
import os
import sys
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, AsyncIterator, Dict, List, Optional

from mcp.server.fastmcp import Context, FastMCP

from .project_settings import RegistryConfig
from .services import ProjectManagementService, RegistryService
from .utils import handle_mcp_resource_errors, handle_mcp_tool_errors


def setup_logging(transport_mode: str = "stdio") -> None:
    """
    Setup logging without writing to files.

    In stdio mode stdout carries the MCP protocol, so everything goes to
    stderr. In HTTP mode INFO+ goes to stdout and ERROR+ to stderr.
    """
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    if transport_mode == "http":
        stdout_handler = logging.StreamHandler(sys.stdout)
        stdout_handler.setFormatter(formatter)
        stdout_handler.setLevel(logging.INFO)
        stdout_handler.addFilter(lambda record: record.levelno < logging.ERROR)
        root_logger.addHandler(stdout_handler)

        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setFormatter(formatter)
        stderr_handler.setLevel(logging.ERROR)
        root_logger.addHandler(stderr_handler)
    else:
        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setFormatter(formatter)
        stderr_handler.setLevel(logging.INFO)
        root_logger.addHandler(stderr_handler)

    root_logger.setLevel(logging.INFO)


logger = logging.getLogger(__name__)


@dataclass
class RegistryServerContext:
    """Context for the Component Registry MCP server."""

    base_path: str
    config: Optional[RegistryConfig] = None


@asynccontextmanager
async def registry_lifespan(_server: FastMCP) -> AsyncIterator[RegistryServerContext]:
    """Manage the lifecycle of the Component Registry MCP server."""
    # No default project, the client must call set_project_path
    context = RegistryServerContext(base_path="")
    try:
        yield context
    finally:
        logger.info("Component Registry MCP server shutting down")


mcp = FastMCP("ComponentRegistry", lifespan=registry_lifespan)

# ----- RESOURCES -----


@mcp.resource("config://component-registry")
@handle_mcp_resource_errors
def get_config() -> str:
    """Get the current registry configuration."""
    ctx = mcp.get_context()
    return ProjectManagementService(ctx).get_project_config()


# ----- TOOLS -----


@mcp.tool()
@handle_mcp_tool_errors(return_type="str")
def set_project_path(path: str, ctx: Context) -> str:
    """Set the project directory and load its registry.config.json."""
    return ProjectManagementService(ctx).initialize_project(path)


@mcp.tool()
@handle_mcp_tool_errors(return_type="dict")
def generate_registry(
    ctx: Context, write: bool = True, component_pattern: Optional[str] = None
) -> Dict[str, Any]:
    """
    Scan the project and build registry.json.

    Args:
        write: Write registry.json to the configured output directory
        component_pattern: Glob (without extension) overriding scanPatterns.componentPattern
    """
    return RegistryService(ctx).generate(write=write, component_pattern=component_pattern)


@mcp.tool()
@handle_mcp_tool_errors(return_type="dict")
def classify_dependencies(
    file_paths: List[str],
    ctx: Context,
    dependencies: Optional[List[str]] = None,
    dev_dependencies: Optional[List[str]] = None,
    registries: Optional[Dict[str, Any]] = None,
) -> Dict[str, List[str]]:
    """
    Classify the imports of project files into dependencies, devDependencies
    and registryDependencies.

    Args:
        file_paths: Paths relative to the project directory
        dependencies: Production dependencies (defaults to the project's)
        dev_dependencies: Development dependencies (defaults to the project's)
        registries: Alias table, prefix -> URL template (defaults to the project's)
    """
    return RegistryService(ctx).classify_dependencies(
        file_paths, dependencies, dev_dependencies, registries
    )


@mcp.tool()
@handle_mcp_tool_errors(return_type="str")
def get_registry_type(relative_path: str, ctx: Context) -> str:
    """Registry type (e.g. 'registry:ui') of a path relative to the scan directory."""
    return RegistryService(ctx).get_registry_type(relative_path)


@mcp.tool()
@handle_mcp_tool_errors(return_type="str")
def resolve_component_name(component_dir: str, files: List[str], ctx: Context) -> str:
    """Component name for a directory and the files it contains."""
    return RegistryService(ctx).resolve_component_name(component_dir, files)


def main():
    """Main function to run the MCP server."""
    # Support both stdio (local) and HTTP/SSE modes via environment variable
    transport_mode = os.getenv("MCP_TRANSPORT", "stdio")
    setup_logging(transport_mode)

    if transport_mode == "http":
        host = os.getenv("HOST", "127.0.0.1")
        port = int(os.getenv("PORT", 8080))

        # FastMCP reads host/port from mcp.settings
        mcp.settings.host = host
        mcp.settings.port = port

        logging.info(f"Starting MCP server in HTTP/SSE mode on {host}:{port}")
        mcp.run(transport="sse")
    else:
        logging.info("Starting MCP server in stdio mode")
        mcp.run()


if __name__ == "__main__":
    main()
