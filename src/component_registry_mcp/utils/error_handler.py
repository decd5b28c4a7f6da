"""
Decorator-based error handling for MCP entry points.

This module provides consistent error handling across all MCP tools and
resources. Registry errors (missing configuration, missing scan directory)
are reported with their own message; anything else is logged with its
traceback before being reported. Supports both synchronous and asynchronous
functions.
"""

import asyncio
import functools
import json
import logging
from typing import Any, Callable, Dict, Union

from ..errors import RegistryError

logger = logging.getLogger(__name__)


def _format_error(error: Exception, return_type: str) -> Union[str, Dict[str, Any], list]:
    error_message = str(error)

    if return_type == "dict":
        return {"error": f"Operation failed: {error_message}"}
    elif return_type == "json":
        return json.dumps({"error": f"Operation failed: {error_message}"})
    elif return_type == "list":
        return [{"error": f"Operation failed: {error_message}"}]
    else:  # return_type == 'str' (default)
        return f"Error: {error_message}"


def _log_error(func: Callable, error: Exception) -> None:
    if isinstance(error, RegistryError):
        logger.warning(f"{func.__name__} failed: {error}")
    else:
        logger.exception(f"Unexpected error in {func.__name__}")


def handle_mcp_errors(return_type: str = "str") -> Callable:
    """
    Decorator to handle exceptions in MCP entry points consistently.

    Args:
        return_type: The expected return type format
            - 'str': Returns error as string format "Error: {message}"
            - 'dict': Returns error as dict format {"error": "Operation failed: {message}"}
            - 'json': Returns error as JSON string with dict format
            - 'list': Returns error as list format [{"error": "Operation failed: {message}"}]

    Returns:
        Decorator function that wraps MCP entry points with error handling

    Example:
        @mcp.tool()
        @handle_mcp_errors(return_type='dict')
        def generate_registry(ctx: Context, write: bool = True) -> Dict[str, Any]:
            return RegistryService(ctx).generate(write=write)
    """

    def decorator(func: Callable) -> Callable:
        if asyncio.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args, **kwargs):
                try:
                    return await func(*args, **kwargs)
                except Exception as e:
                    _log_error(func, e)
                    return _format_error(e, return_type)

            return async_wrapper

        @functools.wraps(func)
        def sync_wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Exception as e:
                _log_error(func, e)
                return _format_error(e, return_type)

        return sync_wrapper

    return decorator


def handle_mcp_resource_errors(func: Callable) -> Callable:
    """
    Specialized error handler for MCP resources that always return strings.

    Example:
        @mcp.resource("config://component-registry")
        @handle_mcp_resource_errors
        def get_config() -> str:
            ...
    """
    return handle_mcp_errors(return_type="str")(func)


def handle_mcp_tool_errors(return_type: str = "str") -> Callable:
    """
    Specialized error handler for MCP tools with flexible return types.

    Args:
        return_type: The expected return type ('str', 'dict', 'json' or 'list')
    """
    return handle_mcp_errors(return_type=return_type)
