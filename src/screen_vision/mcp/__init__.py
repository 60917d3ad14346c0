"""
MCP Layer for Screen Vision

This package contains the MCP (Model Context Protocol) layer, exposing the
core capture, OCR and cleanup functions as tools for AI agents.

The MCP layer is designed to:
1. Expose core functions as MCP tools
2. Handle MCP-specific protocol requirements
3. Manage server startup and configuration
4. Turn every core failure into a structured error response

Usage:
    # Start the MCP server
    python -m screen_vision.mcp.mcp_server start

    # Use the MCP server in Python
    from screen_vision.mcp import create_mcp_server
    mcp = create_mcp_server()
    mcp.run()
"""

# MCP server creation
from screen_vision.mcp.mcp_tools import create_mcp_server

# MCP server entry point
from screen_vision.mcp.mcp_server import (
    main,
    health_check,
    get_server_info,
    get_tool_schema,
    configure_logging
)

# MCP wrappers
from screen_vision.mcp.wrappers import (
    list_monitors_wrapper,
    screenshot_wrapper,
    screenshot_window_wrapper,
    screenshot_region_wrapper,
    screenshot_active_wrapper,
    extract_text_wrapper,
    cleanup_wrapper,
    format_mcp_response
)

__all__ = [
    # MCP server
    'create_mcp_server',
    'main',
    'health_check',
    'get_server_info',
    'get_tool_schema',
    'configure_logging',

    # MCP wrappers
    'list_monitors_wrapper',
    'screenshot_wrapper',
    'screenshot_window_wrapper',
    'screenshot_region_wrapper',
    'screenshot_active_wrapper',
    'extract_text_wrapper',
    'cleanup_wrapper',
    'format_mcp_response'
]

# Example configuration for .mcp.json
EXAMPLE_MCP_CONFIG = """
{
  "mcpServers": {
    "screen-vision": {
      "command": "screen-vision-server",
      "args": ["start"]
    }
  }
}
"""
