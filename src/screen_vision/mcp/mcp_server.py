#!/usr/bin/env python3
"""
MCP Server Entry Point for Screen Vision

This is the main entry point for the screen vision MCP server, designed to be
directly referenced in the .mcp.json configuration.

This module is part of the Integration Layer and connects the MCP functionality
to the application core.
"""

import argparse
import asyncio
import json
import os
import platform
import sys
from typing import Any, Dict

from loguru import logger

from screen_vision import __version__
from screen_vision.mcp.mcp_tools import create_mcp_server


def ensure_log_directory() -> None:
    """Ensure log directory exists"""
    os.makedirs("logs", exist_ok=True)


def configure_logging(level: str = "INFO") -> None:
    """
    Configure logging with proper format and level.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    ensure_log_directory()

    logger.remove()

    logger.add(
        "logs/mcp_server.log",
        rotation="10 MB",
        retention="1 week",
        level=level,
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {message}"
    )

    # stdout carries the MCP stdio protocol, so visible output goes to stderr
    logger.add(
        sys.stderr,
        format="<level>{level: <8}</level> | {message}",
        level=level,
        colorize=True
    )


def get_server_info() -> Dict[str, Any]:
    """
    Get server information.

    Returns:
        Dict[str, Any]: Server information
    """
    return {
        "name": "Screen Vision MCP Server",
        "version": __version__,
        "description": "Multi-monitor screen capture, window capture and OCR tools for MCP clients",
        "tools": [
            "list_monitors",
            "screenshot",
            "screenshot_window",
            "screenshot_region",
            "screenshot_active",
            "extract_text",
            "cleanup",
        ],
    }


def health_check() -> Dict[str, Any]:
    """
    Perform a health check.

    Returns:
        Dict[str, Any]: Health check results
    """
    import mss

    try:
        import PIL
        import pytesseract

        with mss.mss() as sct:
            monitor_count = len(sct.monitors) - 1
            if monitor_count > 0:
                sct.grab(sct.monitors[1])

        try:
            tesseract_version = str(pytesseract.get_tesseract_version())
        except pytesseract.TesseractNotFoundError:
            tesseract_version = "not installed"

        return {
            "status": "healthy",
            "platform": platform.system(),
            "python_version": platform.python_version(),
            "monitor_count": monitor_count,
            "mss_version": getattr(mss, "__version__", "unknown"),
            "pil_version": getattr(PIL, "__version__", "unknown"),
            "tesseract_version": tesseract_version,
        }
    except Exception as e:
        return {
            "status": "unhealthy",
            "error": str(e),
        }


def get_tool_schema() -> Dict[str, Any]:
    """
    Collect the registered tools and their input schemas.

    Returns:
        Dict[str, Any]: {"functions": {name: {"description", "parameters"}}}
    """
    mcp = create_mcp_server()
    tools = asyncio.run(mcp.list_tools())
    return {
        "functions": {
            tool.name: {
                "description": tool.description or "",
                "parameters": tool.inputSchema,
            }
            for tool in tools
        }
    }


def main() -> int:
    """
    Main entry point for the MCP server.

    Returns:
        int: Exit code
    """
    parser = argparse.ArgumentParser(description="Screen Vision MCP Server")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    start_parser = subparsers.add_parser("start", help="Start the MCP server")
    start_parser.add_argument("--host", type=str, default="localhost", help="Host to listen on (sse only)")
    start_parser.add_argument("--port", type=int, default=3000, help="Port to listen on (sse only)")
    start_parser.add_argument(
        "--transport", choices=["stdio", "sse"], default="stdio", help="MCP transport"
    )
    start_parser.add_argument("--debug", action="store_true", help="Enable debug mode")

    subparsers.add_parser("health", help="Check server health")
    subparsers.add_parser("info", help="Display server information")

    schema_parser = subparsers.add_parser("schema", help="Display server schema")
    schema_parser.add_argument("--json", action="store_true", help="Output as JSON")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 1

    if args.command == "start":
        log_level = "DEBUG" if args.debug else "INFO"
        configure_logging(log_level)

        logger.info("Starting Screen Vision MCP server")
        logger.info(f"Transport: {args.transport}, Host: {args.host}, Port: {args.port}, Debug: {args.debug}")

        try:
            mcp = create_mcp_server(name="Screen Vision", host=args.host, port=args.port)
            mcp.run(transport=args.transport)
        except KeyboardInterrupt:
            logger.info("Server stopped by user")
            return 0
        except Exception as e:
            logger.error(f"Server failed to start: {str(e)}", exc_info=True)
            return 1

    elif args.command == "health":
        result = health_check()
        print(json.dumps(result, indent=2))
        return 0 if result["status"] == "healthy" else 1

    elif args.command == "info":
        print(json.dumps(get_server_info(), indent=2))
        return 0

    elif args.command == "schema":
        schema = get_tool_schema()

        if args.json:
            print(json.dumps(schema, indent=2))
        else:
            for function_name, function_info in schema["functions"].items():
                print(f"Function: {function_name}")
                description = function_info.get("description") or "No description"
                print(f"  Description: {description.strip().splitlines()[0]}")
                print("  Parameters:")
                for param_name, param_info in function_info.get("parameters", {}).get("properties", {}).items():
                    print(f"    {param_name}: {param_info.get('type', 'any')}")
                print()

        return 0

    return 0


if __name__ == "__main__":
    """
    Direct entry point for the screen vision MCP server.

    Usage:
      python -m screen_vision.mcp.mcp_server start [--transport stdio|sse] [--debug]
      python -m screen_vision.mcp.mcp_server health
      python -m screen_vision.mcp.mcp_server info
      python -m screen_vision.mcp.mcp_server schema [--json]
    """
    sys.exit(main())
