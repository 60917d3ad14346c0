#!/usr/bin/env python3
"""
MCP Tools for Screen Vision

This module provides MCP tool definitions for monitor listing, screen
capture, OCR and capture file cleanup.

Tools are async. The optional ``delay`` is awaited before capturing, so a
waiting request never blocks other requests, and the blocking capture work
runs in a worker thread. No state is shared between requests.

This module is part of the Integration Layer and can depend on both
Core Layer and Presentation Layer components.

Sample input:
- MCP server configuration

Expected output:
- Configured MCP server with registered tools
"""

import asyncio
from typing import Any, Dict, Optional, Union

from loguru import logger
from mcp.server.fastmcp import FastMCP

from screen_vision.core.constants import IMAGE_SETTINGS, OCR_SETTINGS
from screen_vision.core.utils import validate_delay
from screen_vision.mcp.wrappers import (
    cleanup_wrapper,
    extract_text_wrapper,
    format_mcp_response,
    list_monitors_wrapper,
    screenshot_active_wrapper,
    screenshot_region_wrapper,
    screenshot_wrapper,
    screenshot_window_wrapper,
)


async def wait_before_capture(delay: Optional[float]) -> Optional[Dict[str, Any]]:
    """
    Sleep for a validated pre-capture delay.

    Returns:
        Optional[Dict[str, Any]]: A failure response if the delay is invalid
    """
    try:
        seconds = validate_delay(delay)
    except ValueError as e:
        return format_mcp_response(False, error=str(e), error_type="invalid_argument")
    if seconds > 0:
        logger.info(f"Waiting {seconds}s before capture")
        await asyncio.sleep(seconds)
    return None


def create_mcp_server(
    name: str = "Screen Vision",
    host: str = "localhost",
    port: int = 3000,
) -> FastMCP:
    """
    Create and configure MCP server with screen capture tools

    Args:
        name: Name for the MCP server
        host: Host to listen on
        port: Port to listen on

    Returns:
        FastMCP: Configured MCP server instance
    """
    mcp = FastMCP(name, host=host, port=port)
    logger.info(f"Initialized FastMCP server: {name} on {host}:{port}")

    register_list_monitors_tool(mcp)
    register_screenshot_tool(mcp)
    register_screenshot_window_tool(mcp)
    register_screenshot_region_tool(mcp)
    register_screenshot_active_tool(mcp)
    register_extract_text_tool(mcp)
    register_cleanup_tool(mcp)

    return mcp


def register_list_monitors_tool(mcp: FastMCP) -> None:
    @mcp.tool()
    async def list_monitors() -> Dict[str, Any]:
        """
        List all connected monitors with their resolution, position, and configuration.
        Use this to see available displays before taking a screenshot.

        Returns:
            dict: monitors (id, name, resolution, position, is_primary, ...),
                  layout (monitor ids ordered left to right) and a summary message.
        """
        logger.info("Monitor list requested")
        return await asyncio.to_thread(list_monitors_wrapper)


def register_screenshot_tool(mcp: FastMCP) -> None:
    @mcp.tool()
    async def screenshot(
        monitor: Union[int, str] = 0,
        resize: Optional[int] = None,
        quality: int = IMAGE_SETTINGS["DEFAULT_QUALITY"],
        format: str = IMAGE_SETTINGS["DEFAULT_FORMAT"],
        delay: Optional[float] = None,
    ) -> Dict[str, Any]:
        """
        Capture a screenshot of a specific monitor.
        Returns the file path which can be viewed using the Read tool.
        Use list_monitors first to see available displays.

        Args:
            monitor (int or str, optional): Display number, 0 or "primary" for the primary
                monitor, or a name such as "display2". Defaults to 0.
            resize (int, optional): Maximum dimension (width or height) to resize to. E.g., 1920 for HD.
            quality (int, optional): Image quality 1-100. Lower = smaller file. Defaults to 80.
            format (str, optional): "png" or "jpeg". Defaults to "png".
            delay (float, optional): Seconds (0-30) to wait before capturing. Useful for menus/tooltips.
        """
        logger.info(f"Screenshot requested: monitor={monitor!r}, resize={resize}, quality={quality}, delay={delay}")
        failure = await wait_before_capture(delay)
        if failure:
            return failure
        return await asyncio.to_thread(screenshot_wrapper, monitor, resize, quality, format)


def register_screenshot_window_tool(mcp: FastMCP) -> None:
    @mcp.tool()
    async def screenshot_window(
        title: str,
        resize: Optional[int] = None,
        quality: int = IMAGE_SETTINGS["DEFAULT_QUALITY"],
        format: str = IMAGE_SETTINGS["DEFAULT_FORMAT"],
    ) -> Dict[str, Any]:
        """
        Capture a screenshot of a specific application window by its title.
        Currently captures the active window if it matches the title.
        Returns the file path which can be viewed using the Read tool.

        Args:
            title (str): Window title to match (partial match supported). E.g., "Visual Studio Code".
            resize (int, optional): Maximum dimension (width or height) to resize to.
            quality (int, optional): Image quality 1-100. Defaults to 80.
            format (str, optional): "png" or "jpeg". Defaults to "png".
        """
        logger.info(f"Window screenshot requested: title={title!r}")
        return await asyncio.to_thread(screenshot_window_wrapper, title, resize, quality, format)


def register_screenshot_region_tool(mcp: FastMCP) -> None:
    @mcp.tool()
    async def screenshot_region(
        x: int,
        y: int,
        width: int,
        height: int,
        monitor: Union[int, str] = 0,
        quality: int = IMAGE_SETTINGS["DEFAULT_QUALITY"],
        format: str = IMAGE_SETTINGS["DEFAULT_FORMAT"],
    ) -> Dict[str, Any]:
        """
        Capture a rectangular region of the screen.
        Coordinates are relative to the specified monitor's top-left corner.
        Returns the file path which can be viewed using the Read tool.

        Args:
            x (int): Left coordinate of the region
            y (int): Top coordinate of the region
            width (int): Width of the region in pixels
            height (int): Height of the region in pixels
            monitor (int or str, optional): Monitor whose coordinate space is used. Defaults to 0 (primary).
            quality (int, optional): Image quality 1-100. Defaults to 80.
            format (str, optional): "png" or "jpeg". Defaults to "png".
        """
        logger.info(f"Region screenshot requested: ({x}, {y}, {width}x{height}) monitor={monitor!r}")
        return await asyncio.to_thread(screenshot_region_wrapper, x, y, width, height, monitor, quality, format)


def register_screenshot_active_tool(mcp: FastMCP) -> None:
    @mcp.tool()
    async def screenshot_active(
        resize: Optional[int] = None,
        quality: int = IMAGE_SETTINGS["DEFAULT_QUALITY"],
        format: str = IMAGE_SETTINGS["DEFAULT_FORMAT"],
        delay: Optional[float] = None,
    ) -> Dict[str, Any]:
        """
        Capture the currently focused/active window.
        Use the delay parameter to capture menus or tooltips that appear on hover.
        Returns the file path which can be viewed using the Read tool.

        Args:
            resize (int, optional): Maximum dimension (width or height) to resize to.
            quality (int, optional): Image quality 1-100. Defaults to 80.
            format (str, optional): "png" or "jpeg". Defaults to "png".
            delay (float, optional): Seconds (0-30) to wait before capturing.
        """
        logger.info(f"Active window screenshot requested: delay={delay}")
        failure = await wait_before_capture(delay)
        if failure:
            return failure
        return await asyncio.to_thread(screenshot_active_wrapper, resize, quality, format)


def register_extract_text_tool(mcp: FastMCP) -> None:
    @mcp.tool()
    async def extract_text(
        image_path: str,
        language: str = OCR_SETTINGS["DEFAULT_LANGUAGE"],
    ) -> Dict[str, Any]:
        """
        Extract readable text from a screenshot using OCR (Optical Character Recognition).
        Useful for reading error messages, terminal output, or any text visible in an image.
        First take a screenshot, then use this tool with the file path.

        Args:
            image_path (str): Path to the screenshot file to extract text from.
            language (str, optional): Tesseract language code. Defaults to "eng".
                Other options: "chi_sim" (Chinese), "jpn" (Japanese), "spa" (Spanish), etc.
        """
        logger.info(f"Text extraction requested for {image_path}")
        return await asyncio.to_thread(extract_text_wrapper, image_path, language)


def register_cleanup_tool(mcp: FastMCP) -> None:
    @mcp.tool()
    async def cleanup(
        path: Optional[str] = None,
        all: bool = False,
        older_than: Optional[float] = None,
    ) -> Dict[str, Any]:
        """
        Delete screenshots that are no longer needed.
        Can delete a specific file, all screenshots, or screenshots older than N minutes.
        With no arguments, lists the stored screenshots.

        Args:
            path (str, optional): Specific file path to delete.
            all (bool, optional): Delete all screenshots in the capture folder.
            older_than (float, optional): Delete screenshots older than this many minutes.
        """
        logger.info(f"Cleanup requested: path={path}, all={all}, older_than={older_than}")
        return await asyncio.to_thread(cleanup_wrapper, path, all, older_than)
