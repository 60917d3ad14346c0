#!/usr/bin/env python3
"""
MCP Wrappers for Screen Vision

This module provides MCP-specific wrapper functions for the core capture
functionality, handling parameter validation and error formatting specific
to MCP. Every exception coming out of the core is caught here and turned
into a structured failure with ``success: False``, an ``error`` message and
an ``error_type``.

This module is part of the Integration Layer and can depend on both
Core Layer and Presentation Layer components.

Sample input:
- MCP function parameters

Expected output:
- MCP-compatible response dictionaries
"""

import os
from typing import Any, Dict, Optional, Union

import pytesseract
from loguru import logger

from screen_vision.core.constants import CAPTURE_SETTINGS, IMAGE_SETTINGS, OCR_SETTINGS
from screen_vision.core.errors import ScreenVisionError
from screen_vision.core.capture import (
    capture_active_window,
    capture_region,
    capture_screenshot,
    capture_window,
)
from screen_vision.core.monitors import enumerate_monitors, layout_left_to_right
from screen_vision.core.ocr import extract_text
from screen_vision.core.storage import (
    delete_all_screenshots,
    delete_old_screenshots,
    delete_screenshot,
    get_screenshot_dir,
    list_screenshots,
)
from screen_vision.core.utils import (
    truncate_large_value,
    validate_format,
    validate_quality,
    validate_resize,
)

CLEANUP_USAGE = (
    "Use cleanup with:\n"
    '- path: "file.png" to delete a specific file\n'
    "- all: true to delete all screenshots\n"
    "- older_than: 30 to delete screenshots older than 30 minutes"
)


def format_mcp_response(
    success: bool,
    data: Optional[Dict[str, Any]] = None,
    error: Optional[str] = None,
    error_type: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Format a response in MCP-compatible format.

    Args:
        success: Whether the operation was successful
        data: Response data (merged in for both outcomes)
        error: Error message (for failed operations)
        error_type: Machine-checkable error category

    Returns:
        Dict[str, Any]: MCP-compatible response
    """
    response: Dict[str, Any] = {"success": success}

    if data is not None:
        response.update(data)
    if not success:
        response["is_error"] = True
        if error is not None:
            response["error"] = error
        response["error_type"] = error_type or "error"

    return response


def _failure(operation: str, exc: Exception) -> Dict[str, Any]:
    """Convert any exception from the core into a failure response."""
    if isinstance(exc, ScreenVisionError):
        details = exc.to_dict()
        message = details.pop("error")
        error_type = details.pop("error_type")
        logger.info(f"{operation} failed: {message}")
        return format_mcp_response(False, data=details, error=message, error_type=error_type)

    if isinstance(exc, ValueError):
        logger.info(f"{operation} rejected: {str(exc)}")
        return format_mcp_response(False, error=str(exc), error_type="invalid_argument")

    error_message = f"{operation} failed: {str(exc)}"
    logger.error(error_message, exc_info=True)
    return format_mcp_response(False, error=error_message, error_type="error")


def _capture_message(result: Dict[str, Any], subject: str) -> str:
    message = f"{subject} saved to: {result['file']}\n\nUse the Read tool to view this image."
    cleanup = result.get("auto_cleanup")
    if cleanup:
        message += (
            f"\n\n(Auto-cleanup: deleted {cleanup['count']} screenshots - limit of "
            f"{CAPTURE_SETTINGS['AUTO_CLEANUP_THRESHOLD']} reached)"
        )
    return message


def list_monitors_wrapper() -> Dict[str, Any]:
    """
    MCP wrapper for monitor enumeration.

    Returns:
        Dict[str, Any]: monitors, layout (ids left to right) and a readable summary
    """
    try:
        monitors = enumerate_monitors()
        if not monitors:
            return format_mcp_response(True, data={
                "monitors": [],
                "layout": [],
                "message": "No monitors detected. This may indicate a permission issue or headless environment.",
            })

        layout = [m.id for m in layout_left_to_right(monitors)]
        lines = []
        for m in monitors:
            primary = " (PRIMARY)" if m.is_primary else ""
            lines.append(f"  - Monitor {m.id}{primary}: {m.name} - {m.resolution} at ({m.x}, {m.y}) [{m.position}]")

        ids = ", ".join(str(m.id) for m in monitors)
        message = (
            f"Found {len(monitors)} monitor(s):\n" + "\n".join(lines)
            + f"\n\nLayout (left to right): {' | '.join(str(i) for i in layout)}"
            + f"\n\nUse display number ({ids}) or \"primary\" with the screenshot tool. "
            f"Numbers match the operating system's display settings."
        )
        return format_mcp_response(True, data={
            "monitors": [m.to_dict() for m in monitors],
            "layout": layout,
            "message": message,
        })
    except Exception as e:
        return _failure("Enumerate monitors", e)


def screenshot_wrapper(
    monitor: Union[int, str] = 0,
    resize: Optional[int] = None,
    quality: int = IMAGE_SETTINGS["DEFAULT_QUALITY"],
    format: str = IMAGE_SETTINGS["DEFAULT_FORMAT"],
) -> Dict[str, Any]:
    """
    MCP wrapper for full monitor capture.

    Args:
        monitor: Monitor identifier (0 / "primary", display number, "display2")
        resize: Maximum width or height
        quality: Image quality 1-100
        format: "png" or "jpeg"

    Returns:
        Dict[str, Any]: MCP-compatible response
    """
    try:
        result = capture_screenshot(
            monitor=monitor,
            resize=validate_resize(resize),
            quality=validate_quality(quality),
            fmt=validate_format(format),
        )
        result["message"] = _capture_message(result, "Screenshot")
        return format_mcp_response(True, data=result)
    except Exception as e:
        return _failure("Screenshot", e)


def screenshot_active_wrapper(
    resize: Optional[int] = None,
    quality: int = IMAGE_SETTINGS["DEFAULT_QUALITY"],
    format: str = IMAGE_SETTINGS["DEFAULT_FORMAT"],
) -> Dict[str, Any]:
    """MCP wrapper for capturing the focused window."""
    try:
        result = capture_active_window(
            resize=validate_resize(resize),
            quality=validate_quality(quality),
            fmt=validate_format(format),
        )
        result["message"] = _capture_message(
            result, f'Screenshot of active window "{result["window_title"]}"'
        )
        return format_mcp_response(True, data=result)
    except Exception as e:
        return _failure("Capture active window", e)


def screenshot_window_wrapper(
    title: str,
    resize: Optional[int] = None,
    quality: int = IMAGE_SETTINGS["DEFAULT_QUALITY"],
    format: str = IMAGE_SETTINGS["DEFAULT_FORMAT"],
) -> Dict[str, Any]:
    """MCP wrapper for capturing a window by (partial) title."""
    try:
        if not title or not title.strip():
            raise ValueError("Window title must not be empty")
        logger.debug(f"Window capture for title {truncate_large_value(title)!r}")

        result = capture_window(
            title,
            resize=validate_resize(resize),
            quality=validate_quality(quality),
            fmt=validate_format(format),
        )
        result["message"] = _capture_message(result, f'Screenshot of "{result["window_title"]}"')
        return format_mcp_response(True, data=result)
    except Exception as e:
        return _failure("Capture window", e)


def screenshot_region_wrapper(
    x: int,
    y: int,
    width: int,
    height: int,
    monitor: Union[int, str] = 0,
    quality: int = IMAGE_SETTINGS["DEFAULT_QUALITY"],
    format: str = IMAGE_SETTINGS["DEFAULT_FORMAT"],
) -> Dict[str, Any]:
    """MCP wrapper for capturing an explicit monitor-local region."""
    try:
        result = capture_region(
            x, y, width, height,
            monitor=monitor,
            quality=validate_quality(quality),
            fmt=validate_format(format),
        )
        result["message"] = _capture_message(
            result, f"Screenshot of region ({x}, {y}, {width}x{height})"
        )
        return format_mcp_response(True, data=result)
    except Exception as e:
        return _failure("Capture region", e)


def extract_text_wrapper(
    image_path: str,
    language: str = OCR_SETTINGS["DEFAULT_LANGUAGE"],
) -> Dict[str, Any]:
    """MCP wrapper for OCR of a saved capture."""
    try:
        if not os.path.isfile(image_path):
            return format_mcp_response(
                False,
                error=(
                    f"File not found: {image_path}\n\n"
                    "Take a screenshot first using the screenshot or screenshot_active tool."
                ),
                error_type="not_found",
            )

        result = extract_text(image_path, language)
        if not result["text"]:
            result["message"] = (
                "No text detected in the image. The image may contain:\n"
                "- Non-text content (graphics, icons)\n"
                "- Text in a language not supported by the current setting\n"
                "- Very small or stylized text\n\n"
                "Try using a different language parameter if needed."
            )
        else:
            result["message"] = f"Extracted text from {image_path}:\n\n{result['text']}"
        return format_mcp_response(True, data=result)
    except pytesseract.TesseractNotFoundError as e:
        return format_mcp_response(
            False,
            error=f"Failed to extract text: Tesseract is not installed or not on PATH ({str(e)})",
            error_type="ocr_unavailable",
        )
    except Exception as e:
        return _failure("Extract text", e)


def cleanup_wrapper(
    path: Optional[str] = None,
    all: bool = False,
    older_than: Optional[float] = None,
) -> Dict[str, Any]:
    """
    MCP wrapper for capture file management.

    Exactly one action runs, in priority order: delete ``path``, delete
    ``all``, delete ``older_than`` minutes. With no action the current
    captures are listed.
    """
    try:
        if path:
            if delete_screenshot(path):
                return format_mcp_response(True, data={"deleted": [path], "message": f"Deleted: {path}"})
            return format_mcp_response(
                False,
                error=f"Not a capture file in {get_screenshot_dir()} or already deleted: {path}",
                error_type="not_found",
            )

        if all:
            deleted = delete_all_screenshots()
            if not deleted:
                message = f"No screenshots to delete in {get_screenshot_dir()}"
            else:
                message = f"Deleted {len(deleted)} screenshot(s):\n" + "\n".join(f"  - {f}" for f in deleted)
            return format_mcp_response(True, data={"deleted": deleted, "message": message})

        if older_than is not None:
            if older_than < 0:
                raise ValueError(f"older_than must be zero or more minutes, got {older_than}")
            deleted = delete_old_screenshots(older_than)
            if not deleted:
                message = f"No screenshots older than {older_than} minutes found."
            else:
                message = (
                    f"Deleted {len(deleted)} screenshot(s) older than {older_than} minutes:\n"
                    + "\n".join(f"  - {f}" for f in deleted)
                )
            return format_mcp_response(True, data={"deleted": deleted, "message": message})

        screenshots = list_screenshots()
        directory = get_screenshot_dir()
        if not screenshots:
            message = f"No screenshots in {directory}\n\n{CLEANUP_USAGE}"
        else:
            listing = "\n".join(
                f"  - {s.name} ({round(s.size / 1024)}KB, {s.age_minutes}min ago)" for s in screenshots
            )
            message = f"Found {len(screenshots)} screenshot(s) in {directory}:\n{listing}\n\n{CLEANUP_USAGE}"
        return format_mcp_response(True, data={
            "screenshots": [s.to_dict() for s in screenshots],
            "message": message,
        })
    except Exception as e:
        return _failure("Cleanup", e)
