#!/usr/bin/env python3
"""
Command Line Interface for Screen Vision

This module provides a CLI for the capture functionality using Typer and Rich,
allowing users to list monitors, capture monitors, windows and regions, run
OCR on saved captures and manage the capture folder.

This module is part of the Presentation Layer and should only depend on
Core Layer components, not on Integration Layer.

Sample input:
- CLI commands with options

Expected output:
- Formatted console output of operation results
- Files saved to the capture folder
- Structured JSON output for machine consumption
"""

import sys
import time
from typing import NoReturn, Optional

import typer
from loguru import logger

from screen_vision import __version__
from screen_vision.core.constants import IMAGE_SETTINGS, OCR_SETTINGS
from screen_vision.core.errors import ScreenVisionError
from screen_vision.core.capture import (
    capture_active_window,
    capture_region,
    capture_screenshot,
    capture_window,
)
from screen_vision.core.monitors import enumerate_monitors, layout_left_to_right
from screen_vision.core.storage import (
    delete_all_screenshots,
    delete_old_screenshots,
    delete_screenshot,
    get_screenshot_dir,
    list_screenshots,
)
from screen_vision.cli.formatters import (
    print_capture_result,
    print_error,
    print_info,
    print_json,
    print_monitors_table,
    print_ocr_result,
    print_screenshots_table,
    print_warning,
)
from screen_vision.cli.validators import (
    validate_delay_option,
    validate_file_exists,
    validate_format_option,
    validate_json_output,
    validate_quality_option,
    validate_resize_option,
)
from screen_vision.cli.schemas import format_cli_response


app = typer.Typer(
    help="Screen Vision - multi-monitor screen capture and OCR",
    rich_markup_mode="rich",
    add_completion=False
)

tools_app = typer.Typer(help="Utility tools", rich_markup_mode="rich")
app.add_typer(tools_app, name="tools", help="Utility tools")


def configure_cli_logging(verbose: bool) -> None:
    """Route loguru output to stderr, quiet unless verbose."""
    logger.remove()
    logger.add(
        sys.stderr,
        format="<level>{level}: {message}</level>",
        level="DEBUG" if verbose else "WARNING",
        colorize=True
    )


def _fail(json_output: bool, label: str, exc: Exception) -> NoReturn:
    """Report a failed command and exit with status 1."""
    if isinstance(exc, ScreenVisionError):
        details = exc.to_dict()
        message = details.pop("error")
        error_type = details.pop("error_type")
    elif isinstance(exc, ValueError):
        message, error_type, details = str(exc), "invalid_argument", {}
    else:
        logger.error(f"{label} failed: {str(exc)}")
        message, error_type, details = f"{label} failed: {str(exc)}", "error", {}

    if json_output:
        print_json(format_cli_response(False, error=message, error_type=error_type, details=details or None))
    else:
        print_error(message)
    raise typer.Exit(1)


def _report_capture(json_output: bool, result: dict, title: str) -> None:
    if json_output:
        print_json(format_cli_response(True, data=result))
    else:
        print_capture_result(result, title=title)


def _wait(delay: float, json_output: bool) -> None:
    if delay > 0:
        if not json_output:
            print_info(f"Capturing in {delay:g} seconds...")
        time.sleep(delay)


@app.callback()
def main(
    ctx: typer.Context,
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output results as JSON",
        callback=validate_json_output
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging on stderr"),
):
    """
    Screen Vision - captures monitors, windows and regions

    Monitor numbers match the operating system's display settings.
    Use 0 or "primary" for the primary monitor.
    """
    ctx.ensure_object(dict)
    ctx.obj["json_output"] = json_output
    configure_cli_logging(verbose)


@app.command("monitors")
def monitors_command(ctx: typer.Context):
    """
    List connected monitors with resolution, position and primary flag.
    """
    json_output = ctx.obj.get("json_output", False)
    try:
        monitors = enumerate_monitors()
        if json_output:
            print_json(format_cli_response(True, data={
                "monitors": [m.to_dict() for m in monitors],
                "layout": [m.id for m in layout_left_to_right(monitors)],
            }))
        elif not monitors:
            print_warning("No monitors detected. This may indicate a permission issue or headless environment.")
        else:
            print_monitors_table(monitors)
    except Exception as e:
        _fail(json_output, "List monitors", e)


@app.command("screenshot")
def screenshot_command(
    ctx: typer.Context,
    monitor: str = typer.Option(
        "primary",
        "--monitor", "-m",
        help='Display number, 0 or "primary", or a name such as "display2"'
    ),
    resize: Optional[int] = typer.Option(
        None,
        "--resize", "-r",
        help="Maximum width or height in pixels",
        callback=validate_resize_option
    ),
    quality: int = typer.Option(
        IMAGE_SETTINGS["DEFAULT_QUALITY"],
        "--quality", "-q",
        help="Image quality (1-100)",
        callback=validate_quality_option
    ),
    format: str = typer.Option(
        IMAGE_SETTINGS["DEFAULT_FORMAT"],
        "--format", "-f",
        help="Output format: png or jpeg",
        callback=validate_format_option
    ),
    delay: Optional[float] = typer.Option(
        None,
        "--delay", "-d",
        help="Seconds (0-30) to wait before capturing",
        callback=validate_delay_option
    ),
):
    """
    Capture a full monitor.
    """
    json_output = ctx.obj.get("json_output", False)
    try:
        _wait(delay, json_output)
        result = capture_screenshot(monitor=monitor, resize=resize, quality=quality, fmt=format)
        _report_capture(json_output, result, "Screenshot Captured Successfully")
    except Exception as e:
        _fail(json_output, "Screenshot", e)


@app.command("active")
def active_command(
    ctx: typer.Context,
    resize: Optional[int] = typer.Option(
        None, "--resize", "-r", help="Maximum width or height in pixels", callback=validate_resize_option
    ),
    quality: int = typer.Option(
        IMAGE_SETTINGS["DEFAULT_QUALITY"], "--quality", "-q",
        help="Image quality (1-100)", callback=validate_quality_option
    ),
    format: str = typer.Option(
        IMAGE_SETTINGS["DEFAULT_FORMAT"], "--format", "-f",
        help="Output format: png or jpeg", callback=validate_format_option
    ),
    delay: Optional[float] = typer.Option(
        None, "--delay", "-d",
        help="Seconds (0-30) to wait before capturing, e.g. to open a menu", callback=validate_delay_option
    ),
):
    """
    Capture the focused window.
    """
    json_output = ctx.obj.get("json_output", False)
    try:
        _wait(delay, json_output)
        result = capture_active_window(resize=resize, quality=quality, fmt=format)
        _report_capture(json_output, result, "Active Window Captured")
    except Exception as e:
        _fail(json_output, "Capture active window", e)


@app.command("window")
def window_command(
    ctx: typer.Context,
    title: str = typer.Argument(..., help="Window title to match (case-insensitive, partial)"),
    resize: Optional[int] = typer.Option(
        None, "--resize", "-r", help="Maximum width or height in pixels", callback=validate_resize_option
    ),
    quality: int = typer.Option(
        IMAGE_SETTINGS["DEFAULT_QUALITY"], "--quality", "-q",
        help="Image quality (1-100)", callback=validate_quality_option
    ),
    format: str = typer.Option(
        IMAGE_SETTINGS["DEFAULT_FORMAT"], "--format", "-f",
        help="Output format: png or jpeg", callback=validate_format_option
    ),
):
    """
    Capture the focused window if its title matches TITLE.
    """
    json_output = ctx.obj.get("json_output", False)
    try:
        if not title.strip():
            raise ValueError("Window title must not be empty")
        result = capture_window(title, resize=resize, quality=quality, fmt=format)
        _report_capture(json_output, result, "Window Captured")
    except Exception as e:
        _fail(json_output, "Capture window", e)


@app.command("region")
def region_command(
    ctx: typer.Context,
    x: int = typer.Argument(..., help="Left edge, relative to the monitor"),
    y: int = typer.Argument(..., help="Top edge, relative to the monitor"),
    width: int = typer.Argument(..., help="Region width in pixels"),
    height: int = typer.Argument(..., help="Region height in pixels"),
    monitor: str = typer.Option(
        "primary", "--monitor", "-m", help='Monitor whose coordinate space is used'
    ),
    quality: int = typer.Option(
        IMAGE_SETTINGS["DEFAULT_QUALITY"], "--quality", "-q",
        help="Image quality (1-100)", callback=validate_quality_option
    ),
    format: str = typer.Option(
        IMAGE_SETTINGS["DEFAULT_FORMAT"], "--format", "-f",
        help="Output format: png or jpeg", callback=validate_format_option
    ),
):
    """
    Capture a rectangle given in monitor-local coordinates.
    """
    json_output = ctx.obj.get("json_output", False)
    try:
        result = capture_region(x, y, width, height, monitor=monitor, quality=quality, fmt=format)
        _report_capture(json_output, result, "Region Captured")
    except Exception as e:
        _fail(json_output, "Capture region", e)


@app.command("ocr")
def ocr_command(
    ctx: typer.Context,
    image_path: str = typer.Argument(..., help="Path to a saved capture", callback=validate_file_exists),
    language: str = typer.Option(
        OCR_SETTINGS["DEFAULT_LANGUAGE"], "--language", "-l",
        help='Tesseract language code, e.g. "eng", "jpn", "chi_sim"'
    ),
):
    """
    Extract text from an image with Tesseract OCR.
    """
    from screen_vision.core.ocr import extract_text

    json_output = ctx.obj.get("json_output", False)
    try:
        result = extract_text(image_path, language)
        if json_output:
            print_json(format_cli_response(True, data=result))
        else:
            print_ocr_result(result, image_path)
    except Exception as e:
        _fail(json_output, "Extract text", e)


@app.command("cleanup")
def cleanup_command(
    ctx: typer.Context,
    path: Optional[str] = typer.Option(None, "--path", "-p", help="Delete one specific file"),
    all: bool = typer.Option(False, "--all", "-a", help="Delete every capture in the folder"),
    older_than: Optional[float] = typer.Option(
        None, "--older-than", "-o", help="Delete captures older than this many minutes"
    ),
):
    """
    Delete captures, or list them when no option is given.
    """
    json_output = ctx.obj.get("json_output", False)
    try:
        if path:
            if not delete_screenshot(path):
                raise FileNotFoundError(
                    f"Not a capture file in {get_screenshot_dir()} or already deleted: {path}"
                )
            deleted = [path]
        elif all:
            deleted = delete_all_screenshots()
        elif older_than is not None:
            if older_than < 0:
                raise ValueError(f"older_than must be zero or more minutes, got {older_than}")
            deleted = delete_old_screenshots(older_than)
        else:
            screenshots = list_screenshots()
            if json_output:
                print_json(format_cli_response(True, data={
                    "directory": get_screenshot_dir(),
                    "screenshots": [s.to_dict() for s in screenshots],
                }))
            elif not screenshots:
                print_info(f"No screenshots in {get_screenshot_dir()}")
            else:
                print_screenshots_table(screenshots, get_screenshot_dir())
            return

        if json_output:
            print_json(format_cli_response(True, data={"deleted": deleted, "count": len(deleted)}))
        elif deleted:
            print_info(f"Deleted {len(deleted)} screenshot(s):\n" + "\n".join(f"  - {f}" for f in deleted))
        else:
            print_info("No screenshots matched; nothing deleted.")
    except FileNotFoundError as e:
        if json_output:
            print_json(format_cli_response(False, error=str(e), error_type="not_found"))
        else:
            print_error(str(e))
        raise typer.Exit(1)
    except Exception as e:
        _fail(json_output, "Cleanup", e)


@tools_app.command("version")
def show_version(ctx: typer.Context):
    """
    Show version information.
    """
    version_info = {
        "name": "Screen Vision",
        "version": __version__,
        "description": "Multi-monitor screen capture and OCR for MCP clients.",
        "capture_dir": get_screenshot_dir(),
    }

    json_output = ctx.obj.get("json_output", False)

    if json_output:
        print_json(format_cli_response(True, data=version_info))
    else:
        print_info(
            f"Name: {version_info['name']}\n"
            f"Version: {version_info['version']}\n"
            f"Description: {version_info['description']}\n"
            f"Capture folder: {version_info['capture_dir']}"
        )


@tools_app.command("serve")
def server_command(ctx: typer.Context):
    """
    Explain how to start the MCP server.
    """
    print_info(
        "The MCP server lives in the integration layer.\n"
        "Start it with: screen-vision-server start"
    )


if __name__ == "__main__":
    """
    CLI entry point for screen vision.

    Examples:
      python -m screen_vision.cli.cli monitors
      python -m screen_vision.cli.cli screenshot --monitor 2 --resize 1920
      python -m screen_vision.cli.cli region 0 0 800 600 --format jpeg
      python -m screen_vision.cli.cli ocr /tmp/screen-vision/monitor1_....png
    """
    app()
