#!/usr/bin/env python3
"""
Formatters for Screen Vision CLI

This module provides rich formatting utilities for the CLI presentation layer:
monitor tables, capture result panels, OCR output and message panels.

This module is part of the Presentation Layer and should only depend on
Core Layer components, not on Integration Layer.

Sample input:
- Monitor records, capture result dictionaries, error messages

Expected output:
- Rich formatted tables and panels
"""

import os
import json
from typing import Any, Dict, List

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from screen_vision.core.monitors import MonitorRecord, layout_left_to_right
from screen_vision.core.storage import ScreenshotFile


console = Console()


COLORS = {
    "success": "green",
    "error": "red",
    "warning": "yellow",
    "info": "blue",
    "path": "cyan",
    "highlight": "magenta",
    "dim": "grey70",
}


def print_monitors_table(monitors: List[MonitorRecord]) -> None:
    """
    Format and print connected monitors as a table, left to right.

    Args:
        monitors: Canonical monitor records
    """
    table = Table(title="Connected Monitors")

    table.add_column("ID", justify="right", style=COLORS["highlight"])
    table.add_column("Name")
    table.add_column("Resolution", justify="right", style=COLORS["info"])
    table.add_column("Origin", justify="right", style=COLORS["info"])
    table.add_column("Position")
    table.add_column("Scale", justify="right", style=COLORS["dim"])
    table.add_column("Primary", justify="center", style=COLORS["success"])

    ordered = layout_left_to_right(monitors)
    for m in ordered:
        table.add_row(
            str(m.id),
            m.name,
            m.resolution,
            f"({m.x}, {m.y})",
            m.position,
            f"{m.scale_factor:g}x",
            "✓" if m.is_primary else "",
        )

    console.print(table)
    console.print(
        f"Layout (left to right): {', '.join(str(m.id) for m in ordered)}",
        style=COLORS["dim"],
    )


def print_capture_result(result: Dict[str, Any], title: str = "Screenshot Captured Successfully") -> None:
    """
    Format and print a capture result to the console.

    Args:
        result: Capture result dictionary (file, metadata, monitor, ...)
        title: Panel title
    """
    file_path = result.get("file", "Unknown")
    metadata = result.get("metadata", {})
    monitor = result.get("monitor", {})

    info = Text()
    info.append("Filename: ", style=COLORS["dim"])
    info.append(f"{os.path.basename(file_path)}\n", style=COLORS["path"])
    info.append("Directory: ", style=COLORS["dim"])
    info.append(f"{os.path.dirname(file_path)}\n", style=COLORS["path"])

    if metadata:
        info.append("Image: ", style=COLORS["dim"])
        info.append(
            f"{metadata.get('width')}x{metadata.get('height')} {str(metadata.get('format', '')).upper()}",
            style=COLORS["info"],
        )
        info.append("  Size: ", style=COLORS["dim"])
        info.append(f"{metadata.get('size_bytes', 0) / 1024:.1f} KB\n", style=COLORS["info"])

    if monitor:
        info.append("Monitor: ", style=COLORS["dim"])
        info.append(f"{monitor.get('name')} ({monitor.get('resolution')})", style=COLORS["highlight"])

    if "window_title" in result:
        info.append("\nWindow: ", style=COLORS["dim"])
        info.append(result["window_title"], style=COLORS["highlight"])

    cleanup = result.get("auto_cleanup")
    if cleanup:
        info.append(f"\n\nAuto-cleanup deleted {cleanup['count']} older screenshots", style=COLORS["warning"])

    panel = Panel(
        info,
        title=f"[bold green]{title}",
        border_style=COLORS["success"],
        padding=(1, 2)
    )

    console.print(panel)


def print_ocr_result(result: Dict[str, Any], image_path: str) -> None:
    """
    Format and print extracted text.

    Args:
        result: OCR result with text, confidence and language
        image_path: Source image
    """
    text = result.get("text") or "No text detected."
    footer = f"Confidence: {result.get('confidence', 0)}  Language: {result.get('language', '')}"

    content = Text()
    content.append(f"{text}\n\n")
    content.append(footer, style=COLORS["dim"])

    panel = Panel(
        content,
        title=f"[bold blue]Extracted Text: {os.path.basename(image_path)}",
        border_style=COLORS["info"],
        padding=(1, 2)
    )

    console.print(panel)


def print_screenshots_table(screenshots: List[ScreenshotFile], directory: str) -> None:
    """
    Format and print stored captures, newest first.

    Args:
        screenshots: Capture files
        directory: Capture folder shown in the title
    """
    table = Table(title=f"Screenshots in {directory}")

    table.add_column("Name", style=COLORS["path"])
    table.add_column("Size", justify="right", style=COLORS["info"])
    table.add_column("Age", justify="right", style=COLORS["dim"])

    for s in screenshots:
        table.add_row(s.name, f"{round(s.size / 1024)} KB", f"{s.age_minutes} min")

    console.print(table)


def print_error(message: str, title: str = "Error") -> None:
    """
    Format and print error message to the console.

    Args:
        message: Error message
        title: Panel title
    """
    panel = Panel(
        Text(message, style=COLORS["error"]),
        title=f"[bold {COLORS['error']}]{title}",
        border_style=COLORS["error"],
        padding=(1, 2)
    )

    console.print(panel)


def print_warning(message: str, title: str = "Warning") -> None:
    """
    Format and print warning message to the console.

    Args:
        message: Warning message
        title: Panel title
    """
    panel = Panel(
        Text(message, style=COLORS["warning"]),
        title=f"[bold {COLORS['warning']}]{title}",
        border_style=COLORS["warning"],
        padding=(1, 2)
    )

    console.print(panel)


def print_info(message: str, title: str = "Info") -> None:
    """
    Format and print info message to the console.

    Args:
        message: Info message
        title: Panel title
    """
    panel = Panel(
        Text(message, style=COLORS["info"]),
        title=f"[bold {COLORS['info']}]{title}",
        border_style=COLORS["info"],
        padding=(1, 2)
    )

    console.print(panel)


def print_json(data: Dict[str, Any]) -> None:
    """
    Print JSON data for machine consumption.

    Args:
        data: JSON-serialisable data
    """
    print(json.dumps(data, indent=2, default=str))


if __name__ == "__main__":
    """Demonstrate formatters with sample data"""
    sample_monitors = [
        MonitorRecord(id=1, name="Display 1", is_primary=True, x=0, y=0, width=1920, height=1080, position="center"),
        MonitorRecord(id=2, name="Display 2", is_primary=False, x=1920, y=0, width=2560, height=1440, position="right"),
    ]
    sample_result = {
        "file": "/tmp/screen-vision/monitor1_20240101_120000_abc123.png",
        "metadata": {"width": 1920, "height": 1080, "format": "png", "size_bytes": 204800},
        "monitor": sample_monitors[0].to_dict(),
    }

    console.print("\n[bold]Monitors Table Example:[/bold]")
    print_monitors_table(sample_monitors)

    console.print("\n[bold]Capture Result Example:[/bold]")
    print_capture_result(sample_result)

    console.print("\n[bold]OCR Example:[/bold]")
    print_ocr_result({"text": "Hello world", "confidence": 91.5, "language": "eng"}, sample_result["file"])

    console.print("\n[bold]Error Example:[/bold]")
    print_error('Monitor "5" not found. Available monitors: 1: 1920x1080, 2: 2560x1440')

    console.print("[bold green]All formatters demonstrated successfully![/bold green]")
