#!/usr/bin/env python3
"""
Platform Display Settings Query

Reads the operating system's own display numbering (the numbers shown in
the display settings UI) together with each display's origin and primary
flag. The capture library does not expose these, so the monitor resolver
joins the two sources on origin coordinates.

Only Windows provides a usable query today. Every failure mode returns
None so the caller can switch to index-based numbering; nothing in here
raises.

This module is part of the Core Layer.

Sample input:
- timeout=5.0

Expected output:
- [DisplaySetting(number=1, x=0, y=0, width=2560, height=1440, is_primary=True, ...), ...]
- or None when the query is unavailable
"""

import json
import re
import subprocess
import sys
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from loguru import logger

from screen_vision.core.constants import CAPTURE_SETTINGS


POWERSHELL_SCRIPT = (
    "Add-Type -AssemblyName System.Windows.Forms; "
    "[System.Windows.Forms.Screen]::AllScreens | ForEach-Object { "
    "[PSCustomObject]@{ "
    "DeviceName = $_.DeviceName; "
    "X = $_.Bounds.X; Y = $_.Bounds.Y; "
    "Width = $_.Bounds.Width; Height = $_.Bounds.Height; "
    "Primary = $_.Primary } } | ConvertTo-Json -Compress"
)

_DISPLAY_NUMBER = re.compile(r"DISPLAY(\d+)", re.IGNORECASE)


@dataclass(frozen=True)
class DisplaySetting:
    """One display as reported by the OS display settings."""

    number: int
    x: int
    y: int
    width: int
    height: int
    is_primary: bool
    device_name: str = ""


def parse_display_number(device_name: str) -> Optional[int]:
    """Extract the canonical number from a device name like ``\\\\.\\DISPLAY2``."""
    match = _DISPLAY_NUMBER.search(device_name or "")
    if not match:
        return None
    return int(match.group(1))


def parse_display_settings(payload: str) -> List[DisplaySetting]:
    """
    Parse the JSON emitted by the PowerShell query.

    A single display serialises as an object rather than a list.

    Raises:
        ValueError: If the payload is not the expected shape
    """
    data: Any = json.loads(payload)
    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list):
        raise ValueError(f"Unexpected display settings payload: {type(data).__name__}")

    settings = []
    for entry in data:
        number = parse_display_number(str(entry.get("DeviceName", "")))
        if number is None:
            raise ValueError(f"Display entry without a display number: {entry}")
        settings.append(
            DisplaySetting(
                number=number,
                x=int(entry["X"]),
                y=int(entry["Y"]),
                width=int(entry["Width"]),
                height=int(entry["Height"]),
                is_primary=bool(entry.get("Primary", False)),
                device_name=str(entry.get("DeviceName", "")),
            )
        )
    return settings


def query_display_settings(
    timeout: float = CAPTURE_SETTINGS["DISPLAY_QUERY_TIMEOUT"],
) -> Optional[List[DisplaySetting]]:
    """
    Ask the OS for canonical display numbers.

    Args:
        timeout: Hard limit in seconds for the platform query

    Returns:
        Optional[List[DisplaySetting]]: Display settings, or None when the
            query is unsupported, denied, timed out or malformed
    """
    if not sys.platform.startswith("win"):
        logger.debug(f"Display settings query not supported on {sys.platform}")
        return None

    try:
        completed = subprocess.run(
            ["powershell", "-NoProfile", "-NonInteractive", "-Command", POWERSHELL_SCRIPT],
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        logger.warning(f"Display settings query timed out after {timeout}s, using enumeration order")
        return None
    except OSError as e:
        logger.debug(f"Display settings query could not start: {str(e)}")
        return None

    if completed.returncode != 0 or not completed.stdout.strip():
        logger.debug(f"Display settings query failed (exit {completed.returncode}): {completed.stderr.strip()}")
        return None

    try:
        settings = parse_display_settings(completed.stdout)
    except (ValueError, KeyError, TypeError, AttributeError) as e:
        logger.warning(f"Could not parse display settings: {str(e)}")
        return None

    logger.debug(f"Display settings reported {len(settings)} display(s)")
    return settings


def settings_by_origin(settings: List[DisplaySetting]) -> Dict[tuple, DisplaySetting]:
    """Index display settings by their (x, y) origin."""
    return {(setting.x, setting.y): setting for setting in settings}
