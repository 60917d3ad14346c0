#!/usr/bin/env python3
"""
MSS (Screenshot) Low-Level Module

This module provides low-level wrapper functions for the MSS library,
focusing on direct capture operations without additional processing.

This module is part of the Core Layer and should have no dependencies on
Presentation or Integration layers.

Sample input:
- Monitor geometry (left, top, width, height)

Expected output:
- Raw monitor geometry list and PIL images of captured monitors
"""

from typing import Dict, List

import mss
import mss.exception
from PIL import Image
from loguru import logger

from screen_vision.core.errors import CaptureError


def get_raw_monitors() -> List[Dict[str, int]]:
    """
    Get raw geometry for all physical monitors in enumeration order.

    Returns:
        List[Dict[str, int]]: Monitor dictionaries with keys
            left, top, width, height (global coordinates)
    """
    try:
        with mss.mss() as sct:
            # Skip the first monitor (which is the "all monitors" combined view)
            return [
                {
                    "left": monitor["left"],
                    "top": monitor["top"],
                    "width": monitor["width"],
                    "height": monitor["height"],
                }
                for monitor in sct.monitors[1:]
            ]
    except mss.exception.ScreenShotError as e:
        logger.error(f"Failed to get monitors: {str(e)}", exc_info=True)
        return []


def grab_area(left: int, top: int, width: int, height: int) -> Image.Image:
    """
    Capture a rectangle of the virtual desktop.

    Args:
        left: Global x coordinate of the rectangle
        top: Global y coordinate of the rectangle
        width: Width in pixels
        height: Height in pixels

    Returns:
        Image.Image: Captured RGB image in native bitmap pixels

    Raises:
        CaptureError: If MSS fails or returns an empty frame
    """
    area = {"left": left, "top": top, "width": width, "height": height}
    try:
        with mss.mss() as sct:
            sct_img = sct.grab(area)
            if not sct_img.size[0] or not sct_img.size[1]:
                raise CaptureError(f"Failed to capture screenshot: empty frame for {area}")

            # Convert to PIL Image
            return Image.frombytes("RGB", sct_img.size, sct_img.bgra, "raw", "BGRX")
    except mss.exception.ScreenShotError as e:
        logger.error(f"Failed to capture area {area}: {str(e)}", exc_info=True)
        raise CaptureError(f"Failed to capture screenshot: {str(e)}") from e
