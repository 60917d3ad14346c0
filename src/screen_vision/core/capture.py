#!/usr/bin/env python3
"""
Screenshot Capture Module

This module provides the capture operations behind every screenshot tool:
a whole monitor, the focused window, a window matched by title, or an
explicit region of a monitor.

Each operation resolves its target monitor, grabs the monitor with MSS,
derives a crop rectangle in monitor-local coordinates, runs the image
pipeline (crop -> resize -> encode), persists the artifact and finally
applies the capture retention rule.

Two crop derivations exist on purpose:
- derive_window_crop clamps window bounds into the monitor and falls back
  to the full monitor when nothing is left
- validate_region_crop rejects any explicit region that does not fit

This module is part of the Core Layer and should have no dependencies on
Presentation or Integration layers.

Sample input:
- capture_screenshot(monitor="primary", resize=1920, quality=80)
- capture_region(x=0, y=0, width=400, height=300, monitor=2)

Expected output:
- {"file": "/tmp/screen-vision/monitor1_....png", "metadata": {...}, "monitor": {...}}
- InvalidRegionError / MonitorNotFoundError / WindowNotFoundError / CaptureError on failure
"""

from typing import Any, Dict, List, Optional, Union

from PIL import Image
from loguru import logger

from screen_vision.core.constants import IMAGE_SETTINGS
from screen_vision.core.errors import (
    CaptureError,
    InvalidRegionError,
    MonitorNotFoundError,
    WindowNotFoundError,
)
from screen_vision.core.geometry import Rect, clamp_to_bounds
from screen_vision.core.image_processing import process_image
from screen_vision.core.lifecycle import check_and_cleanup_if_needed
from screen_vision.core.monitors import (
    MonitorRecord,
    describe_monitors,
    enumerate_monitors,
    find_monitor_for_window,
    resolve_monitor,
)
from screen_vision.core.mss import grab_area
from screen_vision.core.storage import save_capture
from screen_vision.core.windows import get_active_window, matches_title, safe_title


def capture_monitor_image(monitor: MonitorRecord) -> Image.Image:
    """
    Grab the full bitmap of one monitor.

    Raises:
        CaptureError: If the platform returned no frame
    """
    logger.info(f"Capturing monitor {monitor.id} ({monitor.resolution} at {monitor.x},{monitor.y})")
    return grab_area(monitor.x, monitor.y, monitor.width, monitor.height)


def derive_window_crop(window_bounds: Rect, monitor: MonitorRecord) -> Optional[Rect]:
    """
    Translate global window bounds into a clamped monitor-local crop.

    Args:
        window_bounds: Window rectangle in global coordinates
        monitor: Monitor the window was matched to

    Returns:
        Optional[Rect]: Crop rectangle, or None when the clamped area is
            empty and the full monitor capture should be used
    """
    local = window_bounds.translate(-monitor.x, -monitor.y)
    clamped = clamp_to_bounds(local, monitor.width, monitor.height)
    if clamped.width <= 0 or clamped.height <= 0:
        logger.info(f"Window {window_bounds} does not overlap monitor {monitor.id}, skipping crop")
        return None
    return clamped


def validate_region_crop(x: int, y: int, width: int, height: int, monitor: MonitorRecord) -> Rect:
    """
    Validate an explicit monitor-local region without clamping.

    Raises:
        InvalidRegionError: If any part of the region lies outside the monitor
    """
    if (
        x < 0
        or y < 0
        or width < 1
        or height < 1
        or x + width > monitor.width
        or y + height > monitor.height
    ):
        raise InvalidRegionError(x, y, width, height, monitor.width, monitor.height)
    return Rect(x, y, width, height)


def scale_crop_to_image(crop: Optional[Rect], monitor: MonitorRecord, img: Image.Image) -> Optional[Rect]:
    """
    Map a monitor-local crop onto the captured bitmap.

    HiDPI backends return more pixels than the monitor's reported size; the
    crop is scaled by the same ratio and kept inside the bitmap.
    """
    if crop is None or (img.width, img.height) == (monitor.width, monitor.height):
        return crop

    sx = img.width / monitor.width
    sy = img.height / monitor.height
    scaled = Rect(round(crop.x * sx), round(crop.y * sy), round(crop.width * sx), round(crop.height * sy))
    scaled = clamp_to_bounds(scaled, img.width, img.height)
    if scaled.width <= 0 or scaled.height <= 0:
        return None
    return scaled


def _monitor_or_raise(identifier: Union[int, str, None], monitors: List[MonitorRecord]) -> MonitorRecord:
    monitor = resolve_monitor(identifier, monitors)
    if monitor is None:
        raise MonitorNotFoundError(
            identifier, [m.to_dict() for m in monitors], listing=describe_monitors(monitors)
        )
    return monitor


def _finish_capture(
    img: Image.Image,
    monitor: MonitorRecord,
    prefix: str,
    crop: Optional[Rect] = None,
    resize: Optional[int] = None,
    quality: int = IMAGE_SETTINGS["DEFAULT_QUALITY"],
    fmt: str = IMAGE_SETTINGS["DEFAULT_FORMAT"],
) -> Dict[str, Any]:
    """Run the pipeline on a captured bitmap, persist it and apply retention."""
    crop = scale_crop_to_image(crop, monitor, img)
    artifact, metadata = process_image(img, crop=crop, resize=resize, quality=quality, fmt=fmt)
    path = save_capture(artifact, prefix)

    result: Dict[str, Any] = {
        "file": path,
        "metadata": metadata,
        "monitor": monitor.to_dict(),
    }

    cleanup = check_and_cleanup_if_needed()
    if cleanup.cleaned:
        result["auto_cleanup"] = cleanup.to_dict()

    return result


def capture_screenshot(
    monitor: Union[int, str, None] = 0,
    resize: Optional[int] = None,
    quality: int = IMAGE_SETTINGS["DEFAULT_QUALITY"],
    fmt: str = IMAGE_SETTINGS["DEFAULT_FORMAT"],
) -> Dict[str, Any]:
    """
    Capture a whole monitor.

    Args:
        monitor: 0 / "primary" / "main", a display number or a name such as "display2"
        resize: Optional maximum dimension
        quality: Quality 1-100
        fmt: "png" or "jpeg"

    Returns:
        Dict[str, Any]: file, metadata and monitor of the saved capture
    """
    logger.info(f"Screenshot requested for monitor={monitor!r}, resize={resize}, quality={quality}")
    monitors = enumerate_monitors()
    target = _monitor_or_raise(monitor, monitors)

    img = capture_monitor_image(target)
    return _finish_capture(img, target, f"monitor{target.id}", resize=resize, quality=quality, fmt=fmt)


def _capture_window_snapshot(snapshot, prefix: str, resize, quality, fmt) -> Dict[str, Any]:
    monitors = enumerate_monitors()
    target = find_monitor_for_window(snapshot.bounds, monitors)
    if target is None:
        raise CaptureError("No monitors available to capture")

    img = capture_monitor_image(target)
    crop = derive_window_crop(snapshot.bounds, target)
    result = _finish_capture(img, target, prefix, crop=crop, resize=resize, quality=quality, fmt=fmt)
    result["window_title"] = snapshot.title
    result["window_bounds"] = snapshot.bounds.to_dict()
    result["window_owner"] = snapshot.to_dict()["owner"]
    return result


def capture_active_window(
    resize: Optional[int] = None,
    quality: int = IMAGE_SETTINGS["DEFAULT_QUALITY"],
    fmt: str = IMAGE_SETTINGS["DEFAULT_FORMAT"],
) -> Dict[str, Any]:
    """
    Capture the focused window, cropped from the monitor that shows it.

    Raises:
        WindowNotFoundError: If no window is focused
    """
    snapshot = get_active_window()
    if snapshot is None:
        raise WindowNotFoundError("Could not detect active window. Make sure a window is focused.")

    return _capture_window_snapshot(snapshot, f"active_{safe_title(snapshot.title)}", resize, quality, fmt)


def capture_window(
    title: str,
    resize: Optional[int] = None,
    quality: int = IMAGE_SETTINGS["DEFAULT_QUALITY"],
    fmt: str = IMAGE_SETTINGS["DEFAULT_FORMAT"],
) -> Dict[str, Any]:
    """
    Capture the focused window if its title contains ``title``.

    Raises:
        WindowNotFoundError: If nothing is focused or the title does not match
    """
    snapshot = get_active_window()
    if snapshot is None:
        raise WindowNotFoundError(
            "Could not detect active window. Make sure the window is visible and focused."
        )

    if not matches_title(snapshot, title):
        raise WindowNotFoundError(
            f'Active window "{snapshot.title}" does not match "{title}". '
            f"Please focus the window you want to capture and try again, "
            f"or use screenshot_active to capture the currently focused window.",
            active_title=snapshot.title,
        )

    return _capture_window_snapshot(snapshot, f"window_{safe_title(title)}", resize, quality, fmt)


def capture_region(
    x: int,
    y: int,
    width: int,
    height: int,
    monitor: Union[int, str, None] = 0,
    quality: int = IMAGE_SETTINGS["DEFAULT_QUALITY"],
    fmt: str = IMAGE_SETTINGS["DEFAULT_FORMAT"],
) -> Dict[str, Any]:
    """
    Capture an explicit rectangle given in monitor-local coordinates.

    Raises:
        MonitorNotFoundError: If the monitor does not resolve
        InvalidRegionError: If the region does not fit the monitor
    """
    logger.info(f"Region screenshot requested: ({x}, {y}, {width}x{height}) on monitor {monitor!r}")
    monitors = enumerate_monitors()
    target = _monitor_or_raise(monitor, monitors)

    # Validate before grabbing so a bad request never touches the display
    crop = validate_region_crop(x, y, width, height, target)

    img = capture_monitor_image(target)
    return _finish_capture(
        img, target, f"region_{x}_{y}_{width}x{height}", crop=crop, quality=quality, fmt=fmt
    )
