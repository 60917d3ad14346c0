"""
Core Layer for Screen Vision

This package contains the core business logic: display topology
resolution, active window lookup, the capture pipeline, capture file
storage with its retention rule, and OCR.

The core layer is designed to be:
1. Independent of UI or integration concerns
2. Fully testable in isolation
3. Focused on business logic only
4. Raising typed errors that the outer layers turn into responses

Usage:
    from screen_vision.core import enumerate_monitors, capture_screenshot
    monitors = enumerate_monitors()
    result = capture_screenshot(monitor="primary", resize=1920)
"""

# Core constants and settings
from screen_vision.core.constants import (
    IMAGE_SETTINGS,
    CAPTURE_SETTINGS,
    STORAGE_SETTINGS,
    OCR_SETTINGS,
)

# Errors
from screen_vision.core.errors import (
    ScreenVisionError,
    MonitorNotFoundError,
    WindowNotFoundError,
    InvalidRegionError,
    CaptureError,
    EncodeError,
)

# Geometry
from screen_vision.core.geometry import Rect, clamp_to_bounds, classify_position, contains

# Display topology
from screen_vision.core.monitors import (
    MonitorRecord,
    enumerate_monitors,
    resolve_monitor,
    parse_identifier,
    layout_left_to_right,
    find_monitor_for_window,
)

# Active window
from screen_vision.core.windows import WindowSnapshot, get_active_window, matches_title

# Image processing
from screen_vision.core.image_processing import (
    CaptureArtifact,
    resize_if_needed,
    encode_image,
    png_compression_level,
    process_image,
)

# Capture operations
from screen_vision.core.capture import (
    capture_screenshot,
    capture_active_window,
    capture_window,
    capture_region,
    derive_window_crop,
    validate_region_crop,
)

# Storage and retention
from screen_vision.core.storage import (
    get_screenshot_dir,
    list_screenshots,
    delete_screenshot,
    delete_all_screenshots,
    delete_old_screenshots,
)
from screen_vision.core.lifecycle import check_and_cleanup_if_needed

__all__ = [
    # Constants
    'IMAGE_SETTINGS',
    'CAPTURE_SETTINGS',
    'STORAGE_SETTINGS',
    'OCR_SETTINGS',

    # Errors
    'ScreenVisionError',
    'MonitorNotFoundError',
    'WindowNotFoundError',
    'InvalidRegionError',
    'CaptureError',
    'EncodeError',

    # Geometry
    'Rect',
    'clamp_to_bounds',
    'classify_position',
    'contains',

    # Display topology
    'MonitorRecord',
    'enumerate_monitors',
    'resolve_monitor',
    'parse_identifier',
    'layout_left_to_right',
    'find_monitor_for_window',

    # Active window
    'WindowSnapshot',
    'get_active_window',
    'matches_title',

    # Image processing
    'CaptureArtifact',
    'resize_if_needed',
    'encode_image',
    'png_compression_level',
    'process_image',

    # Capture operations
    'capture_screenshot',
    'capture_active_window',
    'capture_window',
    'capture_region',
    'derive_window_crop',
    'validate_region_crop',

    # Storage and retention
    'get_screenshot_dir',
    'list_screenshots',
    'delete_screenshot',
    'delete_all_screenshots',
    'delete_old_screenshots',
    'check_and_cleanup_if_needed',
]
