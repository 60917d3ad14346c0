#!/usr/bin/env python3
"""
Constants for Screen Vision Core

This module defines constants used throughout the capture functionality,
ensuring consistent configuration across the application.

This module is part of the Core Layer and should have no dependencies on
Presentation or Integration layers.

Sample input:
- None (module contains only constants)

Expected output:
- None (module contains only constants)
"""

from typing import Dict, Any, Tuple

# Image settings for encoding captured bitmaps
IMAGE_SETTINGS: Dict[str, Any] = {
    "MIN_QUALITY": 1,  # Lowest accepted quality value
    "MAX_QUALITY": 100,  # Highest accepted quality value
    "DEFAULT_QUALITY": 80,  # Default quality if none specified
    "DEFAULT_FORMAT": "png",  # Default output format
    "FORMATS": ("png", "jpeg"),  # Supported output formats
    "MAX_PNG_COMPRESSION": 9,  # zlib compression ceiling for PNG
}

# Capture request settings
CAPTURE_SETTINGS: Dict[str, Any] = {
    "MAX_DELAY": 30,  # Maximum pre-capture delay in seconds
    "AUTO_CLEANUP_THRESHOLD": 10,  # Capture count that triggers pruning
    "DISPLAY_QUERY_TIMEOUT": 5.0,  # Seconds allowed for the display settings query
    "TITLE_FRAGMENT_LENGTH": 20,  # Characters of a window title kept in filenames
}

# Capture file storage
STORAGE_SETTINGS: Dict[str, Any] = {
    "DIR_NAME": "screen-vision",  # Directory created under the system temp dir
    "DIR_ENV_VAR": "SCREEN_VISION_DIR",  # Overrides the capture directory
    "EXTENSIONS": (".png", ".jpg", ".jpeg"),  # Files that count as captures
}

# OCR settings
OCR_SETTINGS: Dict[str, Any] = {
    "DEFAULT_LANGUAGE": "eng",
    "TESSERACT_CONFIG": "--oem 3 --psm 3",
}

# Identifiers that always mean the primary monitor
PRIMARY_ALIASES: Tuple[str, ...] = ("primary", "main")

# MIME types per output format
MIME_TYPES: Dict[str, str] = {
    "png": "image/png",
    "jpeg": "image/jpeg",
}

# Logging settings
LOG_MAX_STR_LEN: int = 100  # Maximum string length for truncated logging


if __name__ == "__main__":
    """Validate module constants"""
    import sys

    all_validation_failures = []
    total_tests = 0

    # Test 1: Verify quality range is valid
    total_tests += 1
    if not (1 <= IMAGE_SETTINGS["MIN_QUALITY"] <= IMAGE_SETTINGS["DEFAULT_QUALITY"] <= IMAGE_SETTINGS["MAX_QUALITY"] <= 100):
        all_validation_failures.append(
            f"Invalid quality range: MIN_QUALITY={IMAGE_SETTINGS['MIN_QUALITY']}, "
            f"MAX_QUALITY={IMAGE_SETTINGS['MAX_QUALITY']}"
        )

    # Test 2: Every format has a MIME type
    total_tests += 1
    missing = [fmt for fmt in IMAGE_SETTINGS["FORMATS"] if fmt not in MIME_TYPES]
    if missing:
        all_validation_failures.append(f"MIME_TYPES missing formats: {missing}")

    # Test 3: Capture settings are positive
    total_tests += 1
    for key, value in CAPTURE_SETTINGS.items():
        if not isinstance(value, (int, float)) or value <= 0:
            all_validation_failures.append(f"CAPTURE_SETTINGS[{key}] should be positive number, got {value}")

    if all_validation_failures:
        print(f"❌ VALIDATION FAILED - {len(all_validation_failures)} of {total_tests} tests failed:")
        for failure in all_validation_failures:
            print(f"  - {failure}")
        sys.exit(1)
    else:
        print(f"✅ VALIDATION PASSED - All {total_tests} tests produced expected results")
        sys.exit(0)
