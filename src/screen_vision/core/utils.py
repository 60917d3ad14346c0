#!/usr/bin/env python3
"""
Utility Functions for Screen Vision

This module provides the argument validation and log helpers used by the
CLI and MCP layers.

This module is part of the Core Layer and should have no dependencies on
Presentation or Integration layers.

Sample input:
- validate_quality(120), validate_delay(45)

Expected output:
- 100, ValueError
"""

from typing import Any, Optional

from loguru import logger

from screen_vision.core.constants import CAPTURE_SETTINGS, IMAGE_SETTINGS, LOG_MAX_STR_LEN


def validate_quality(
    quality: int,
    min_quality: int = IMAGE_SETTINGS["MIN_QUALITY"],
    max_quality: int = IMAGE_SETTINGS["MAX_QUALITY"],
) -> int:
    """
    Validates and clamps quality value to acceptable range.

    Args:
        quality: Requested quality (1-100)
        min_quality: Minimum acceptable quality
        max_quality: Maximum acceptable quality

    Returns:
        int: Clamped quality value
    """
    original_quality = quality
    quality = max(min_quality, min(quality, max_quality))

    if quality != original_quality:
        logger.info(
            f"Adjusted quality from {original_quality} to {quality} "
            f"(min={min_quality}, max={max_quality})"
        )

    return quality


def validate_delay(delay: Optional[float]) -> float:
    """
    Validates a pre-capture delay in seconds.

    Raises:
        ValueError: If the delay is outside 0..MAX_DELAY
    """
    if delay is None:
        return 0.0
    max_delay = CAPTURE_SETTINGS["MAX_DELAY"]
    if delay < 0 or delay > max_delay:
        raise ValueError(f"Delay must be between 0 and {max_delay} seconds, got {delay}")
    return float(delay)


def validate_resize(resize: Optional[int]) -> Optional[int]:
    """
    Validates a maximum dimension.

    Raises:
        ValueError: If the value is not a positive integer
    """
    if resize is None or resize == 0:
        return None
    if resize < 1:
        raise ValueError(f"Resize must be a positive number of pixels, got {resize}")
    return int(resize)


def validate_format(fmt: str) -> str:
    """
    Normalises an output format name.

    Raises:
        ValueError: If the format is not supported
    """
    normalised = (fmt or IMAGE_SETTINGS["DEFAULT_FORMAT"]).lower()
    if normalised == "jpg":
        normalised = "jpeg"
    if normalised not in IMAGE_SETTINGS["FORMATS"]:
        valid = ", ".join(IMAGE_SETTINGS["FORMATS"])
        raise ValueError(f"Format must be one of {valid}, got {fmt}")
    return normalised


def truncate_large_value(value: Any, max_str_len: int = LOG_MAX_STR_LEN) -> Any:
    """
    Truncates large string values for logging purposes.
    """
    if isinstance(value, str) and len(value) > max_str_len:
        return f"{value[:max_str_len]}... [truncated, {len(value)} chars total]"
    return value
