#!/usr/bin/env python3
"""
Capture File Storage

Persists encoded captures to a single directory (system temp dir by
default, or SCREEN_VISION_DIR) and lists or deletes them again.

Requests may run concurrently, so a file can disappear between listing
and deleting or stat-ing it. That is treated as already deleted.

This module is part of the Core Layer.

Sample input:
- save_capture(artifact, prefix="monitor2")

Expected output:
- "/tmp/screen-vision/monitor2_20261017_150102_k3j9xq.png"
"""

import os
import random
import string
import tempfile
import time
from dataclasses import dataclass, asdict
from datetime import datetime
from typing import Any, Dict, List, Optional

from loguru import logger

from screen_vision.core.constants import STORAGE_SETTINGS
from screen_vision.core.image_processing import CaptureArtifact


@dataclass
class ScreenshotFile:
    name: str
    path: str
    size: int
    modified: float

    @property
    def age_minutes(self) -> int:
        return round((time.time() - self.modified) / 60)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["modified"] = datetime.fromtimestamp(self.modified).isoformat()
        return data


def get_screenshot_dir() -> str:
    """
    Get the capture directory, creating it if needed.

    Returns:
        str: Absolute directory path
    """
    directory = os.environ.get(STORAGE_SETTINGS["DIR_ENV_VAR"]) or os.path.join(
        tempfile.gettempdir(), STORAGE_SETTINGS["DIR_NAME"]
    )
    os.makedirs(directory, exist_ok=True)
    return directory


def is_capture_file(filename: str) -> bool:
    return filename.lower().endswith(STORAGE_SETTINGS["EXTENSIONS"])


def generate_filename(prefix: str = "screenshot", extension: str = "png") -> str:
    """
    Generates a unique filename with timestamp and random suffix.

    Args:
        prefix: Filename prefix
        extension: File extension without dot

    Returns:
        str: Generated filename
    """
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=6))
    return f"{prefix}_{timestamp}_{suffix}.{extension}"


def get_screenshot_path(prefix: str = "screenshot", extension: str = "png") -> str:
    return os.path.join(get_screenshot_dir(), generate_filename(prefix, extension))


def save_capture(artifact: CaptureArtifact, prefix: str = "screenshot") -> str:
    """
    Write an encoded capture to the capture directory.

    Args:
        artifact: Encoded capture
        prefix: Filename prefix describing the capture

    Returns:
        str: Path of the written file
    """
    path = get_screenshot_path(prefix, artifact.format)
    with open(path, "wb") as f:
        f.write(artifact.data)
    logger.info(f"Saved {artifact.width}x{artifact.height} {artifact.format} capture to {path}")
    return path


def is_managed_capture(path: str, directory: Optional[str] = None) -> bool:
    """True when ``path`` is a capture file directly inside the capture directory."""
    directory = directory or get_screenshot_dir()
    resolved = os.path.realpath(path)
    return (
        os.path.dirname(resolved) == os.path.realpath(directory)
        and is_capture_file(os.path.basename(resolved))
    )


def delete_screenshot(path: str, directory: Optional[str] = None, missing_ok: bool = False) -> bool:
    """
    Delete one capture file.

    Paths outside the capture directory, or that are not capture files,
    are refused.

    Args:
        path: File to delete
        directory: Capture directory, defaults to the configured one
        missing_ok: Count a file that is already gone as deleted

    Returns:
        bool: True if the file is gone because of this call
    """
    if not is_managed_capture(path, directory):
        logger.warning(f"Refusing to delete {path}: not a capture file in the capture directory")
        return False
    try:
        os.remove(path)
        return True
    except FileNotFoundError:
        return missing_ok
    except OSError as e:
        logger.warning(f"Could not delete {path}: {str(e)}")
        return False


def list_screenshots(directory: Optional[str] = None) -> List[ScreenshotFile]:
    """
    List capture files, newest first.

    Args:
        directory: Directory to scan, defaults to the capture directory

    Returns:
        List[ScreenshotFile]: Capture files with size and modification time
    """
    directory = directory or get_screenshot_dir()
    if not os.path.isdir(directory):
        return []

    files = []
    for name in os.listdir(directory):
        if not is_capture_file(name):
            continue
        path = os.path.join(directory, name)
        try:
            stats = os.stat(path)
        except FileNotFoundError:
            continue
        files.append(ScreenshotFile(name=name, path=path, size=stats.st_size, modified=stats.st_mtime))

    return sorted(files, key=lambda f: f.modified, reverse=True)


def delete_all_screenshots(directory: Optional[str] = None) -> List[str]:
    """
    Delete every capture file.

    Returns:
        List[str]: Names of the files removed
    """
    deleted = []
    for entry in list_screenshots(directory):
        if delete_screenshot(entry.path, directory, missing_ok=True):
            deleted.append(entry.name)
    logger.info(f"Deleted {len(deleted)} capture file(s)")
    return deleted


def delete_old_screenshots(older_than_minutes: float, directory: Optional[str] = None) -> List[str]:
    """
    Delete capture files older than a number of minutes.

    Returns:
        List[str]: Names of the files removed
    """
    cutoff = time.time() - older_than_minutes * 60
    deleted = []
    for entry in list_screenshots(directory):
        if entry.modified < cutoff and delete_screenshot(entry.path, directory, missing_ok=True):
            deleted.append(entry.name)
    logger.info(f"Deleted {len(deleted)} capture file(s) older than {older_than_minutes} minutes")
    return deleted
