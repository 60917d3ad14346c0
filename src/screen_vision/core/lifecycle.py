"""
Capture retention rule.

After a successful capture, if the capture directory holds at least
AUTO_CLEANUP_THRESHOLD files, every capture file is deleted. This is an
all-or-nothing rule, not LRU eviction; the deletion count is always
reported back to the caller.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from loguru import logger

from screen_vision.core.constants import CAPTURE_SETTINGS
from screen_vision.core.storage import delete_all_screenshots, list_screenshots


@dataclass
class CleanupResult:
    cleaned: bool = False
    deleted: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"cleaned": self.cleaned, "deleted": self.deleted, "count": len(self.deleted)}


def should_prune(file_count: int, threshold: int = CAPTURE_SETTINGS["AUTO_CLEANUP_THRESHOLD"]) -> bool:
    return file_count >= threshold


def check_and_cleanup_if_needed(
    directory: Optional[str] = None,
    threshold: int = CAPTURE_SETTINGS["AUTO_CLEANUP_THRESHOLD"],
) -> CleanupResult:
    """
    Apply the retention rule to the capture directory.

    Args:
        directory: Directory to check, defaults to the capture directory
        threshold: File count at which everything is deleted

    Returns:
        CleanupResult: Whether pruning happened and which files went
    """
    count = len(list_screenshots(directory))
    if not should_prune(count, threshold):
        return CleanupResult()

    deleted = delete_all_screenshots(directory)
    logger.info(f"Auto-cleanup: {count} captures reached limit of {threshold}, deleted {len(deleted)}")
    return CleanupResult(cleaned=True, deleted=deleted)
