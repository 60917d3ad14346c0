"""
Exception types raised by the Screen Vision core.

The MCP and CLI layers catch these and turn them into structured failure
responses; nothing here should reach the user as a traceback.
"""

from typing import Any, Dict, List, Optional


class ScreenVisionError(Exception):
    """Base class for all core failures."""

    error_type = "error"

    def to_dict(self) -> Dict[str, Any]:
        return {"error": str(self), "error_type": self.error_type}


class MonitorNotFoundError(ScreenVisionError):
    """An identifier did not resolve to any enumerated monitor."""

    error_type = "not_found"

    def __init__(
        self,
        identifier: Any,
        available: Optional[List[Dict[str, Any]]] = None,
        listing: Optional[str] = None,
    ):
        self.identifier = identifier
        self.available = available or []
        listing = listing or "none"
        super().__init__(f'Monitor "{identifier}" not found. Available monitors: {listing}')

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["available_monitors"] = self.available
        return data


class WindowNotFoundError(ScreenVisionError):
    """No focused window, or the focused window does not match the requested title."""

    error_type = "not_found"

    def __init__(self, message: str, active_title: Optional[str] = None):
        self.active_title = active_title
        super().__init__(message)


class InvalidRegionError(ScreenVisionError):
    """An explicit region request does not fit inside its monitor."""

    error_type = "invalid_region"

    def __init__(self, x: int, y: int, width: int, height: int, bound_width: int, bound_height: int):
        self.region = {"x": x, "y": y, "width": width, "height": height}
        self.bounds = {"width": bound_width, "height": bound_height}
        super().__init__(
            f"Region ({x}, {y}, {width}x{height}) exceeds monitor bounds "
            f"({bound_width}x{bound_height}). Please adjust the coordinates."
        )

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["region"] = self.region
        data["bounds"] = self.bounds
        return data


class CaptureError(ScreenVisionError):
    """The platform produced no frame for a monitor."""

    error_type = "capture_failed"


class EncodeError(ScreenVisionError):
    """Pillow could not encode the processed bitmap."""

    error_type = "encode_failed"
