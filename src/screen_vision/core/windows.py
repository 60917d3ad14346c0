#!/usr/bin/env python3
"""
Active Window Locator

Reports the currently focused window: title, owning process and bounds in
the global desktop coordinate space (the same space as monitor origins).

Only the focused window is observable. There is no full window
enumeration, so title based captures require the target window to be
focused first.

Backends:
- Windows: pywin32 (win32gui / win32process / win32api)
- macOS: PyObjC (AppKit / Quartz)

A missing backend, an unfocused desktop or any platform error yields None;
callers report that as "no window focused".

This module is part of the Core Layer.

Sample input:
- get_active_window()

Expected output:
- WindowSnapshot(title='main.py - Visual Studio Code', owner_name='Code.exe', ...)
"""

import os
import re
import sys
from dataclasses import dataclass
from typing import Any, Dict, Optional

from loguru import logger

from screen_vision.core.constants import CAPTURE_SETTINGS
from screen_vision.core.geometry import Rect

# OpenProcess access rights needed to read the executable path
_PROCESS_QUERY_LIMITED_INFORMATION = 0x1000
_PROCESS_VM_READ = 0x0010


@dataclass(frozen=True)
class WindowSnapshot:
    """Point-in-time description of the focused window."""

    title: str
    owner_name: str
    owner_process_id: int
    bounds: Rect
    owner_path: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "owner": {
                "name": self.owner_name,
                "process_id": self.owner_process_id,
                "path": self.owner_path,
            },
            "bounds": self.bounds.to_dict(),
        }


def _active_window_windows() -> Optional[WindowSnapshot]:
    import win32api
    import win32gui
    import win32process

    hwnd = win32gui.GetForegroundWindow()
    if not hwnd:
        return None

    title = win32gui.GetWindowText(hwnd)
    left, top, right, bottom = win32gui.GetWindowRect(hwnd)
    _, pid = win32process.GetWindowThreadProcessId(hwnd)

    owner_path = None
    try:
        handle = win32api.OpenProcess(_PROCESS_QUERY_LIMITED_INFORMATION | _PROCESS_VM_READ, False, pid)
        try:
            owner_path = win32process.GetModuleFileNameEx(handle, 0)
        finally:
            win32api.CloseHandle(handle)
    except win32api.error as e:
        # Elevated processes refuse the query; title and bounds are still valid
        logger.debug(f"Could not read executable path for pid {pid}: {e}")

    owner_name = os.path.basename(owner_path) if owner_path else ""
    return WindowSnapshot(
        title=title,
        owner_name=owner_name,
        owner_process_id=int(pid),
        bounds=Rect(left, top, right - left, bottom - top),
        owner_path=owner_path,
    )


def _active_window_macos() -> Optional[WindowSnapshot]:
    from AppKit import NSWorkspace
    from Quartz import (
        CGWindowListCopyWindowInfo,
        kCGNullWindowID,
        kCGWindowListExcludeDesktopElements,
        kCGWindowListOptionOnScreenOnly,
    )

    active_app = NSWorkspace.sharedWorkspace().frontmostApplication()
    if not active_app:
        return None

    app_pid = active_app.processIdentifier()
    options = kCGWindowListOptionOnScreenOnly | kCGWindowListExcludeDesktopElements
    window_list = CGWindowListCopyWindowInfo(options, kCGNullWindowID) or []

    # Front-to-back order, so the first normal-layer window of the app is focused
    for window in window_list:
        if window.get("kCGWindowOwnerPID") != app_pid or window.get("kCGWindowLayer", 0) != 0:
            continue
        bounds = window.get("kCGWindowBounds", {})
        if not bounds:
            continue
        bundle_url = active_app.bundleURL()
        return WindowSnapshot(
            title=str(window.get("kCGWindowName") or ""),
            owner_name=str(window.get("kCGWindowOwnerName") or active_app.localizedName() or ""),
            owner_process_id=int(app_pid),
            bounds=Rect(
                int(bounds.get("X", 0)),
                int(bounds.get("Y", 0)),
                int(bounds.get("Width", 0)),
                int(bounds.get("Height", 0)),
            ),
            owner_path=str(bundle_url.path()) if bundle_url else None,
        )

    return None


def get_active_window() -> Optional[WindowSnapshot]:
    """
    Get the currently focused window.

    Returns:
        Optional[WindowSnapshot]: The focused window, or None if nothing is
            focused or the platform query failed
    """
    if sys.platform.startswith("win"):
        backend = _active_window_windows
    elif sys.platform == "darwin":
        backend = _active_window_macos
    else:
        logger.debug(f"Active window query not supported on {sys.platform}")
        return None

    try:
        snapshot = backend()
    except ImportError as e:
        logger.debug(f"Active window backend not installed: {str(e)}")
        return None
    except Exception as e:
        logger.warning(f"Active window query failed: {str(e)}")
        return None

    if snapshot is None:
        logger.info("No focused window detected")
    else:
        logger.info(f"Active window: {snapshot.title!r} ({snapshot.owner_name}) at {snapshot.bounds}")
    return snapshot


def matches_title(snapshot: WindowSnapshot, query_title: str) -> bool:
    """Case-insensitive substring match of ``query_title`` in the window title."""
    return query_title.lower() in snapshot.title.lower()


def safe_title(title: str, limit: int = CAPTURE_SETTINGS["TITLE_FRAGMENT_LENGTH"]) -> str:
    """Filename-safe fragment of a window title."""
    return re.sub(r"[^a-z0-9]", "_", title, flags=re.IGNORECASE)[:limit]
