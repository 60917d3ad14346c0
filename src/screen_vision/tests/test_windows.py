#!/usr/bin/env python3
"""
Unit tests for core/windows.py
"""

import os
import sys
import unittest
from unittest.mock import patch

# Add src directory to path to import module
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from screen_vision.core.geometry import Rect
from screen_vision.core.windows import (
    WindowSnapshot,
    get_active_window,
    matches_title,
    safe_title,
)


SNAPSHOT = WindowSnapshot(
    title="main.py - Visual Studio Code",
    owner_name="Code",
    owner_process_id=4242,
    bounds=Rect(100, 50, 1200, 800),
    owner_path="/Applications/Visual Studio Code.app",
)


class TestWindows(unittest.TestCase):
    """Test cases for active window helpers"""

    def test_matches_title_is_case_insensitive_substring(self):
        self.assertTrue(matches_title(SNAPSHOT, "visual studio"))
        self.assertTrue(matches_title(SNAPSHOT, "MAIN.PY"))
        self.assertFalse(matches_title(SNAPSHOT, "Firefox"))

    def test_safe_title(self):
        self.assertEqual(safe_title("Visual Studio Code"), "Visual_Studio_Code")
        self.assertEqual(safe_title("a/b:c*d"), "a_b_c_d")
        self.assertEqual(len(safe_title("x" * 50)), 20)

    def test_to_dict(self):
        data = SNAPSHOT.to_dict()
        self.assertEqual(data["title"], SNAPSHOT.title)
        self.assertEqual(data["owner"]["process_id"], 4242)
        self.assertEqual(data["bounds"], {"x": 100, "y": 50, "width": 1200, "height": 800})

    def test_unsupported_platform_returns_none(self):
        with patch('screen_vision.core.windows.sys.platform', 'linux'):
            self.assertIsNone(get_active_window())

    @patch('screen_vision.core.windows._active_window_windows')
    def test_windows_backend(self, mock_backend):
        mock_backend.return_value = SNAPSHOT
        with patch('screen_vision.core.windows.sys.platform', 'win32'):
            self.assertEqual(get_active_window(), SNAPSHOT)

    @patch('screen_vision.core.windows._active_window_macos')
    def test_backend_failures_return_none(self, mock_backend):
        with patch('screen_vision.core.windows.sys.platform', 'darwin'):
            mock_backend.side_effect = ImportError("No module named 'Quartz'")
            self.assertIsNone(get_active_window())

            mock_backend.side_effect = RuntimeError("permission denied")
            self.assertIsNone(get_active_window())


if __name__ == "__main__":
    unittest.main()
