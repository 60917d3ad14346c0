#!/usr/bin/env python3
"""
Unit tests for core/display_settings.py
"""

import json
import os
import subprocess
import sys
import unittest
from unittest.mock import patch, MagicMock

# Add src directory to path to import module
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from screen_vision.core.display_settings import (
    DisplaySetting,
    parse_display_number,
    parse_display_settings,
    query_display_settings,
    settings_by_origin,
)


TWO_SCREENS = json.dumps([
    {"DeviceName": "\\\\.\\DISPLAY1", "X": 0, "Y": 0, "Width": 2560, "Height": 1440, "Primary": True},
    {"DeviceName": "\\\\.\\DISPLAY2", "X": -1920, "Y": 0, "Width": 1920, "Height": 1080, "Primary": False},
])


class TestParseDisplaySettings(unittest.TestCase):
    """Test cases for parsing the PowerShell payload"""

    def test_parse_display_number(self):
        self.assertEqual(parse_display_number("\\\\.\\DISPLAY2"), 2)
        self.assertEqual(parse_display_number("\\\\.\\display12"), 12)
        self.assertIsNone(parse_display_number("HDMI-1"))
        self.assertIsNone(parse_display_number(""))

    def test_parse_list(self):
        settings = parse_display_settings(TWO_SCREENS)
        self.assertEqual(len(settings), 2)
        self.assertEqual(settings[1], DisplaySetting(
            number=2, x=-1920, y=0, width=1920, height=1080, is_primary=False, device_name="\\\\.\\DISPLAY2"
        ))

    def test_parse_single_object(self):
        payload = json.dumps({"DeviceName": "\\\\.\\DISPLAY1", "X": 0, "Y": 0, "Width": 1920, "Height": 1080, "Primary": True})
        settings = parse_display_settings(payload)
        self.assertEqual(len(settings), 1)
        self.assertTrue(settings[0].is_primary)

    def test_parse_rejects_bad_shapes(self):
        with self.assertRaises(ValueError):
            parse_display_settings("42")
        with self.assertRaises(ValueError):
            parse_display_settings(json.dumps([{"DeviceName": "HDMI-1", "X": 0, "Y": 0, "Width": 1, "Height": 1}]))
        with self.assertRaises(ValueError):
            parse_display_settings("not json")

    def test_settings_by_origin(self):
        index = settings_by_origin(parse_display_settings(TWO_SCREENS))
        self.assertEqual(index[(-1920, 0)].number, 2)


class TestQueryDisplaySettings(unittest.TestCase):
    """Test cases for the platform query and its degraded paths"""

    def test_unsupported_platform(self):
        with patch('screen_vision.core.display_settings.sys.platform', 'linux'):
            self.assertIsNone(query_display_settings())

    @patch('screen_vision.core.display_settings.subprocess.run')
    def test_success(self, mock_run):
        mock_run.return_value = MagicMock(returncode=0, stdout=TWO_SCREENS, stderr="")
        with patch('screen_vision.core.display_settings.sys.platform', 'win32'):
            settings = query_display_settings(timeout=1.5)
        self.assertEqual([s.number for s in settings], [1, 2])
        self.assertEqual(mock_run.call_args.kwargs["timeout"], 1.5)

    @patch('screen_vision.core.display_settings.subprocess.run')
    def test_timeout_degrades(self, mock_run):
        mock_run.side_effect = subprocess.TimeoutExpired(cmd="powershell", timeout=5)
        with patch('screen_vision.core.display_settings.sys.platform', 'win32'):
            self.assertIsNone(query_display_settings())

    @patch('screen_vision.core.display_settings.subprocess.run')
    def test_missing_powershell_degrades(self, mock_run):
        mock_run.side_effect = FileNotFoundError("powershell")
        with patch('screen_vision.core.display_settings.sys.platform', 'win32'):
            self.assertIsNone(query_display_settings())

    @patch('screen_vision.core.display_settings.subprocess.run')
    def test_failed_or_malformed_output_degrades(self, mock_run):
        with patch('screen_vision.core.display_settings.sys.platform', 'win32'):
            mock_run.return_value = MagicMock(returncode=1, stdout="", stderr="access denied")
            self.assertIsNone(query_display_settings())

            mock_run.return_value = MagicMock(returncode=0, stdout="{broken", stderr="")
            self.assertIsNone(query_display_settings())

            mock_run.return_value = MagicMock(returncode=0, stdout='["x"]', stderr="")
            self.assertIsNone(query_display_settings())


if __name__ == "__main__":
    unittest.main()
