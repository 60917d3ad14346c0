#!/usr/bin/env python3
"""
Unit tests for mcp/mcp_tools.py and mcp/mcp_server.py
"""

import asyncio
import os
import sys
import unittest
from unittest.mock import patch

# Add src directory to path to import module
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from screen_vision.mcp.mcp_server import get_server_info, get_tool_schema
from screen_vision.mcp.mcp_tools import create_mcp_server, wait_before_capture


TOOL_NAMES = {
    "list_monitors",
    "screenshot",
    "screenshot_window",
    "screenshot_region",
    "screenshot_active",
    "extract_text",
    "cleanup",
}


class TestMcpTools(unittest.TestCase):
    """Test cases for MCP tool registration"""

    def test_all_tools_registered(self):
        mcp = create_mcp_server()
        tools = asyncio.run(mcp.list_tools())
        self.assertEqual({tool.name for tool in tools}, TOOL_NAMES)

    def test_region_tool_requires_geometry(self):
        schema = get_tool_schema()
        region = schema["functions"]["screenshot_region"]["parameters"]
        self.assertEqual(set(region["required"]), {"x", "y", "width", "height"})
        self.assertIn("monitor", region["properties"])

    def test_server_info_lists_tools(self):
        self.assertEqual(set(get_server_info()["tools"]), TOOL_NAMES)


class TestDelay(unittest.TestCase):
    """Test cases for the async pre-capture delay"""

    def test_invalid_delay_is_reported(self):
        result = asyncio.run(wait_before_capture(45))
        self.assertFalse(result["success"])
        self.assertEqual(result["error_type"], "invalid_argument")

        result = asyncio.run(wait_before_capture(-1))
        self.assertEqual(result["error_type"], "invalid_argument")

    @patch('screen_vision.mcp.mcp_tools.asyncio.sleep')
    def test_valid_delay_sleeps(self, mock_sleep):
        self.assertIsNone(asyncio.run(wait_before_capture(2.5)))
        mock_sleep.assert_called_once_with(2.5)

    @patch('screen_vision.mcp.mcp_tools.asyncio.sleep')
    def test_no_delay_does_not_sleep(self, mock_sleep):
        self.assertIsNone(asyncio.run(wait_before_capture(None)))
        self.assertIsNone(asyncio.run(wait_before_capture(0)))
        mock_sleep.assert_not_called()


if __name__ == "__main__":
    unittest.main()
