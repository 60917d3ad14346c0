#!/usr/bin/env python3
"""
Unit tests for cli/cli.py, cli/formatters.py and cli/schemas.py
"""

import json
import os
import sys
import unittest
from io import StringIO
from unittest.mock import patch

from loguru import logger
from rich.console import Console
from typer.testing import CliRunner

# Add src directory to path to import module
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from screen_vision.cli.cli import app
from screen_vision.cli.formatters import (
    print_capture_result,
    print_error,
    print_info,
    print_monitors_table,
    print_warning,
)
from screen_vision.cli.schemas import (
    format_cli_response,
)
from screen_vision.core.errors import InvalidRegionError
from screen_vision.core.monitors import MonitorRecord


MONITORS = [
    MonitorRecord(id=2, name="Display 2", is_primary=False, x=-1920, y=0, width=1920, height=1080, position="left"),
    MonitorRecord(id=1, name="Display 1", is_primary=True, x=0, y=0, width=2560, height=1440, position="center"),
]


class TestCliFormatters(unittest.TestCase):
    """Test cases for rich formatters"""

    def setUp(self):
        self.console_output = StringIO()
        patcher = patch('screen_vision.cli.formatters.console', Console(file=self.console_output, width=200))
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_print_error(self):
        print_error("Test error")
        output = self.console_output.getvalue()
        self.assertIn("Error", output)
        self.assertIn("Test error", output)

    def test_print_warning(self):
        print_warning("Test warning")
        output = self.console_output.getvalue()
        self.assertIn("Warning", output)
        self.assertIn("Test warning", output)

    def test_print_info(self):
        print_info("Test info")
        self.assertIn("Test info", self.console_output.getvalue())

    def test_print_monitors_table(self):
        print_monitors_table(MONITORS)
        output = self.console_output.getvalue()
        self.assertIn("Display 2", output)
        self.assertIn("2560x1440", output)
        self.assertIn("(-1920, 0)", output)

    def test_print_monitors_table_uses_layout_order(self):
        print_monitors_table(list(reversed(MONITORS)))
        output = self.console_output.getvalue()
        self.assertLess(output.index("Display 2"), output.index("Display 1"))
        self.assertIn("Layout (left to right): 2, 1", output)

    def test_print_capture_result(self):
        print_capture_result({
            "file": "/tmp/screen-vision/monitor1_20240101_120000_abc123.png",
            "metadata": {"width": 2560, "height": 1440, "format": "png", "size_bytes": 2048},
            "monitor": MONITORS[1].to_dict(),
            "auto_cleanup": {"cleaned": True, "deleted": [], "count": 10},
        })
        output = self.console_output.getvalue()
        self.assertIn("monitor1_20240101_120000_abc123.png", output)
        self.assertIn("2.0 KB", output)
        self.assertIn("Auto-cleanup deleted 10", output)


class TestCliSchemas(unittest.TestCase):
    """Test cases for CLI response models"""

    def test_format_cli_response(self):
        self.assertEqual(format_cli_response(True, data={"a": 1}), {"success": True, "data": {"a": 1}})
        self.assertEqual(
            format_cli_response(False, error="boom"),
            {"success": False, "error": "boom", "error_type": "error"},
        )
        response = format_cli_response(False, error="bad", error_type="invalid_region", details={"bounds": {}})
        self.assertEqual(response["details"], {"bounds": {}})


class TestCliCommands(unittest.TestCase):
    """Test cases for Typer commands"""

    def setUp(self):
        self.runner = CliRunner()

    def tearDown(self):
        logger.remove()
        logger.add(sys.stderr)

    @patch('screen_vision.cli.cli.enumerate_monitors')
    def test_monitors_json(self, mock_enumerate):
        mock_enumerate.return_value = MONITORS
        result = self.runner.invoke(app, ["--json", "monitors"])

        self.assertEqual(result.exit_code, 0)
        payload = json.loads(result.stdout)
        self.assertTrue(payload["success"])
        self.assertEqual(payload["data"]["layout"], [2, 1])

    @patch('screen_vision.cli.cli.capture_screenshot')
    def test_screenshot_options(self, mock_capture):
        mock_capture.return_value = {"file": "/tmp/x.jpeg", "metadata": {}, "monitor": MONITORS[0].to_dict()}
        result = self.runner.invoke(app, ["--json", "screenshot", "-m", "display2", "-r", "800", "-f", "jpg"])

        self.assertEqual(result.exit_code, 0)
        mock_capture.assert_called_once_with(monitor="display2", resize=800, quality=80, fmt="jpeg")

    @patch('screen_vision.cli.cli.capture_region')
    def test_region_error(self, mock_capture):
        mock_capture.side_effect = InvalidRegionError(0, 0, 100, 100, 80, 80)
        result = self.runner.invoke(app, ["--json", "region", "0", "0", "100", "100"])

        self.assertEqual(result.exit_code, 1)
        payload = json.loads(result.stdout)
        self.assertFalse(payload["success"])
        self.assertEqual(payload["error_type"], "invalid_region")
        self.assertEqual(payload["details"]["bounds"], {"width": 80, "height": 80})

    def test_delay_out_of_range(self):
        result = self.runner.invoke(app, ["screenshot", "--delay", "60"])
        self.assertEqual(result.exit_code, 1)

    def test_version(self):
        result = self.runner.invoke(app, ["--json", "tools", "version"])
        self.assertEqual(result.exit_code, 0)
        self.assertEqual(json.loads(result.stdout)["data"]["name"], "Screen Vision")


if __name__ == "__main__":
    unittest.main()
