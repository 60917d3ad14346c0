#!/usr/bin/env python3
"""
Unit tests for core/utils.py and core/ocr.py
"""

import os
import sys
import tempfile
import unittest
from unittest.mock import patch

from PIL import Image

# Add src directory to path to import module
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from screen_vision.core.ocr import extract_text
from screen_vision.core.utils import (
    truncate_large_value,
    validate_delay,
    validate_format,
    validate_quality,
    validate_resize,
)


class TestCoreUtils(unittest.TestCase):
    """Test cases for core utility functions"""

    def test_validate_quality(self):
        self.assertEqual(validate_quality(50), 50)
        self.assertEqual(validate_quality(0), 1)
        self.assertEqual(validate_quality(150), 100)
        self.assertEqual(validate_quality(20, 30, 70), 30)

    def test_validate_delay(self):
        self.assertEqual(validate_delay(None), 0.0)
        self.assertEqual(validate_delay(30), 30.0)
        with self.assertRaises(ValueError):
            validate_delay(31)
        with self.assertRaises(ValueError):
            validate_delay(-0.5)

    def test_validate_resize(self):
        self.assertIsNone(validate_resize(None))
        self.assertIsNone(validate_resize(0))
        self.assertEqual(validate_resize(1920), 1920)
        with self.assertRaises(ValueError):
            validate_resize(-1)

    def test_validate_format(self):
        self.assertEqual(validate_format("PNG"), "png")
        self.assertEqual(validate_format("jpg"), "jpeg")
        self.assertEqual(validate_format(""), "png")
        with self.assertRaises(ValueError):
            validate_format("bmp")

    def test_truncate_large_value(self):
        self.assertEqual(truncate_large_value("short"), "short")
        self.assertIn("[truncated, 300 chars total]", truncate_large_value("x" * 300))
        self.assertEqual(truncate_large_value(42), 42)


class TestOcr(unittest.TestCase):
    """Test cases for Tesseract text extraction"""

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            extract_text("/nonexistent/capture.png")

    @patch('screen_vision.core.ocr.pytesseract.image_to_data')
    @patch('screen_vision.core.ocr.pytesseract.image_to_string')
    def test_extract_text(self, mock_string, mock_data):
        mock_string.return_value = "  Build failed\n"
        mock_data.return_value = {"conf": ["-1", "90", 80, "n/a"]}

        with tempfile.TemporaryDirectory() as directory:
            path = os.path.join(directory, "capture.png")
            Image.new("RGB", (20, 10), (255, 255, 255)).save(path)
            result = extract_text(path, language="deu")

        self.assertEqual(result, {"text": "Build failed", "confidence": 85.0, "language": "deu"})
        self.assertEqual(mock_string.call_args.kwargs["lang"], "deu")


if __name__ == "__main__":
    unittest.main()
