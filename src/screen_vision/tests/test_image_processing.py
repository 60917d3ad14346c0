#!/usr/bin/env python3
"""
Unit tests for core/image_processing.py
"""

import io
import os
import sys
import unittest

from PIL import Image

# Add src directory to path to import module
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from screen_vision.core.errors import EncodeError
from screen_vision.core.geometry import Rect
from screen_vision.core.image_processing import (
    encode_image,
    ensure_rgb,
    png_compression_level,
    process_image,
    resize_if_needed,
    scaled_size,
)


class TestPngCompressionLevel(unittest.TestCase):
    """Test cases for the quality to PNG level mapping"""

    def test_known_values(self):
        self.assertEqual(png_compression_level(80), 2)
        self.assertEqual(png_compression_level(100), 0)
        self.assertEqual(png_compression_level(1), 9)
        self.assertEqual(png_compression_level(50), 5)

    def test_monotonic_and_bounded(self):
        levels = [png_compression_level(q) for q in range(1, 101)]
        self.assertTrue(all(0 <= level <= 9 for level in levels))
        self.assertEqual(levels, sorted(levels, reverse=True))


class TestResize(unittest.TestCase):
    """Test cases for max-dimension resizing"""

    def test_scaled_size(self):
        self.assertEqual(scaled_size(3840, 2160, 1920), (1920, 1080))
        self.assertEqual(scaled_size(1080, 1920, 960), (540, 960))
        self.assertEqual(scaled_size(800, 600, 1920), (800, 600))

    def test_longer_side_fits(self):
        img = Image.new("RGB", (3000, 1000))
        resized = resize_if_needed(img, 1500)
        self.assertEqual(resized.size, (1500, 500))

    def test_never_upscales(self):
        img = Image.new("RGB", (640, 480))
        self.assertIs(resize_if_needed(img, 1920), img)

    def test_idempotent(self):
        img = Image.new("RGB", (2561, 1441))
        once = resize_if_needed(img, 1000)
        twice = resize_if_needed(once, 1000)
        self.assertEqual(once.size, twice.size)

    def test_no_limit(self):
        img = Image.new("RGB", (100, 100))
        self.assertIs(resize_if_needed(img, None), img)
        self.assertIs(resize_if_needed(img, 0), img)


class TestEncode(unittest.TestCase):
    """Test cases for PNG and JPEG encoding"""

    def test_png(self):
        artifact = encode_image(Image.new("RGB", (40, 30), (255, 0, 0)), "png", 80)
        self.assertEqual(artifact.format, "png")
        self.assertEqual(artifact.mime_type, "image/png")
        self.assertEqual((artifact.width, artifact.height), (40, 30))
        with Image.open(io.BytesIO(artifact.data)) as decoded:
            self.assertEqual(decoded.format, "PNG")
            self.assertEqual(decoded.getpixel((0, 0)), (255, 0, 0))

    def test_jpeg_alias_and_rgba(self):
        artifact = encode_image(Image.new("RGBA", (40, 30), (0, 0, 255, 128)), "jpg", 50)
        self.assertEqual(artifact.format, "jpeg")
        self.assertEqual(artifact.mime_type, "image/jpeg")
        with Image.open(io.BytesIO(artifact.data)) as decoded:
            self.assertEqual(decoded.format, "JPEG")

    def test_unknown_format(self):
        with self.assertRaises(EncodeError):
            encode_image(Image.new("RGB", (10, 10)), "gif", 80)

    def test_ensure_rgb(self):
        self.assertEqual(ensure_rgb(Image.new("RGBA", (5, 5))).mode, "RGB")
        self.assertEqual(ensure_rgb(Image.new("L", (5, 5))).mode, "RGB")


class TestProcessImage(unittest.TestCase):
    """Test cases for the crop, resize and encode pipeline"""

    def test_crop_then_resize(self):
        img = Image.new("RGB", (3840, 2160))
        artifact, metadata = process_image(img, crop=Rect(100, 100, 1600, 900), resize=800, quality=80, fmt="png")
        self.assertEqual((artifact.width, artifact.height), (800, 450))
        self.assertEqual(metadata["original_size"], [3840, 2160])
        self.assertTrue(metadata["cropped"])
        self.assertEqual(metadata["crop"], {"x": 100, "y": 100, "width": 1600, "height": 900})
        self.assertEqual(metadata["png_compression_level"], 2)

    def test_full_frame(self):
        artifact, metadata = process_image(Image.new("RGB", (320, 200)), fmt="jpeg", quality=60)
        self.assertEqual((artifact.width, artifact.height), (320, 200))
        self.assertFalse(metadata["cropped"])
        self.assertIsNone(metadata["crop"])
        self.assertNotIn("png_compression_level", metadata)
        self.assertEqual(metadata["size_bytes"], len(artifact.data))


if __name__ == "__main__":
    unittest.main()
