#!/usr/bin/env python3
"""
Unit tests for core/storage.py and core/lifecycle.py
"""

import os
import sys
import tempfile
import time
import unittest
from unittest.mock import patch

# Add src directory to path to import module
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from screen_vision.core.image_processing import CaptureArtifact
from screen_vision.core.lifecycle import check_and_cleanup_if_needed, should_prune
from screen_vision.core.storage import (
    delete_all_screenshots,
    delete_old_screenshots,
    delete_screenshot,
    generate_filename,
    get_screenshot_dir,
    list_screenshots,
    save_capture,
)


def _touch(directory, name, age_minutes=0):
    path = os.path.join(directory, name)
    with open(path, "wb") as f:
        f.write(b"data")
    if age_minutes:
        stamp = time.time() - age_minutes * 60
        os.utime(path, (stamp, stamp))
    return path


class StorageTestCase(unittest.TestCase):
    """Runs every test against a private capture directory"""

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.directory = self.tmp.name
        self.env = patch.dict(os.environ, {"SCREEN_VISION_DIR": self.directory})
        self.env.start()

    def tearDown(self):
        self.env.stop()
        self.tmp.cleanup()


class TestStorage(StorageTestCase):
    """Test cases for capture file storage"""

    def test_directory_override(self):
        self.assertEqual(get_screenshot_dir(), self.directory)

    def test_default_directory(self):
        with patch.dict(os.environ, {"SCREEN_VISION_DIR": ""}):
            directory = get_screenshot_dir()
        self.assertEqual(directory, os.path.join(tempfile.gettempdir(), "screen-vision"))

    def test_generate_filename(self):
        name = generate_filename("monitor2", "png")
        self.assertTrue(name.startswith("monitor2_"))
        self.assertTrue(name.endswith(".png"))
        self.assertNotEqual(name, generate_filename("monitor2", "png"))

    def test_save_capture(self):
        artifact = CaptureArtifact(data=b"\x89PNG", format="png", width=1, height=1)
        path = save_capture(artifact, "region_0_0_1x1")
        self.assertTrue(path.startswith(self.directory))
        self.assertTrue(os.path.basename(path).startswith("region_0_0_1x1_"))
        with open(path, "rb") as f:
            self.assertEqual(f.read(), b"\x89PNG")

    def test_list_newest_first_and_skips_other_files(self):
        _touch(self.directory, "old.png", age_minutes=30)
        _touch(self.directory, "new.jpeg")
        _touch(self.directory, "notes.txt")
        names = [s.name for s in list_screenshots()]
        self.assertEqual(names, ["new.jpeg", "old.png"])

    def test_delete_screenshot(self):
        path = _touch(self.directory, "a.png")
        self.assertTrue(delete_screenshot(path))
        self.assertFalse(delete_screenshot(path))
        self.assertTrue(delete_screenshot(path, missing_ok=True))

    def test_delete_refuses_files_outside_capture_directory(self):
        with tempfile.TemporaryDirectory() as other:
            outside = _touch(other, "notes.png")
            self.assertFalse(delete_screenshot(outside))
            self.assertTrue(os.path.exists(outside))

        notes = _touch(self.directory, "notes.txt")
        self.assertFalse(delete_screenshot(notes))
        self.assertTrue(os.path.exists(notes))

        escaped = os.path.join(self.directory, "..", os.path.basename(self.directory), "a.png")
        _touch(self.directory, "a.png")
        self.assertTrue(delete_screenshot(escaped))

    def test_delete_all_tolerates_vanished_file(self):
        _touch(self.directory, "a.png")
        _touch(self.directory, "b.png")
        real_remove = os.remove

        def remove(path):
            real_remove(path)
            if path.endswith("b.png"):
                raise FileNotFoundError(path)

        with patch("screen_vision.core.storage.os.remove", side_effect=remove):
            deleted = delete_all_screenshots()
        self.assertEqual(sorted(deleted), ["a.png", "b.png"])
        self.assertEqual(list_screenshots(), [])

    def test_delete_all(self):
        _touch(self.directory, "a.png")
        _touch(self.directory, "b.jpg")
        _touch(self.directory, "keep.txt")
        self.assertEqual(sorted(delete_all_screenshots()), ["a.png", "b.jpg"])
        self.assertEqual(os.listdir(self.directory), ["keep.txt"])

    def test_delete_old(self):
        _touch(self.directory, "old.png", age_minutes=90)
        _touch(self.directory, "new.png")
        self.assertEqual(delete_old_screenshots(60), ["old.png"])
        self.assertEqual([s.name for s in list_screenshots()], ["new.png"])

    def test_to_dict(self):
        _touch(self.directory, "a.png")
        data = list_screenshots()[0].to_dict()
        self.assertEqual(data["name"], "a.png")
        self.assertEqual(data["size"], 4)
        self.assertIsInstance(data["modified"], str)


class TestLifecycle(StorageTestCase):
    """Test cases for the capture retention rule"""

    def test_should_prune(self):
        self.assertFalse(should_prune(9))
        self.assertTrue(should_prune(10))
        self.assertTrue(should_prune(25))
        self.assertTrue(should_prune(3, threshold=3))

    def test_below_threshold_keeps_files(self):
        for i in range(9):
            _touch(self.directory, f"c{i}.png")
        result = check_and_cleanup_if_needed()
        self.assertFalse(result.cleaned)
        self.assertEqual(len(list_screenshots()), 9)

    def test_threshold_deletes_everything(self):
        for i in range(10):
            _touch(self.directory, f"c{i}.png")
        result = check_and_cleanup_if_needed()
        self.assertTrue(result.cleaned)
        self.assertEqual(result.to_dict()["count"], 10)
        self.assertEqual(list_screenshots(), [])

    def test_threshold_tolerates_file_removed_concurrently(self):
        for i in range(10):
            _touch(self.directory, f"c{i}.png")
        real_remove = os.remove

        def remove(path):
            real_remove(path)
            if path.endswith("c3.png"):
                raise FileNotFoundError(path)

        with patch("screen_vision.core.storage.os.remove", side_effect=remove):
            result = check_and_cleanup_if_needed()
        self.assertTrue(result.cleaned)
        self.assertIn("c3.png", result.deleted)
        self.assertEqual(result.to_dict()["count"], 10)
        self.assertEqual(list_screenshots(), [])


if __name__ == "__main__":
    unittest.main()
