"""
Tests for the static image reader.
"""

import shutil
import tempfile
import unittest
from pathlib import Path

from PIL import Image

from ..sources.static_image import read_static_image, read_image_size, STATIC_FRAME_DURATION
from ..sources.base import ReadError, Rect


class TestStaticImageReader(unittest.TestCase):
    """Test cases for reading static image headers."""

    def setUp(self):
        self.temp_dir = Path(tempfile.mkdtemp())

    def tearDown(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def create_test_image(self, name: str, size: tuple, format: str = 'PNG') -> Path:
        path = self.temp_dir / name
        mode = 'RGBA' if format == 'PNG' else 'RGB'
        Image.new(mode, size, (255, 0, 0, 255) if mode == 'RGBA' else (255, 0, 0)).save(path, format=format)
        return path

    def test_single_frame_covers_image(self):
        """A 32x32 image becomes one frame at the origin lasting one second."""
        path = self.create_test_image("rock.png", (32, 32))

        frame = read_static_image(path)

        self.assertEqual(frame.rect, Rect(0, 0, 32, 32))
        self.assertEqual(frame.duration, 1000)
        self.assertEqual(STATIC_FRAME_DURATION, 1000)

    def test_non_square_size(self):
        path = self.create_test_image("banner.png", (120, 40))

        self.assertEqual(read_image_size(path), (120, 40))

    def test_custom_duration(self):
        path = self.create_test_image("rock.png", (8, 8))

        frame = read_static_image(path, duration=250)

        self.assertEqual(frame.duration, 250)

    def test_missing_file(self):
        missing = self.temp_dir / "missing.png"

        with self.assertRaises(ReadError) as ctx:
            read_static_image(missing)

        self.assertEqual(ctx.exception.path, missing)

    def test_undecodable_file(self):
        path = self.temp_dir / "garbage.png"
        path.write_bytes(b"definitely not an image")

        with self.assertRaises(ReadError) as ctx:
            read_static_image(path)

        self.assertIn("garbage.png", str(ctx.exception))

    def test_non_png_rejected_by_default(self):
        path = self.create_test_image("photo.jpg", (10, 10), format='JPEG')

        with self.assertRaises(ReadError) as ctx:
            read_static_image(path)

        self.assertIn("JPEG", str(ctx.exception))

    def test_non_png_allowed_when_not_required(self):
        path = self.create_test_image("photo.jpg", (10, 12), format='JPEG')

        frame = read_static_image(path, require_png=False)

        self.assertEqual(frame.rect, Rect(0, 0, 10, 12))


if __name__ == '__main__':
    unittest.main()
