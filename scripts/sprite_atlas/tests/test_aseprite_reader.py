"""
Tests for the Aseprite sprite-sheet reader.
"""

import json
import shutil
import tempfile
import unittest
from pathlib import Path

from ..sources.aseprite import read_sprite_sheet, parse_sprite_sheet
from ..sources.base import ParseError, ReadError, Rect, SourceTag


def make_document(frame_count: int = 4, tags=None, image: str = "hero.png") -> dict:
    """Build an Aseprite array-style export with frames laid out in one row."""
    return {
        "frames": [
            {
                "filename": f"hero {i}.aseprite",
                "frame": {"x": i * 16, "y": 0, "w": 16, "h": 24},
                "rotated": False,
                "trimmed": False,
                "duration": 100 + i,
            }
            for i in range(frame_count)
        ],
        "meta": {
            "app": "https://www.aseprite.org/",
            "image": image,
            "size": {"w": frame_count * 16, "h": 24},
            "frameTags": tags if tags is not None else [],
        },
    }


class TestReadSpriteSheet(unittest.TestCase):
    """Test cases for read_sprite_sheet."""

    def setUp(self):
        self.temp_dir = Path(tempfile.mkdtemp())

    def tearDown(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def write_json(self, name: str, document) -> Path:
        path = self.temp_dir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(document), encoding="utf-8")
        return path

    def test_reads_frames_in_order(self):
        """Frames keep source order, rectangles and durations."""
        path = self.write_json("hero.json", make_document(3))

        data = read_sprite_sheet(path)

        self.assertEqual(data.frame_count, 3)
        self.assertEqual(data.frames[0].rect, Rect(0, 0, 16, 24))
        self.assertEqual(data.frames[2].rect, Rect(32, 0, 16, 24))
        self.assertEqual([f.duration for f in data.frames], [100, 101, 102])

    def test_reads_all_tags(self):
        """Every tag is returned, including ones without the animation prefix."""
        tags = [
            {"name": "a_walk", "from": 0, "to": 3, "direction": "forward"},
            {"name": "notes", "from": 1, "to": 1, "direction": "forward"},
        ]
        path = self.write_json("hero.json", make_document(4, tags))

        data = read_sprite_sheet(path)

        self.assertEqual(data.tags, [SourceTag("a_walk", 0, 3), SourceTag("notes", 1, 1)])

    def test_image_path_relative_to_data_file(self):
        """The companion image resolves against the metadata file's directory."""
        path = self.write_json("sprites/hero.json", make_document(1, image="sheets/hero.png"))

        data = read_sprite_sheet(path)

        self.assertEqual(data.image_path, self.temp_dir / "sprites" / "sheets" / "hero.png")

    def test_hash_frames_layout(self):
        """Hash exports keep the object's key order as frame order."""
        document = make_document(0)
        document["frames"] = {
            "hero 0.aseprite": {"frame": {"x": 0, "y": 0, "w": 8, "h": 8}, "duration": 50},
            "hero 1.aseprite": {"frame": {"x": 8, "y": 0, "w": 8, "h": 8}, "duration": 60},
        }
        path = self.write_json("hero.json", document)

        data = read_sprite_sheet(path)

        self.assertEqual([f.rect.x for f in data.frames], [0, 8])
        self.assertEqual([f.duration for f in data.frames], [50, 60])

    def test_missing_file_raises_read_error(self):
        missing = self.temp_dir / "missing.json"

        with self.assertRaises(ReadError) as ctx:
            read_sprite_sheet(missing)

        self.assertEqual(ctx.exception.path, missing)
        self.assertIn("missing.json", str(ctx.exception))

    def test_invalid_json_raises_parse_error(self):
        path = self.temp_dir / "broken.json"
        path.write_text("{ not json", encoding="utf-8")

        with self.assertRaises(ParseError) as ctx:
            read_sprite_sheet(path)

        self.assertIn("broken.json", str(ctx.exception))


class TestParseSpriteSheet(unittest.TestCase):
    """Schema checks of parse_sprite_sheet."""

    def setUp(self):
        self.path = Path("/sheets/hero.json")

    def test_missing_frame_tags(self):
        document = make_document(1)
        del document["meta"]["frameTags"]

        with self.assertRaises(ParseError) as ctx:
            parse_sprite_sheet(document, self.path)

        self.assertIn("frameTags", str(ctx.exception))

    def test_empty_frame_tags_allowed(self):
        data = parse_sprite_sheet(make_document(1, tags=[]), self.path)
        self.assertEqual(data.tags, [])

    def test_missing_rect_field(self):
        document = make_document(2)
        del document["frames"][1]["frame"]["h"]

        with self.assertRaises(ParseError) as ctx:
            parse_sprite_sheet(document, self.path)

        self.assertIn("frames[1].frame", str(ctx.exception))

    def test_negative_duration_rejected(self):
        document = make_document(1)
        document["frames"][0]["duration"] = -5

        with self.assertRaises(ParseError):
            parse_sprite_sheet(document, self.path)

    def test_boolean_is_not_an_integer(self):
        document = make_document(1)
        document["frames"][0]["frame"]["x"] = True

        with self.assertRaises(ParseError):
            parse_sprite_sheet(document, self.path)

    def test_negative_tag_bound_rejected(self):
        document = make_document(2, tags=[{"name": "a_walk", "from": -1, "to": 1}])

        with self.assertRaises(ParseError):
            parse_sprite_sheet(document, self.path)

    def test_non_object_document(self):
        with self.assertRaises(ParseError):
            parse_sprite_sheet([1, 2, 3], self.path)

    def test_missing_image(self):
        document = make_document(1)
        del document["meta"]["image"]

        with self.assertRaises(ParseError) as ctx:
            parse_sprite_sheet(document, self.path)

        self.assertIn("image", str(ctx.exception))


if __name__ == '__main__':
    unittest.main()
