import sys
import tempfile
import textwrap
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "layout"))

from flagview_layout import (
    Color,
    FlagFormatError,
    InvalidColor,
    SizeExpression,
    layout,
    load_flag,
    parse_flag,
)

TRICOLOR = textwrap.dedent(
    """\
    aspect: 3/2
    sections:
      - width: 1/3
        subsections:
          - width: 1
            height: 100%
            color: [0, 85, 164]
      - width: 33.3333%
        subsections:
          - width: 1
            height: 1
            color: "#FFFFFF"
      - width: 0.3333333
        subsections:
          - width: 1
            height: 1
            color: [239, 65, 53]
    """
)


class ParseFlagTests(unittest.TestCase):
    def test_parse_mapping(self):
        spec = parse_flag(
            {
                "aspect": "2",
                "sections": [
                    {
                        "width": "50%",
                        "subsections": [{"width": 1, "height": 0.5, "color": [1, 2, 3]}],
                    }
                ],
            }
        )
        self.assertEqual(spec.aspect, SizeExpression("2"))
        self.assertEqual(len(spec.sections), 1)
        sub = spec.sections[0].subsections[0]
        self.assertEqual(sub.width, SizeExpression("1"))
        self.assertEqual(sub.height, SizeExpression("0.5"))
        self.assertEqual(sub.color, Color(1, 2, 3))

    def test_sections_are_optional(self):
        spec = parse_flag({"aspect": "1"})
        self.assertEqual(spec.sections, ())

    def test_missing_key_names_path(self):
        raw = {"aspect": "1", "sections": [{"width": "1", "subsections": [{"width": "1", "color": [0, 0, 0]}]}]}
        with self.assertRaises(FlagFormatError) as ctx:
            parse_flag(raw)
        self.assertEqual(ctx.exception.path, "sections[0].subsections[0]")
        self.assertIn("height", str(ctx.exception))

    def test_missing_aspect(self):
        with self.assertRaises(FlagFormatError):
            parse_flag({"sections": []})

    def test_wrong_shapes(self):
        with self.assertRaises(FlagFormatError):
            parse_flag(["aspect", "1"])
        with self.assertRaises(FlagFormatError) as ctx:
            parse_flag({"aspect": "1", "sections": {"width": "1"}})
        self.assertEqual(ctx.exception.path, "sections")
        with self.assertRaises(FlagFormatError) as ctx:
            parse_flag({"aspect": True})
        self.assertEqual(ctx.exception.path, "aspect")

    def test_bad_color_names_path(self):
        raw = {"aspect": "1", "sections": [{"width": "1", "subsections": [{"width": "1", "height": "1", "color": "red"}]}]}
        with self.assertRaises(InvalidColor) as ctx:
            parse_flag(raw)
        self.assertIn("sections[0].subsections[0].color", str(ctx.exception))

    def test_sizes_stay_unresolved(self):
        spec = parse_flag({"aspect": "nonsense"})
        self.assertEqual(spec.aspect.text, "nonsense")


class LoadFlagTests(unittest.TestCase):
    def test_load_yaml_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "france.yaml"
            path.write_text(TRICOLOR, encoding="utf-8")
            spec = load_flag(path)

        self.assertEqual(spec.aspect.resolve(), 1.5)
        self.assertEqual([s.width.text for s in spec.sections], ["1/3", "33.3333%", "0.3333333"])
        self.assertEqual(spec.sections[1].subsections[0].color, Color(255, 255, 255))

        bitmap = layout(spec, 30, 20)
        self.assertEqual(bitmap.get(0, 0), Color(0, 85, 164))
        self.assertEqual(bitmap.get(15, 10), Color(255, 255, 255))
        self.assertEqual(bitmap.get(29, 19), Color(239, 65, 53))

    def test_invalid_yaml(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "broken.yaml"
            path.write_text("aspect: [1\nsections: :", encoding="utf-8")
            with self.assertRaises(FlagFormatError):
                load_flag(path)

    def test_missing_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(FlagFormatError):
                load_flag(Path(tmp) / "missing.yaml")


if __name__ == "__main__":
    unittest.main()
