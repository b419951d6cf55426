import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "layout"))
sys.path.insert(0, str(ROOT / "packages" / "output"))

from flagview_output import (
    AnsiRenderer,
    ImageRenderer,
    RendererOptionsError,
    UnknownRendererError,
    create_renderer,
    default_renderer_name,
    describe_options,
    list_renderers,
    parse_options,
)


class ParseOptionsTests(unittest.TestCase):
    def test_flow_mapping_body(self):
        self.assertEqual(parse_options("true_color: true, width: 800"), {"true_color": True, "width": 800})
        self.assertEqual(parse_options("output: /tmp/flag.png"), {"output": "/tmp/flag.png"})

    def test_empty(self):
        self.assertEqual(parse_options(None), {})
        self.assertEqual(parse_options("  "), {})

    def test_invalid(self):
        with self.assertRaises(RendererOptionsError):
            parse_options("width: [")


class RegistryTests(unittest.TestCase):
    def test_list_and_default(self):
        self.assertEqual(list_renderers(), ["ansi", "framebuffer", "image"])
        self.assertEqual(default_renderer_name(), "ansi")

    def test_describe_options(self):
        self.assertEqual(describe_options("image"), {"output": None, "width": 640, "height": 480})
        self.assertEqual(describe_options("ansi"), {"true_color": False})
        self.assertEqual(
            {k: str(v) for k, v in describe_options("framebuffer").items()},
            {"device": "/dev/fb0", "console": "/dev/tty"},
        )

    def test_unknown_renderer(self):
        with self.assertRaises(UnknownRendererError) as ctx:
            create_renderer("plotter")
        self.assertIsInstance(ctx.exception, KeyError)
        self.assertIn("plotter", str(ctx.exception))

    def test_create(self):
        self.assertIsInstance(create_renderer("ansi", {"true_color": True}), AnsiRenderer)
        renderer = create_renderer("image", {"output": "flag.png", "width": "32", "height": 16})
        self.assertIsInstance(renderer, ImageRenderer)
        self.assertEqual(renderer.get_size(), (32, 16))

    def test_option_validation(self):
        with self.assertRaises(RendererOptionsError):
            create_renderer("image", {})
        with self.assertRaises(RendererOptionsError):
            create_renderer("image", {"output": "flag.png", "width": 0})
        with self.assertRaises(RendererOptionsError):
            create_renderer("image", {"output": "flag.png", "height": 1.5})
        with self.assertRaises(RendererOptionsError):
            create_renderer("ansi", {"true_color": 3})

    def test_unknown_option_is_ignored(self):
        with self.assertLogs("flagview.output", level="WARNING") as logs:
            renderer = create_renderer("ansi", {"colour": True})
        self.assertFalse(renderer.options.true_color)
        self.assertTrue(any("colour" in line for line in logs.output))


if __name__ == "__main__":
    unittest.main()
