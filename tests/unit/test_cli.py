import json
import sys
import tempfile
import unittest
from contextlib import redirect_stdout
from io import StringIO
from pathlib import Path
from unittest import mock

from PIL import Image

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "apps" / "cli"))
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "packages" / "planner"))
sys.path.insert(0, str(ROOT / "packages" / "palette"))

from autodraw_app import cli
from autodraw_core.config import DrawConfig


def _run(args):
    parser = cli.build_parser()
    parsed = parser.parse_args(args)
    out = StringIO()
    with mock.patch.object(cli, "load_config", return_value=DrawConfig()), redirect_stdout(out):
        rc = parsed.func(parsed)
    return rc, json.loads(out.getvalue())


class CliTests(unittest.TestCase):
    def test_plan_command(self):
        parser = cli.build_parser()
        args = parser.parse_args(["plan", "cat.png", "--mode", "Dots", "--brush", "2"])
        self.assertEqual(args.command, "plan")
        self.assertEqual(args.image, "cat.png")
        self.assertEqual(args.mode, "Dots")
        self.assertEqual(args.brush, 2)
        self.assertEqual(args.palette, "classic")

    def test_preview_requires_out(self):
        parser = cli.build_parser()
        with redirect_stdout(StringIO()), mock.patch("sys.stderr", StringIO()):
            with self.assertRaises(SystemExit):
                parser.parse_args(["preview", "cat.png"])

    def test_config_set_command(self):
        parser = cli.build_parser()
        args = parser.parse_args(["config", "set", "--mode", "Lines", "--delay-ms", "20"])
        self.assertEqual(args.config_cmd, "set")
        self.assertEqual(args.delay_ms, 20)

    def test_plan_summary(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "square.png"
            Image.new("RGB", (10, 10), (0, 0, 0)).save(path)
            rc, payload = _run(["plan", str(path), "--mode", "Lines", "--palette", "mono"])
        self.assertEqual(rc, 0)
        self.assertTrue(payload["success"])
        self.assertEqual(payload["mode"], "Lines")
        self.assertEqual(payload["commands"], payload["primitives"] + 1)
        self.assertEqual(list(payload["colors"]), ["#000000"])

    def test_plan_reports_load_failure(self):
        rc, payload = _run(["plan", "/nonexistent/image.png"])
        self.assertEqual(rc, 2)
        self.assertFalse(payload["success"])

    def test_plan_reports_unknown_brush(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "square.png"
            Image.new("RGB", (10, 10), (0, 0, 0)).save(path)
            rc, payload = _run(["plan", str(path), "--brush", "9"])
        self.assertEqual(rc, 2)
        self.assertFalse(payload["success"])
        self.assertIn("9", payload["error"])

    def test_preview_reports_saved_brush_outside_menu(self):
        saved = DrawConfig()
        saved.draw.brush_index = 9
        with tempfile.TemporaryDirectory() as tmp:
            src = Path(tmp) / "red.png"
            out = Path(tmp) / "preview.png"
            Image.new("RGB", (20, 20), (255, 0, 0)).save(src)
            parsed = cli.build_parser().parse_args(["preview", str(src), "--out", str(out)])
            buf = StringIO()
            with mock.patch.object(cli, "load_config", return_value=saved), redirect_stdout(buf):
                rc = parsed.func(parsed)
            self.assertEqual(rc, 2)
            self.assertFalse(json.loads(buf.getvalue())["success"])
            self.assertFalse(out.exists())

    def test_preview_writes_png(self):
        with tempfile.TemporaryDirectory() as tmp:
            src = Path(tmp) / "red.png"
            out = Path(tmp) / "out" / "preview.png"
            Image.new("RGB", (20, 20), (255, 0, 0)).save(src)
            rc, payload = _run(["preview", str(src), "--out", str(out), "--mode", "Dots", "--brush", "3"])
            self.assertEqual(rc, 0)
            self.assertTrue(out.exists())
            self.assertFalse(payload["report"]["cancelled"])
            with Image.open(out) as img:
                self.assertEqual(img.getpixel((400, 300)), (239, 19, 11))

    def test_palettes(self):
        rc, payload = _run(["palettes"])
        self.assertEqual(rc, 0)
        self.assertEqual(payload["mono"], ["#FFFFFF", "#000000"])


if __name__ == "__main__":
    unittest.main()
