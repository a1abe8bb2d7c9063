import base64
import sys
import tempfile
import unittest
from io import BytesIO
from pathlib import Path

from PIL import Image

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "palette"))
sys.path.insert(0, str(ROOT / "packages" / "planner"))

from autodraw_planner.loader import ImageLoadError, load_image


def _png_bytes(mode="RGB", color=(10, 20, 30)):
    buf = BytesIO()
    Image.new(mode, (3, 2), color).save(buf, format="PNG")
    return buf.getvalue()


class LoaderTests(unittest.TestCase):
    def test_bytes_converted_to_rgba(self):
        img = load_image(_png_bytes())
        self.assertEqual(img.mode, "RGBA")
        self.assertEqual(img.size, (3, 2))
        self.assertEqual(img.getpixel((0, 0)), (10, 20, 30, 255))

    def test_data_url(self):
        url = "data:image/png;base64," + base64.b64encode(_png_bytes()).decode("ascii")
        self.assertEqual(load_image(url).size, (3, 2))

    def test_path(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "img.png"
            path.write_bytes(_png_bytes("L", 128))
            img = load_image(path)
            self.assertEqual(img.getpixel((1, 1)), (128, 128, 128, 255))

    def test_pil_image_passthrough(self):
        img = load_image(Image.new("P", (4, 4)))
        self.assertEqual(img.mode, "RGBA")

    def test_missing_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(ImageLoadError):
                load_image(Path(tmp) / "nope.png")

    def test_corrupt_data(self):
        with self.assertRaises(ImageLoadError):
            load_image(b"\x89PNG\r\n\x1a\nbroken")

    def test_malformed_data_url(self):
        with self.assertRaises(ImageLoadError):
            load_image("data:image/png;base64,@@@")

    def test_unreachable_url(self):
        with self.assertRaises(ImageLoadError):
            load_image("http://127.0.0.1:9/missing.png", timeout_s=1)


if __name__ == "__main__":
    unittest.main()
