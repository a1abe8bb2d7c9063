import sys
import unittest
from pathlib import Path

from PIL import Image

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "palette"))
sys.path.insert(0, str(ROOT / "packages" / "planner"))

from autodraw_palette import Color, Palette, get_preset
from autodraw_planner.models import BrushConfigError, BrushSize, CanvasSpec, Dot, DrawMode, Line
from autodraw_planner.strokes import plan_dots, plan_lines, plan_strokes

WHITE = Color(255, 255, 255)
RED = Color(255, 0, 0)
GREEN = Color(0, 255, 0)
UNIT_BRUSH = BrushSize(0, 1, 1)


def _strip(colors, vertical=False):
    size = (1, len(colors)) if vertical else (len(colors), 1)
    img = Image.new("RGBA", size)
    for i, c in enumerate(colors):
        img.putpixel((0, i) if vertical else (i, 0), c.key)
    return img


class DotStrategyTests(unittest.TestCase):
    def test_background_image_yields_no_dots(self):
        img = Image.new("RGBA", (40, 30), (255, 255, 255, 255))
        plan = plan_dots(img, get_preset("classic"), CanvasSpec(), BrushSize(1, 9, 6))
        self.assertEqual(plan.primitives, [])

    def test_transparent_image_yields_no_dots(self):
        img = Image.new("RGBA", (40, 30), (0, 0, 0, 0))
        plan = plan_dots(img, get_preset("classic"), CanvasSpec(), BrushSize(0, 4, 2.7))
        self.assertEqual(plan.primitives, [])

    def test_dots_centered_and_sorted_left_to_right(self):
        img = Image.new("RGBA", (8, 4), (255, 0, 0, 255))
        palette = Palette([WHITE, RED])
        plan = plan_dots(img, palette, CanvasSpec(16, 16, WHITE), BrushSize(0, 4, 2))
        # 8x4 fits as 16x8, centered vertically with a 4px inset
        self.assertEqual((plan.sample_width, plan.sample_height), (16, 8))
        self.assertEqual(len(plan.primitives), 8)
        xs = [d.position.x for d in plan.primitives]
        self.assertEqual(xs, sorted(xs))
        first = plan.primitives[0]
        self.assertIsInstance(first, Dot)
        self.assertEqual((first.position.x, first.position.y), (1.5, 5.5))
        self.assertEqual(first.brush_diameter, 4)


class LineStrategyTests(unittest.TestCase):
    def test_run_count_is_transitions_plus_one(self):
        row = [RED, RED, GREEN, GREEN, RED, RED]
        plan = plan_lines(_strip(row), Palette([WHITE, RED, GREEN]), CanvasSpec(6, 1, WHITE), UNIT_BRUSH)
        self.assertEqual(plan.axis, "horizontal")
        self.assertEqual(len(plan.primitives), 3)
        self.assertTrue(all(isinstance(p, Line) for p in plan.primitives))

    def test_background_runs_dropped(self):
        row = [RED, RED, WHITE, GREEN, GREEN, WHITE]
        plan = plan_lines(_strip(row), Palette([WHITE, RED, GREEN]), CanvasSpec(6, 1, WHITE), UNIT_BRUSH)
        self.assertEqual(len(plan.primitives), 2)
        self.assertEqual({p.color for p in plan.primitives}, {RED, GREEN})

    def test_picks_axis_with_fewer_strokes(self):
        column = [RED, RED, GREEN, GREEN, RED, RED]
        plan = plan_lines(
            _strip(column, vertical=True), Palette([WHITE, RED, GREEN]), CanvasSpec(1, 6, WHITE), UNIT_BRUSH
        )
        self.assertEqual(plan.axis, "vertical")
        self.assertEqual(len(plan.primitives), 3)
        self.assertEqual(plan.primitives[0].start.x, plan.primitives[0].end.x)

    def test_tie_keeps_horizontal(self):
        plan = plan_lines(_strip([RED]), Palette([WHITE, RED]), CanvasSpec(1, 1, WHITE), UNIT_BRUSH)
        self.assertEqual(plan.axis, "horizontal")
        self.assertEqual(len(plan.primitives), 1)
        self.assertEqual(plan.primitives[0].length, 0)

    def test_longest_lines_first(self):
        row = [RED, RED, RED, GREEN, RED, RED]
        plan = plan_lines(_strip(row), Palette([WHITE, RED, GREEN]), CanvasSpec(6, 1, WHITE), UNIT_BRUSH)
        self.assertEqual([p.length for p in plan.primitives], [2, 1, 0])
        self.assertEqual([p.color for p in plan.primitives], [RED, RED, GREEN])

    def test_samples_mapped_to_canvas_with_offset(self):
        row = [RED, RED, RED, GREEN, RED, RED]
        plan = plan_lines(
            _strip(row), Palette([WHITE, RED, GREEN]), CanvasSpec(16, 2, WHITE), BrushSize(0, 4, 2)
        )
        longest = plan.primitives[0]
        self.assertEqual((longest.start.x, longest.start.y), (2, 0))
        self.assertEqual((longest.end.x, longest.end.y), (6, 0))
        self.assertEqual(longest.length, 4)
        self.assertEqual(longest.brush_diameter, 2)

    def test_default_brush_sampling_resolution(self):
        img = Image.new("RGBA", (100, 100), (0, 0, 0, 255))
        plan = plan_strokes(img, get_preset("classic"), DrawMode.LINES, 0)
        self.assertEqual((plan.sample_width, plan.sample_height), (222, 222))
        self.assertEqual(len(plan.primitives), 222)


class DispatchTests(unittest.TestCase):
    def test_brush_index_validated_before_sampling(self):
        with self.assertRaises(BrushConfigError):
            plan_strokes(None, get_preset("mono"), "Dots", 9)
        with self.assertRaises(BrushConfigError):
            plan_strokes(None, get_preset("mono"), "Lines", -1)

    def test_unknown_mode(self):
        with self.assertRaises(BrushConfigError):
            plan_strokes(None, get_preset("mono"), "Spray", 0)

    def test_mode_names_case_insensitive(self):
        img = Image.new("RGBA", (4, 4), (0, 0, 0, 255))
        plan = plan_strokes(img, get_preset("mono"), "dots", 0)
        self.assertEqual(plan.mode, DrawMode.DOTS)


if __name__ == "__main__":
    unittest.main()
