import random
import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "palette"))

from autodraw_palette import TRANSPARENT, Color, Palette, PaletteError, distance, get_preset, preset_colors


class PaletteTests(unittest.TestCase):
    def test_exact_match_resolves_to_itself(self):
        palette = get_preset("classic")
        for color in palette.colors:
            self.assertEqual(palette.resolve_nearest(color), color)

    def test_resolves_to_minimum_distance_member(self):
        colors = preset_colors("classic")
        palette = Palette(colors)
        rng = random.Random(7)
        for _ in range(200):
            c = Color(rng.randrange(256), rng.randrange(256), rng.randrange(256), rng.randrange(1, 256))
            got = palette.resolve_nearest(c)
            self.assertIn(got, palette)
            best = min(distance(c, p) for p in colors)
            self.assertEqual(distance(c, got), best)

    def test_tie_keeps_declaration_order(self):
        black = Color(0, 0, 0)
        green = Color(0, 10, 0)
        probe = Color(0, 5, 0)
        self.assertEqual(Palette([black, green]).resolve_nearest(probe), black)
        self.assertEqual(Palette([green, black]).resolve_nearest(probe), green)

    def test_transparent_skips_search_and_cache(self):
        palette = Palette([Color(255, 255, 255)])
        self.assertEqual(palette.resolve_nearest(Color(40, 50, 60, 0)), TRANSPARENT)
        info = palette.cache_info()
        self.assertEqual((info.hits, info.misses, info.size), (0, 0, 0))

    def test_cache_hits_on_repeat(self):
        palette = Palette([Color(0, 0, 0), Color(255, 255, 255)])
        probe = Color(30, 30, 30)
        palette.resolve_nearest(probe)
        palette.resolve_nearest(probe)
        info = palette.cache_info()
        self.assertEqual(info.misses, 1)
        self.assertEqual(info.hits, 1)
        self.assertEqual(info.size, 1)

    def test_new_palette_starts_with_empty_cache(self):
        colors = [Color(0, 0, 0), Color(255, 255, 255)]
        first = Palette(colors)
        first.resolve_nearest(Color(1, 1, 1))
        self.assertEqual(Palette(colors).cache_info().size, 0)

    def test_empty_palette_rejected(self):
        with self.assertRaises(PaletteError):
            Palette([])
        with self.assertRaises(PaletteError):
            Palette.from_entries([])

    def test_duplicates_and_tokens(self):
        red = Color(255, 0, 0)
        palette = Palette.from_entries([(red, "swatch-a"), (Color(0, 0, 255), "swatch-b"), (red, "swatch-c")])
        self.assertEqual(len(palette), 2)
        self.assertEqual(palette.token_for(red), "swatch-a")
        with self.assertRaises(KeyError):
            palette.token_for(Color(1, 1, 1))

    def test_default_token_is_color(self):
        red = Color(255, 0, 0)
        self.assertEqual(Palette([red]).token_for(red), red)


if __name__ == "__main__":
    unittest.main()
