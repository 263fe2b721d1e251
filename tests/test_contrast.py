import unittest

from semantic_palette.color import Oklch
from semantic_palette.contrast import (
    apca_contrast,
    apca_lc,
    luminance_y,
    wcag_contrast_ratio,
)

WHITE = Oklch(1.0, 0.0, 0.0)
BLACK = Oklch(0.0, 0.0, 0.0)


class TestLuminance(unittest.TestCase):
    def test_extremes(self):
        self.assertAlmostEqual(luminance_y(WHITE), 1.0, delta=1e-6)
        self.assertAlmostEqual(luminance_y(BLACK), 0.0, delta=1e-9)

    def test_gray_is_lightness_cubed(self):
        self.assertAlmostEqual(luminance_y(Oklch(0.5, 0.0, 0.0)), 0.125, delta=1e-6)

    def test_monotonic_in_lightness(self):
        ys = [luminance_y(Oklch(L / 20.0, 0.05, 220.0)) for L in range(21)]
        for a, b in zip(ys, ys[1:]):
            self.assertLess(a, b)


class TestApca(unittest.TestCase):
    def test_black_on_white(self):
        self.assertAlmostEqual(apca_lc(0.0, 1.0), 106.04, delta=0.1)

    def test_white_on_black(self):
        self.assertAlmostEqual(apca_lc(1.0, 0.0), -107.88, delta=0.1)

    def test_equal_luminance_is_zero(self):
        self.assertEqual(apca_lc(0.3, 0.3), 0.0)

    def test_low_contrast_clips_to_zero(self):
        self.assertEqual(apca_lc(0.17, 0.125), 0.0)

    def test_apca_contrast_is_absolute(self):
        self.assertGreater(apca_contrast(WHITE, BLACK), 100.0)
        self.assertGreater(apca_contrast(BLACK, WHITE), 100.0)


class TestWcag(unittest.TestCase):
    def test_black_white(self):
        self.assertAlmostEqual(wcag_contrast_ratio(BLACK, WHITE), 21.0, delta=0.01)

    def test_symmetric(self):
        a = Oklch(0.3, 0.1, 40.0)
        b = Oklch(0.9, 0.02, 100.0)
        self.assertAlmostEqual(wcag_contrast_ratio(a, b), wcag_contrast_ratio(b, a))


if __name__ == "__main__":
    unittest.main()
