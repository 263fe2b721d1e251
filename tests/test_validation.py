import unittest

from semantic_palette.color import Oklch
from semantic_palette.contrast import wcag_contrast_ratio
from semantic_palette.validation import (
    BASE_L_MAX,
    BASE_L_MIN,
    allowable_base_lightness_range,
    derive_brand_text,
    is_base_lightness_allowed,
    validate_color_pair,
)

WHITE_BASE = Oklch(0.98, 0.0, 0.0)
DARK_BRAND = Oklch(0.35, 0.12, 260.0)


class TestBrandText(unittest.TestCase):
    def test_reduces_chroma(self):
        text = derive_brand_text(Oklch(0.5, 0.1, 30.0))
        self.assertAlmostEqual(text.C, 0.09)
        self.assertEqual(text.L, 0.5)
        self.assertEqual(text.H, 30.0)


class TestValidatePair(unittest.TestCase):
    def test_valid_pair(self):
        result = validate_color_pair(WHITE_BASE, DARK_BRAND)
        self.assertTrue(result.valid, result.issues)
        self.assertGreaterEqual(result.contrast_ratio, 4.5)

    def test_insufficient_contrast(self):
        result = validate_color_pair(Oklch(0.6, 0.0, 0.0), Oklch(0.55, 0.1, 220.0))
        self.assertFalse(result.valid)
        self.assertIn("INSUFFICIENT_CONTRAST", result.codes())

    def test_range_issues(self):
        result = validate_color_pair(Oklch(0.02, 0.2, 0.0), DARK_BRAND)
        self.assertIn("BASE_LIGHTNESS", result.codes())
        self.assertIn("BASE_CHROMA", result.codes())

        result = validate_color_pair(WHITE_BASE, Oklch(0.97, 0.02, 90.0))
        self.assertIn("BRAND_LIGHTNESS", result.codes())


class TestAllowableRange(unittest.TestCase):
    def test_dark_brand_gets_light_bases(self):
        lo, hi = allowable_base_lightness_range(DARK_BRAND)
        self.assertEqual(hi, BASE_L_MAX)
        self.assertGreater(lo, BASE_L_MIN)
        brand_text = derive_brand_text(DARK_BRAND)
        self.assertGreaterEqual(
            wcag_contrast_ratio(brand_text, Oklch(lo, 0.0, DARK_BRAND.H)), 4.5
        )
        self.assertTrue(is_base_lightness_allowed(0.98, DARK_BRAND))
        self.assertFalse(is_base_lightness_allowed(0.3, DARK_BRAND))

    def test_light_brand_gets_dark_bases(self):
        brand = Oklch(0.9, 0.05, 100.0)
        lo, hi = allowable_base_lightness_range(brand)
        self.assertEqual(lo, BASE_L_MIN)
        self.assertLess(hi, BASE_L_MAX)
        self.assertTrue(is_base_lightness_allowed(0.1, brand))
        self.assertFalse(is_base_lightness_allowed(0.9, brand))

    def test_mid_gray_brand_has_no_range(self):
        brand = Oklch(0.558, 0.0, 0.0)
        self.assertIsNone(allowable_base_lightness_range(brand))
        self.assertFalse(is_base_lightness_allowed(0.5, brand))


if __name__ == "__main__":
    unittest.main()
