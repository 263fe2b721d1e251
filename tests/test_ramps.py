import unittest

from semantic_palette.color import Oklch, clamp_to_gamut, is_in_gamut
from semantic_palette.config import EngineConfig, RampShaping
from semantic_palette.errors import InvalidStepTableError
from semantic_palette.primitives import PRIMITIVE_KEYS
from semantic_palette.ramps import (
    DARK_LIGHTNESS_STEPS,
    DEFAULT_DARK_FOUNDATION,
    LIGHT_LIGHTNESS_STEPS,
    generate_brand_derivatives,
    generate_foundation_ramp,
    generate_neutral_ramp,
    generate_primitive_palette,
    validate_steps,
)

BRAND = Oklch(0.55, 0.15, 220.0)
FOUNDATION = Oklch(0.97, 0.005, 0.0)


def lightness(colors):
    return [c.L for c in colors]


class TestStepTables(unittest.TestCase):
    def test_canonical_tables_are_valid(self):
        self.assertEqual(len(validate_steps(LIGHT_LIGHTNESS_STEPS)), 10)
        self.assertEqual(len(validate_steps(DARK_LIGHTNESS_STEPS)), 10)

    def test_wrong_length(self):
        with self.assertRaises(InvalidStepTableError):
            validate_steps(LIGHT_LIGHTNESS_STEPS[:9])

    def test_not_monotonic(self):
        steps = list(LIGHT_LIGHTNESS_STEPS)
        steps[3], steps[4] = steps[4], steps[3]
        with self.assertRaises(InvalidStepTableError):
            validate_steps(steps)

    def test_out_of_range(self):
        with self.assertRaises(InvalidStepTableError):
            validate_steps([1.2] + list(LIGHT_LIGHTNESS_STEPS[1:]))


class TestNeutralRamp(unittest.TestCase):
    def test_light_scenario(self):
        palette = generate_primitive_palette(BRAND, FOUNDATION, LIGHT_LIGHTNESS_STEPS)
        ls = lightness(palette.ramp("N"))
        for a, b in zip(ls, ls[1:]):
            self.assertGreater(a, b)
        self.assertAlmostEqual(ls[0], 0.985)
        self.assertAlmostEqual(ls[-1], 0.12)
        self.assertEqual(palette.direction, "light")

    def test_dark_scenario(self):
        palette = generate_primitive_palette(BRAND, FOUNDATION, DARK_LIGHTNESS_STEPS)
        ls = lightness(palette.ramp("N"))
        for a, b in zip(ls, ls[1:]):
            self.assertLess(a, b)
        self.assertAlmostEqual(ls[0], 0.10)
        self.assertAlmostEqual(ls[-1], 0.94)
        self.assertEqual(palette.direction, "dark")

    def test_chroma_is_capped_and_hue_follows_brand(self):
        ramp = generate_neutral_ramp(BRAND, LIGHT_LIGHTNESS_STEPS, 0.15, 0.03)
        for c in ramp:
            self.assertLessEqual(c.C, 0.03)
            self.assertAlmostEqual(c.H, 220.0)

    def test_zero_ratio_collapses_to_gray(self):
        for c in generate_neutral_ramp(BRAND, LIGHT_LIGHTNESS_STEPS, 0.0, 0.03):
            self.assertEqual(c.C, 0.0)
        for c in generate_neutral_ramp(BRAND, LIGHT_LIGHTNESS_STEPS, 0.15, 0.0):
            self.assertEqual(c.C, 0.0)


class TestFoundationRamp(unittest.TestCase):
    def test_zero_chroma_foundation_is_gray(self):
        ramp = generate_foundation_ramp(Oklch(0.9, 0.0, 120.0), DARK_LIGHTNESS_STEPS, 0.5)
        self.assertTrue(all(c.C == 0.0 for c in ramp))

    def test_foundation_chroma_softened(self):
        ramp = generate_foundation_ramp(Oklch(0.9, 0.04, 80.0), LIGHT_LIGHTNESS_STEPS, 0.5)
        for c in ramp:
            self.assertLessEqual(c.C, 0.02 + 1e-12)
            self.assertAlmostEqual(c.H, 80.0)

    def test_default_foundation_by_direction(self):
        palette = generate_primitive_palette(BRAND, None, DARK_LIGHTNESS_STEPS)
        self.assertAlmostEqual(palette["F0"].H, DEFAULT_DARK_FOUNDATION.H)
        self.assertAlmostEqual(
            palette["F0"].C, DEFAULT_DARK_FOUNDATION.C * 0.5, places=6
        )


class TestBrandDerivatives(unittest.TestCase):
    def test_lightness_bands(self):
        d = generate_brand_derivatives(BRAND)
        self.assertGreater(d["tint"].L, BRAND.L)
        self.assertLess(d["shade"].L, BRAND.L)
        self.assertTrue(0.90 <= d["tint"].L <= 0.97)
        self.assertTrue(0.18 <= d["shade"].L <= 0.35)
        self.assertTrue(0.30 <= d["fill"].L <= 0.50)

    def test_fill_keeps_most_chroma(self):
        d = generate_brand_derivatives(BRAND)
        self.assertGreater(d["fill"].C, d["shade"].C)
        self.assertGreater(d["shade"].C, d["tint"].C)

    def test_gray_brand(self):
        gray = Oklch(0.55, 0.0, 220.0)
        palette = generate_primitive_palette(gray, FOUNDATION, LIGHT_LIGHTNESS_STEPS)
        for c in palette.ramp("N"):
            self.assertEqual(c.C, 0.0)
        for key in ("Bt", "Bs", "Bf"):
            self.assertEqual(palette[key].C, 0.0)


class TestGamutValidity(unittest.TestCase):
    def test_every_primitive_in_gamut(self):
        seeds = [
            BRAND,
            Oklch(0.7, 0.37, 145.0),
            Oklch(0.95, 0.2, 100.0),
            Oklch(0.2, 0.3, 300.0),
            Oklch(0.5, 0.0, 0.0),
        ]
        for brand in seeds:
            for steps in (LIGHT_LIGHTNESS_STEPS, DARK_LIGHTNESS_STEPS):
                palette = generate_primitive_palette(
                    brand, Oklch(0.9, 0.08, 60.0), steps
                )
                for key in PRIMITIVE_KEYS:
                    c = palette[key]
                    self.assertTrue(is_in_gamut(c), f"{key} {c}")
                    self.assertEqual(clamp_to_gamut(c), c)

    def test_config_shaping_is_used(self):
        config = EngineConfig(ramp=RampShaping(0.0, 0.0, 0.0))
        palette = generate_primitive_palette(
            BRAND, FOUNDATION, LIGHT_LIGHTNESS_STEPS, config
        )
        for key in PRIMITIVE_KEYS[:20]:
            self.assertEqual(palette[key].C, 0.0)


if __name__ == "__main__":
    unittest.main()
