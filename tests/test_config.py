import json
import tempfile
import unittest
from pathlib import Path

from semantic_palette.config import (
    ConfigStatus,
    ConfigValueError,
    EngineConfig,
    config_from_dict,
    load_config,
)
from semantic_palette.roles import InkRole


class TestLoadConfig(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def write(self, name, text):
        path = self.tmp / name
        path.write_text(text, encoding="utf-8")
        return path

    def test_no_path_is_absent(self):
        loaded = load_config(None)
        self.assertIs(loaded.status, ConfigStatus.ABSENT)
        self.assertEqual(loaded.config, EngineConfig())
        self.assertTrue(loaded.used_defaults)

    def test_missing_file_is_absent(self):
        loaded = load_config(self.tmp / "nope.json")
        self.assertIs(loaded.status, ConfigStatus.ABSENT)
        self.assertIn("does not exist", loaded.reason)

    def test_bad_json_is_corrupt(self):
        loaded = load_config(self.write("bad.json", "{not json"))
        self.assertIs(loaded.status, ConfigStatus.CORRUPT)
        self.assertEqual(loaded.config, EngineConfig())
        self.assertTrue(loaded.reason)

    def test_bad_value_is_corrupt(self):
        path = self.write("bad.json", json.dumps({"ramp": {"neutral_chroma_ratio": "x"}}))
        loaded = load_config(path)
        self.assertIs(loaded.status, ConfigStatus.CORRUPT)
        self.assertIn("ramp.neutral_chroma_ratio", loaded.reason)

    def test_overrides_are_applied(self):
        path = self.write(
            "ok.json",
            json.dumps(
                {
                    "ramp": {"neutral_max_chroma": 0.01},
                    "derivatives": {"tint": {"lightness_offset": 0.4}},
                    "contrast": {"default": {"body": 90}, "disabled": {"title": 40}},
                }
            ),
        )
        loaded = load_config(path)
        self.assertIs(loaded.status, ConfigStatus.LOADED)
        self.assertFalse(loaded.used_defaults)

        cfg = loaded.config
        self.assertEqual(cfg.ramp.neutral_max_chroma, 0.01)
        self.assertEqual(cfg.ramp.neutral_chroma_ratio, 0.15)
        self.assertEqual(cfg.derivative("tint").lightness_offset, 0.4)
        self.assertEqual(cfg.derivative("tint").chroma_ratio, 0.25)
        self.assertEqual(cfg.contrast.threshold(InkRole.BODY), 90.0)
        self.assertEqual(cfg.contrast.threshold(InkRole.TITLE, disabled=True), 40.0)
        self.assertEqual(cfg.contrast.threshold(InkRole.META), 45.0)


class TestConfigFromDict(unittest.TestCase):
    def test_round_trip_defaults(self):
        self.assertEqual(config_from_dict(EngineConfig().to_dict()), EngineConfig())

    def test_rejects_unknown_keys(self):
        for raw in (
            {"colors": {}},
            {"ramp": {"hue_shift": 3}},
            {"derivatives": {"glow": {}}},
            {"contrast": {"default": {"caption": 50}}},
            {"contrast": {"hover": {}}},
        ):
            with self.assertRaises(ConfigValueError, msg=raw):
                config_from_dict(raw)

    def test_rejects_bad_bands(self):
        with self.assertRaises(ConfigValueError):
            config_from_dict({"derivatives": {"fill": {"chroma_min": 0.3}}})
        with self.assertRaises(ConfigValueError):
            config_from_dict({"derivatives": {"tint": {"lightness_max": 1.5}}})
        with self.assertRaises(ConfigValueError):
            config_from_dict({"contrast": {"default": {"body": -1}}})
        with self.assertRaises(ConfigValueError):
            config_from_dict({"ramp": {"foundation_chroma_ratio": True}})

    def test_top_level_must_be_object(self):
        with self.assertRaises(ConfigValueError):
            config_from_dict([1, 2, 3])


if __name__ == "__main__":
    unittest.main()
