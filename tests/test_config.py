from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from gitt.runtime import config


class ConfigBehaviorTests(unittest.TestCase):
    def test_missing_config_uses_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch("gitt.runtime.config.CONFIG_PATH", Path(tmp) / "config.json"):
                settings = config.load_settings()

        self.assertIsNone(settings.theme)
        self.assertEqual(settings.style, "monokai")
        self.assertEqual(settings.tick_ms, 200)
        self.assertEqual(settings.tick_seconds, 0.2)
        self.assertEqual(settings.list_pane_percent, 35.0)

    def test_valid_values_are_loaded(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            with mock.patch("gitt.runtime.config.CONFIG_PATH", config_path):
                config.save_config({"theme": " ocean ", "style": "friendly", "tick_ms": 50, "list_pane_percent": 60})
                settings = config.load_settings()

        self.assertEqual(settings.theme, "ocean")
        self.assertEqual(settings.style, "friendly")
        self.assertEqual(settings.tick_ms, 50)
        self.assertEqual(settings.list_pane_percent, 60.0)

    def test_invalid_values_fall_back(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            with mock.patch("gitt.runtime.config.CONFIG_PATH", config_path):
                config.save_config({"theme": 3, "style": "", "tick_ms": True, "list_pane_percent": 140})
                settings = config.load_settings()

        self.assertEqual(settings, config.PagerSettings())

    def test_malformed_json_is_ignored(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            config_path.write_text("[not an object", encoding="utf-8")
            with mock.patch("gitt.runtime.config.CONFIG_PATH", config_path):
                self.assertEqual(config.load_config(), {})

    def test_save_theme_name_keeps_other_keys(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "nested" / "config.json"
            with mock.patch("gitt.runtime.config.CONFIG_PATH", config_path):
                config.save_config({"tick_ms": 100})
                config.save_theme_name("ocean")
                config.save_theme_name("  ")
                saved = config.load_config()

        self.assertEqual(saved, {"tick_ms": 100, "theme": "ocean"})


if __name__ == "__main__":
    unittest.main()
